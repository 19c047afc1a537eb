# 💶 storefront/domain/currency/helpers.py
"""
💶 Чисті функції валютної моделі та парсингу цін.

🔹 Визначення валюти за локаллю та зворотне відображення валюта → локаль / символ.
🔹 Конвертація суми за курсом з округленням до 2 знаків (half-up) і захистом від NaN/Infinity.
🔹 Нормалізація «брудних» рядків цін («1 234,56 zł») у float.

Жодна функція модуля не кидає винятків: будь-які невалідні значення згортаються до 0.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                   # 🧾 Логування fallback-ів
import math                                                      # 🧮 isfinite / floor
import os                                                        # 🌍 Змінні локалі процесу
import re                                                        # 🧪 Очищення рядків цін
import sys                                                       # 📏 float epsilon
from typing import Mapping, Optional, Union                      # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.interfaces import (
    BASE_CURRENCY,
    CurrencyLike,
    SupportedCurrency,
)
from storefront.shared.utils.logger import LOG_NAME              # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.currency")


# ================================
# 📚 ТАБЛИЦІ ВАЛЮТ
# ================================
_LOCALE_BY_CURRENCY: Mapping[SupportedCurrency, str] = {
    SupportedCurrency.EUR: "en-US",                              # 🇪🇺 Євро показуємо в англійській локалі
    SupportedCurrency.PLN: "pl-PL",                              # 🇵🇱 Злотий
    SupportedCurrency.UAH: "uk-UA",                              # 🇺🇦 Гривня
}

_SYMBOL_BY_CURRENCY: Mapping[SupportedCurrency, str] = {
    SupportedCurrency.EUR: "€",
    SupportedCurrency.PLN: "zł",
    SupportedCurrency.UAH: "₴",
}

_AMBIENT_LOCALE_VARS = ("LC_ALL", "LC_MESSAGES", "LANG")         # 🌍 Порядок як у POSIX

_PRICE_NOISE_RE = re.compile(r"[^0-9.,-]")                       # 🧼 Все, крім цифр і роздільників
_LEADING_FLOAT_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")     # 🔢 Найдовший префікс-число


# ================================
# 🌍 ЛОКАЛЬ → ВАЛЮТА
# ================================
def detect_ambient_locale() -> Optional[str]:
    """Повертає локаль процесу зі змінних середовища (`LC_ALL` → `LC_MESSAGES` → `LANG`)."""
    for var in _AMBIENT_LOCALE_VARS:
        value = (os.environ.get(var) or "").strip()
        if value and value not in ("C", "POSIX"):
            return value.split(".", 1)[0]                        # ✂️ "uk_UA.UTF-8" → "uk_UA"
    return None


def detect_currency_from_locale(locale: Optional[str] = None) -> SupportedCurrency:
    """
    🌍 Визначає валюту відображення за тегом локалі.

    Порівняння — пошук підрядка без урахування регістру:
    "pl" → PLN, "ua" або "uk" → UAH, інакше EUR (включно з `None`).
    """
    if not locale:
        return BASE_CURRENCY

    normalized = locale.lower()
    if "pl" in normalized:
        return SupportedCurrency.PLN
    if "ua" in normalized or "uk" in normalized:
        return SupportedCurrency.UAH
    return SupportedCurrency.EUR


def get_locale_for_currency(currency: CurrencyLike) -> str:
    """Тег локалі для валюти; невідома валюта → локаль EUR."""
    code = SupportedCurrency.coerce(currency) or SupportedCurrency.EUR
    return _LOCALE_BY_CURRENCY.get(code, _LOCALE_BY_CURRENCY[SupportedCurrency.EUR])


def get_currency_symbol(currency: CurrencyLike) -> str:
    """Символ валюти; невідома валюта → «€»."""
    code = SupportedCurrency.coerce(currency) or SupportedCurrency.EUR
    return _SYMBOL_BY_CURRENCY.get(code, "€")


# ================================
# 🔁 КОНВЕРТАЦІЯ
# ================================
def _round_half_up(value: float) -> int:
    """Округлення як `Math.round`: x.5 завжди вгору."""
    return math.floor(value + 0.5)


def convert_price_value(value: float, exchange_rate: float) -> float:
    """
    🔁 Множить суму на курс і округлює до 2 знаків (half-up).

    Args:
        value: Сума в базовій валюті.
        exchange_rate: Курс базової валюти до валюти відображення.

    Returns:
        float: Округлена сума або 0, якщо на будь-якому кроці з'явився NaN/Infinity.
    """
    try:
        converted = float(value) * float(exchange_rate)
    except (TypeError, ValueError, OverflowError):
        logger.debug("🚫 convert_price_value: невалідні аргументи %r × %r", value, exchange_rate)
        return 0.0
    if not math.isfinite(converted):
        return 0.0

    scaled = (converted + sys.float_info.epsilon) * 100          # 📐 Та сама float-арифметика, що й у вітрині
    if not math.isfinite(scaled):
        return 0.0
    rounded = _round_half_up(scaled) / 100
    return rounded if math.isfinite(rounded) else 0.0


# ================================
# 🧾 ПАРСИНГ ЦІН
# ================================
def _is_number(value: object) -> bool:
    """True для int/float (bool не вважаємо числом)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def parse_leading_float(text: str) -> Optional[float]:
    """
    Розбирає найдовший префікс-число рядка (семантика `parseFloat`).

    Повертає None, якщо на початку рядка немає числа.
    """
    match = _LEADING_FLOAT_RE.match(text)
    if not match:
        return None
    parsed = float(match.group(0))
    return parsed if math.isfinite(parsed) else None


def strip_price_noise(text: str, *, all_commas: bool = False) -> str:
    """Лишає лише цифри, `,`, `.`, `-` і замінює першу (або всі) кому на крапку."""
    cleaned = _PRICE_NOISE_RE.sub("", text)
    return cleaned.replace(",", ".") if all_commas else cleaned.replace(",", ".", 1)


def parse_price_string(value: Union[float, int, str, None]) -> float:
    """
    🧾 Нормалізує будь-яке представлення ціни у float.

    - число → як є, якщо скінченне, інакше 0;
    - None → 0;
    - рядок → очищення, перша кома → крапка, розбір префікса; 0, якщо не вдалося.
    """
    if _is_number(value):
        try:
            number = float(value)                                # type: ignore[arg-type]
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    if value is None:
        return 0.0

    parsed = parse_leading_float(strip_price_noise(str(value)))
    if parsed is None:
        logger.debug("🚫 parse_price_string: не вдалося розібрати %r → 0", value)
        return 0.0
    return parsed
