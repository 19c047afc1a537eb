# 💱 storefront/infrastructure/currency/currency_context.py
"""
💱 Контекст валюти відображення: активна валюта, курс, конвертація та форматування.

🔹 Реалізує `ICurrencyContext`, з яким працює `CartTotals`.
🔹 Форматує суми за правилами локалі валюти (`en-US`, `pl-PL`, `uk-UA`).
🔹 Контекст — знімок: курс фіксується на момент створення і не змінюється.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування вибору валюти
import math                                                         # 🧮 isfinite
from dataclasses import dataclass                                   # 🧱 Frozen-контекст
from decimal import ROUND_HALF_UP, Decimal                          # 💰 Округлення для відображення
from typing import Mapping, Optional, Union                         # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.helpers import (
    convert_price_value,
    detect_ambient_locale,
    detect_currency_from_locale,
    get_currency_symbol,
    get_locale_for_currency,
)
from storefront.domain.currency.interfaces import BASE_CURRENCY, CurrencyLike, SupportedCurrency
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency")

NBSP = "\u00a0"                                                   # ⎵ Нерозривний пробіл

DEFAULT_FALLBACK_RATES: Mapping[str, float] = {
    SupportedCurrency.EUR.value: 1.0,
    SupportedCurrency.PLN.value: 4.5,
    SupportedCurrency.UAH.value: 40.0,
}


# ================================
# 🌍 ПРАВИЛА ФОРМАТУВАННЯ ЛОКАЛЕЙ
# ================================
@dataclass(frozen=True, slots=True)
class _NumberStyle:
    decimal: str
    group: str
    min_grouping_digits: int                                        # 🇵🇱 pl-PL не групує 4-значні числа
    symbol_first: bool
    symbol_gap: str


_STYLES: Mapping[str, _NumberStyle] = {
    "en-US": _NumberStyle(decimal=".", group=",", min_grouping_digits=1, symbol_first=True, symbol_gap=""),
    "pl-PL": _NumberStyle(decimal=",", group=NBSP, min_grouping_digits=2, symbol_first=False, symbol_gap=NBSP),
    "uk-UA": _NumberStyle(decimal=",", group=NBSP, min_grouping_digits=1, symbol_first=False, symbol_gap=NBSP),
}


def _group_digits(digits: str, style: _NumberStyle) -> str:
    if len(digits) < 4 + (style.min_grouping_digits - 1):
        return digits
    head = len(digits) % 3 or 3
    parts = [digits[:head]] + [digits[i:i + 3] for i in range(head, len(digits), 3)]
    return style.group.join(parts)


def format_currency_amount(value: float, currency: CurrencyLike) -> str:
    """Форматує суму як ціну у валюті (2 знаки, роздільники та символ локалі)."""
    code = SupportedCurrency.coerce(currency) or BASE_CURRENCY
    style = _STYLES[get_locale_for_currency(code)]
    symbol = get_currency_symbol(code)

    amount = Decimal(repr(float(value))) if math.isfinite(value) else Decimal("0")
    quantized = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    integer_part, fraction_part = f"{abs(quantized):.2f}".split(".")
    number = f"{_group_digits(integer_part, style)}{style.decimal}{fraction_part}"

    if style.symbol_first:
        return f"{sign}{symbol}{style.symbol_gap}{number}"
    return f"{sign}{number}{style.symbol_gap}{symbol}"


# ================================
# 💱 КОНТЕКСТ
# ================================
@dataclass(frozen=True)
class CurrencyContext:
    """Знімок активної валюти та курсу базова → валюта відображення."""

    currency_code: SupportedCurrency = BASE_CURRENCY
    exchange_rate: float = 1.0
    base_currency: SupportedCurrency = BASE_CURRENCY

    def __post_init__(self) -> None:
        code = SupportedCurrency.coerce(self.currency_code) or BASE_CURRENCY
        object.__setattr__(self, "currency_code", code)
        rate = _safe_rate(self.exchange_rate)
        if code == self.base_currency:
            rate = 1.0                                              # 🏦 Базова валюта завжди 1:1
        object.__setattr__(self, "exchange_rate", rate)

    @classmethod
    def for_currency(
        cls,
        currency: CurrencyLike,
        rates: Optional[Mapping[str, float]] = None,
    ) -> "CurrencyContext":
        """Контекст для валюти з курсом із `rates` (або з резервної таблиці)."""
        code = SupportedCurrency.coerce(currency) or BASE_CURRENCY
        table = rates if rates is not None else DEFAULT_FALLBACK_RATES
        rate = table.get(code.value)
        if _safe_rate(rate) <= 0:
            rate = DEFAULT_FALLBACK_RATES.get(code.value, 1.0)
            logger.info("ℹ️ Курс для %s відсутній, використано резервний %s", code.value, rate)
        return cls(currency_code=code, exchange_rate=float(rate))  # type: ignore[arg-type]

    @classmethod
    def for_locale(
        cls,
        locale: Optional[str] = None,
        rates: Optional[Mapping[str, float]] = None,
    ) -> "CurrencyContext":
        """Визначає валюту за локаллю (або локаллю процесу, якщо `locale` не задано)."""
        effective = locale if locale is not None else detect_ambient_locale()
        currency = detect_currency_from_locale(effective)
        logger.debug("🌍 Локаль %r → валюта %s", effective, currency.value)
        return cls.for_currency(currency, rates)

    @property
    def locale(self) -> str:
        return get_locale_for_currency(self.currency_code)

    @property
    def symbol(self) -> str:
        return get_currency_symbol(self.currency_code)

    def convert_price(self, base_value: float) -> float:
        return convert_price_value(base_value, self.exchange_rate)

    def format_price(self, value: float) -> str:
        return format_currency_amount(value, self.currency_code)

    def format_price_from_base(self, base_value: float) -> str:
        return self.format_price(self.convert_price(base_value))


def _safe_rate(rate: Union[float, int, None, object]) -> float:
    """Курс як float; некоректний (None, NaN, ≤ 0) → 0."""
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return 0.0
    value = float(rate)
    return value if math.isfinite(value) and value > 0 else 0.0
