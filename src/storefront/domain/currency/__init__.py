# 💱 storefront/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` публікує валютну модель вітрини.

🔹 `interfaces.py` — `SupportedCurrency`, `ExchangeRateRecord`, протоколи `ICurrencyContext`
    та `IExchangeRateProvider`.
🔹 `helpers.py` — чисті функції: визначення валюти за локаллю, символи, конвертація, парсинг цін.
"""

# 🧩 Внутрішні модулі проєкту
from .interfaces import (
    BASE_CURRENCY,               # 🏦 Базова валюта каталогу (EUR)
    CurrencyLike,                # 🔤 Enum або рядок
    ExchangeRateRecord,          # 🧾 Запис курсу з API
    ICurrencyContext,            # 🤝 Активна валюта для агрегатора
    IExchangeRateProvider,       # 📈 Джерело курсів
    SupportedCurrency,           # 💱 EUR / PLN / UAH
)
from .helpers import (
    convert_price_value,
    detect_ambient_locale,
    detect_currency_from_locale,
    get_currency_symbol,
    get_locale_for_currency,
    parse_price_string,
)


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    "BASE_CURRENCY",
    "CurrencyLike",
    "ExchangeRateRecord",
    "ICurrencyContext",
    "IExchangeRateProvider",
    "SupportedCurrency",
    "convert_price_value",
    "detect_ambient_locale",
    "detect_currency_from_locale",
    "get_currency_symbol",
    "get_locale_for_currency",
    "parse_price_string",
]
