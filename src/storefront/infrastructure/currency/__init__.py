# 💱 storefront/infrastructure/currency/__init__.py
"""
💱 Інфраструктурні сервіси валют.

🔹 `CurrencyContext` — активна валюта, конвертація та форматування цін.
🔹 `ExchangeRateManager` — курси з API, файловий кеш, ручні оверрайди.
🔹 `CurrencySettings` — явні налаштування менеджера.
"""

from __future__ import annotations

from .currency_context import DEFAULT_FALLBACK_RATES, CurrencyContext, format_currency_amount
from .settings import CurrencySettings
from .exchange_rate_manager import ExchangeRateManager

__all__ = [
    "CurrencyContext",
    "CurrencySettings",
    "DEFAULT_FALLBACK_RATES",
    "ExchangeRateManager",
    "format_currency_amount",
]
