# 🛍️ storefront/__init__.py
"""
🛍️ storefront — ціни та валюти вітрини інтернет-магазину.

🔹 Валютна модель: локаль → валюта, символи, конвертація, парсинг цін.
🔹 Ціни: знижки, резолвер ціни за складами, ціни каталогу.
🔹 Кошик: операції над рядками та агрегатор сум.
🔹 Інфраструктура: контекст валюти, менеджер курсів (HTTP + файловий кеш).
"""

from storefront.domain.cart import Cart, CartTotals, normalise_cart_item
from storefront.domain.currency import (
    SupportedCurrency,
    convert_price_value,
    detect_currency_from_locale,
    get_currency_symbol,
    get_locale_for_currency,
    parse_price_string,
)
from storefront.domain.pricing import (
    CartLineItem,
    CatalogPricing,
    WarehousePrice,
    calculate_discount_percentage,
    resolve_base_unit_price,
)
from storefront.infrastructure.currency import CurrencyContext, ExchangeRateManager

__version__ = "0.1.0"

__all__ = [
    "Cart",
    "CartLineItem",
    "CartTotals",
    "CatalogPricing",
    "CurrencyContext",
    "ExchangeRateManager",
    "SupportedCurrency",
    "WarehousePrice",
    "calculate_discount_percentage",
    "convert_price_value",
    "detect_currency_from_locale",
    "get_currency_symbol",
    "get_locale_for_currency",
    "normalise_cart_item",
    "parse_price_string",
    "resolve_base_unit_price",
]
