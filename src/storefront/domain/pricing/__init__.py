# 💸 storefront/domain/pricing/__init__.py
"""
💸 Пакет `domain.pricing` публікує сутності цін, правила знижок та резолвер ціни.

🔹 `entities.py` — `WarehousePrice`, `CartLineItem`, записи каталогу.
🔹 `discount.py` — `calculate_discount_percentage`.
🔹 `resolver.py` — `resolve_base_unit_price` (складські ціни з fallback-ланцюжком).
🔹 `catalog.py` — `CatalogPricing` для вибору ціни картки товару.
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (
    CartLineItem,
    CatalogItem,
    CatalogItemPrice,
    PriceValue,
    Warehouse,
    WarehousePrice,
)
from .discount import calculate_discount_percentage
from .resolver import resolve_base_unit_price
from .catalog import CatalogPricing, ItemPriceView


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # Сутності
    "CartLineItem",
    "CatalogItem",
    "CatalogItemPrice",
    "PriceValue",
    "Warehouse",
    "WarehousePrice",
    # Правила
    "calculate_discount_percentage",
    "resolve_base_unit_price",
    # Каталог
    "CatalogPricing",
    "ItemPriceView",
]
