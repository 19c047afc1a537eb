# 📚 storefront/domain/pricing/catalog.py
"""
📚 Вибір ціни каталогу для відображення та проєкція складських цін у кошик.

🔹 `CatalogPricing.get_item_price` — обирає склад за пріоритетом:
    бажана країна з наявністю → бажана країна → будь-який склад з наявністю → перший запис.
🔹 `CatalogPricing.get_available_warehouses` — перетворює таблицю цін товару у `WarehousePrice`
    для рядка кошика.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування вибору складу
from dataclasses import dataclass                                   # 🧱 DTO результату
from typing import Callable, Iterable, Optional, Tuple              # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.pricing.entities import CatalogItem, CatalogItemPrice, WarehousePrice
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing.catalog")

DEFAULT_COUNTRY_CODE = "PL"                                         # 🇵🇱 Основний ринок
UNKNOWN_WAREHOUSE = "Unknown Warehouse"
UNKNOWN_COUNTRY = "Unknown Country"


# ================================
# 🧾 DTO
# ================================
@dataclass(frozen=True, slots=True)
class ItemPriceView:
    """Ціна товару для картки каталогу."""

    price: float
    original_price: Optional[float]                                 # 🏷️ Лише коли діє акція
    in_stock: bool
    quantity: int
    warehouse_id: str
    warehouse_name: Optional[str] = None
    warehouse_country: Optional[str] = None
    displayed_name: Optional[str] = None


EMPTY_PRICE_VIEW = ItemPriceView(
    price=0.0,
    original_price=None,
    in_stock=False,
    quantity=0,
    warehouse_id="",
)


def _first(prices: Iterable[CatalogItemPrice], predicate: Callable[[CatalogItemPrice], bool]) -> Optional[CatalogItemPrice]:
    return next((entry for entry in prices if predicate(entry)), None)


# ================================
# 💼 СЕРВІС
# ================================
class CatalogPricing:
    """Правила відображення цін каталогу для обраної країни."""

    def __init__(self, preferred_country_code: str = DEFAULT_COUNTRY_CODE) -> None:
        self._country = preferred_country_code

    @property
    def preferred_country_code(self) -> str:
        return self._country

    def _pick_price(self, item: CatalogItem) -> Optional[CatalogItemPrice]:
        prices = item.item_prices
        in_country = lambda entry: entry.warehouse.country == self._country  # noqa: E731
        return (
            _first(prices, lambda entry: in_country(entry) and entry.quantity > 0)
            or _first(prices, in_country)
            or _first(prices, lambda entry: entry.quantity > 0)
            or (prices[0] if prices else None)
        )

    def get_item_price(self, item: CatalogItem) -> ItemPriceView:
        """Повертає ціну для відображення або порожній результат, якщо цін немає."""
        chosen = self._pick_price(item)
        if chosen is None:
            logger.debug("📭 Товар %s не має цін на жодному складі", item.id)
            return EMPTY_PRICE_VIEW

        warehouse = chosen.warehouse
        has_promotion = chosen.promotion_price is not None
        return ItemPriceView(
            price=chosen.promotion_price if has_promotion else chosen.price,
            original_price=chosen.price if chosen.promotion_price else None,
            in_stock=chosen.quantity > 0,
            quantity=chosen.quantity,
            warehouse_id=warehouse.id,
            warehouse_name=warehouse.name or warehouse.displayed_name or None,
            warehouse_country=warehouse.country or None,
            displayed_name=warehouse.displayed_name or None,
        )

    def get_available_warehouses(self, item: CatalogItem) -> Tuple[WarehousePrice, ...]:
        """Проєктує таблицю цін товару у записи складів для кошика."""
        return tuple(
            WarehousePrice(
                warehouse_id=entry.warehouse.id,
                warehouse_name=entry.warehouse.name or entry.warehouse.displayed_name or UNKNOWN_WAREHOUSE,
                warehouse_country=entry.warehouse.country or UNKNOWN_COUNTRY,
                display_name=entry.warehouse.displayed_name or None,
                price=entry.promotion_price if entry.promotion_price is not None else entry.price,
                special_price=entry.promotion_price or None,
                in_stock=entry.quantity > 0,
                quantity=entry.quantity,
            )
            for entry in item.item_prices
        )
