# 🛒 storefront/domain/cart/cart.py
"""
🛒 Кошик покупця: впорядкований набір рядків та операції над ним.

🔹 Нормалізує рядок при додаванні: числові ціни + заповнені `base_price` / `base_special_price`.
🔹 Додавання існуючого товару збільшує кількість, зміна кількості не опускається нижче 1.
🔹 Перемикання складу копіює ціни обраного складу в рядок.
🔹 `to_payload` / `from_payload` — camelCase-словники для зовнішнього сховища (сесія, localStorage, БД).

Рядки іммʼютабельні (`CartLineItem` — frozen dataclass), тож кожна зміна замінює рядок копією.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування операцій кошика
from dataclasses import replace                                     # 🔁 Копії frozen-рядків
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.cart.totals import CartTotals
from storefront.domain.currency.helpers import parse_price_string
from storefront.domain.currency.interfaces import ICurrencyContext
from storefront.domain.pricing.entities import CartLineItem, PriceValue, WarehousePrice
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.cart")


# ================================
# 🧼 НОРМАЛІЗАЦІЯ
# ================================
def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _numeric(value: PriceValue) -> float:
    return float(value) if _is_number(value) else parse_price_string(value)  # type: ignore[arg-type]


def _numeric_optional(value: PriceValue) -> Optional[float]:
    return None if value is None else _numeric(value)


def _normalise_warehouse(warehouse: WarehousePrice) -> WarehousePrice:
    base_price = warehouse.base_price if _is_number(warehouse.base_price) else parse_price_string(warehouse.price)
    base_special_price: Optional[float] = None
    if warehouse.special_price is not None:
        base_special_price = (
            warehouse.base_special_price
            if _is_number(warehouse.base_special_price)
            else parse_price_string(warehouse.special_price)
        )
    return replace(
        warehouse,
        price=_numeric(warehouse.price),
        special_price=_numeric_optional(warehouse.special_price),
        base_price=base_price,
        base_special_price=base_special_price,
    )


def normalise_cart_item(item: CartLineItem) -> CartLineItem:
    """
    🧼 Приводить ціни рядка до чисел і заповнює базові ціни.

    `base_price`: власне значення рядка → обраний склад → розібраний `price`.
    `base_special_price`: власне значення → обраний склад → розібраний `special_price` (або None).
    """
    warehouse = item.find_warehouse()

    if _is_number(item.base_price):
        base_price: float = item.base_price                         # type: ignore[assignment]
    elif warehouse is not None and _is_number(warehouse.base_price):
        base_price = warehouse.base_price                           # type: ignore[assignment]
    else:
        base_price = parse_price_string(item.price)

    base_special_price: Optional[float]
    if _is_number(item.base_special_price):
        base_special_price = item.base_special_price
    elif warehouse is not None and _is_number(warehouse.base_special_price):
        base_special_price = warehouse.base_special_price
    elif item.special_price is not None:
        base_special_price = parse_price_string(item.special_price)
    else:
        base_special_price = None

    return replace(
        item,
        price=_numeric(item.price),
        special_price=_numeric_optional(item.special_price),
        base_price=base_price,
        base_special_price=base_special_price,
        available_warehouses=tuple(_normalise_warehouse(wh) for wh in item.available_warehouses),
    )


# ================================
# 🛒 КОШИК
# ================================
class Cart:
    """🛒 Впорядкований набір рядків кошика одного покупця."""

    def __init__(self, items: Iterable[CartLineItem] = ()) -> None:
        self._items: List[CartLineItem] = [normalise_cart_item(item) for item in items]

    # ================================
    # 🔍 ЧИТАННЯ
    # ================================
    @property
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> Optional[CartLineItem]:
        return next((item for item in self._items if item.id == item_id), None)

    def total_items(self) -> int:
        """Кількість одиниць товару (сума quantity)."""
        return sum(item.quantity for item in self._items)

    def totals(self, currency: ICurrencyContext) -> CartTotals:
        """Агрегатор сум поверх поточного вмісту кошика."""
        return CartTotals(self._items, currency)

    # ================================
    # ✏️ ЗМІНИ
    # ================================
    def add(self, item: CartLineItem) -> CartLineItem:
        """Додає товар; якщо він уже є — збільшує кількість на 1."""
        for index, existing in enumerate(self._items):
            if existing.id == item.id:
                updated = replace(existing, quantity=existing.quantity + 1)
                self._items[index] = updated
                logger.debug("➕ Кількість %s → %d", item.id, updated.quantity)
                return updated

        added = replace(normalise_cart_item(item), quantity=1)
        self._items.append(added)
        logger.info("🛒 Додано товар %s (склад=%s)", added.id, added.warehouse_id)
        return added

    def update_quantity(self, item_id: str, change: int) -> Optional[CartLineItem]:
        """Змінює кількість на `change`, не опускаючи нижче 1."""
        for index, existing in enumerate(self._items):
            if existing.id == item_id:
                updated = replace(existing, quantity=max(1, existing.quantity + change))
                self._items[index] = updated
                return updated
        logger.debug("❓ update_quantity: товар %s відсутній у кошику", item_id)
        return None

    def remove(self, item_id: str) -> None:
        self._items = [item for item in self._items if item.id != item_id]

    def update_warehouse(self, item_id: str, warehouse_id: str) -> Optional[CartLineItem]:
        """
        🏬 Перемикає рядок на інший склад і копіює його ціни.

        Невідомий товар або склад ігнорується (повертає None).
        """
        for index, existing in enumerate(self._items):
            if existing.id != item_id or not existing.available_warehouses:
                continue
            selected = existing.find_warehouse(warehouse_id)
            if selected is None:
                logger.warning("⚠️ Склад %s недоступний для товару %s", warehouse_id, item_id)
                return None

            normalised = _normalise_warehouse(selected)
            updated = replace(
                existing,
                warehouse_id=selected.warehouse_id,
                warehouse_name=selected.warehouse_name,
                warehouse_country=selected.warehouse_country,
                price=normalised.price,
                special_price=normalised.special_price,
                base_price=normalised.base_price,
                base_special_price=normalised.base_special_price,
            )
            self._items[index] = updated
            logger.info("🏬 Товар %s переведено на склад %s", item_id, warehouse_id)
            return updated

        logger.debug("❓ update_warehouse: товар %s без складів або відсутній", item_id)
        return None

    def clear(self) -> None:
        self._items.clear()

    # ================================
    # 💾 СЕРІАЛІЗАЦІЯ
    # ================================
    def to_payload(self) -> List[Dict[str, Any]]:
        return [item.to_mapping() for item in self._items]

    @classmethod
    def from_payload(cls, payload: Any) -> "Cart":
        """Відновлює кошик зі збереженого списку; некоректні записи пропускаються."""
        if not isinstance(payload, list):
            logger.warning("⚠️ Збережений кошик має неочікуваний формат: %s", type(payload).__name__)
            return cls()

        items: List[CartLineItem] = []
        for entry in payload:
            if not isinstance(entry, Mapping) or not entry.get("id"):
                logger.warning("⚠️ Пропущено некоректний рядок кошика: %r", entry)
                continue
            items.append(CartLineItem.from_mapping(entry))
        return cls(items)
