# 📦 storefront/domain/pricing/entities.py
"""
📦 Іммʼютабельні сутності цін для кошика та каталогу.

🔹 `WarehousePrice` — ціна товару на конкретному складі (regular / special / pre-converted base).
🔹 `CartLineItem` — рядок кошика з явними опційними полями замість «any»-записів.
🔹 `Warehouse`, `CatalogItemPrice`, `CatalogItem` — записи каталогу, які віддає шар даних.

Шар даних віддає camelCase-словники (`basePrice`, `availableWarehouses`, …);
`from_mapping` приймає і camelCase, і snake_case ключі.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування пропущених записів
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME                 # 🏷️ Базове імʼя логера

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")


# ================================
# 🔤 ТИПИ
# ================================
PriceValue = Union[float, int, str, None]                           # 💵 Сира ціна: число або рядок


# ================================
# 🧰 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Повертає перше наявне значення серед ключів (camelCase / snake_case)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _positive_int(value: Any, default: int = 1) -> int:
    """Кількість у кошику — ціле ≥ 1; сміття → default."""
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _non_negative_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


# ================================
# 🏬 СКЛАДСЬКА ЦІНА
# ================================
@dataclass(frozen=True, slots=True)
class WarehousePrice:
    """Ціна товару на одному складі."""

    warehouse_id: str
    price: PriceValue = None
    special_price: PriceValue = None
    base_price: Optional[float] = None                              # 💶 Вже в базовій валюті
    base_special_price: Optional[float] = None
    warehouse_name: Optional[str] = None
    warehouse_country: Optional[str] = None
    display_name: Optional[str] = None
    in_stock: bool = False
    quantity: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "WarehousePrice":
        return cls(
            warehouse_id=str(_pick(data, "warehouseId", "warehouse_id", default="") or ""),
            price=_pick(data, "price"),
            special_price=_pick(data, "specialPrice", "special_price"),
            base_price=_pick(data, "basePrice", "base_price"),
            base_special_price=_pick(data, "baseSpecialPrice", "base_special_price"),
            warehouse_name=_optional_str(_pick(data, "warehouseName", "warehouse_name")),
            warehouse_country=_optional_str(_pick(data, "warehouseCountry", "warehouse_country")),
            display_name=_optional_str(_pick(data, "displayName", "display_name")),
            in_stock=bool(_pick(data, "inStock", "in_stock", default=False)),
            quantity=_non_negative_int(_pick(data, "quantity", default=0)),
        )

    def to_mapping(self) -> Dict[str, Any]:
        """camelCase-словник для зовнішнього збереження кошика."""
        payload: Dict[str, Any] = {
            "warehouseId": self.warehouse_id,
            "price": self.price,
            "inStock": self.in_stock,
            "quantity": self.quantity,
        }
        optional = {
            "specialPrice": self.special_price,
            "basePrice": self.base_price,
            "baseSpecialPrice": self.base_special_price,
            "warehouseName": self.warehouse_name,
            "warehouseCountry": self.warehouse_country,
            "displayName": self.display_name,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        return payload


# ================================
# 🛒 РЯДОК КОШИКА
# ================================
@dataclass(frozen=True, slots=True)
class CartLineItem:
    """
    Рядок кошика: посилання на товар, обраний склад і кількість.

    `price` / `special_price` — денормалізовані ціни з каталогу (число або рядок),
    `base_price` / `base_special_price` — ціни, вже приведені до базової валюти.
    """

    id: str
    quantity: int = 1
    price: PriceValue = None
    special_price: PriceValue = None
    base_price: Optional[float] = None
    base_special_price: Optional[float] = None
    warehouse_id: Optional[str] = None
    warehouse_name: Optional[str] = None
    warehouse_country: Optional[str] = None
    available_warehouses: Tuple[WarehousePrice, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        quantity = _positive_int(self.quantity)
        if type(self.quantity) is not int or quantity != self.quantity:
            logger.debug("🔧 Кількість %r для %s приведено до %d", self.quantity, self.id, quantity)
            object.__setattr__(self, "quantity", quantity)

    def find_warehouse(self, warehouse_id: Optional[str] = None) -> Optional[WarehousePrice]:
        """Шукає запис складу за id (за замовчуванням — обраний склад рядка)."""
        target = warehouse_id if warehouse_id is not None else self.warehouse_id
        if not target:
            return None
        for warehouse in self.available_warehouses:
            if warehouse.warehouse_id == target:
                return warehouse
        return None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CartLineItem":
        raw_warehouses = _pick(data, "availableWarehouses", "available_warehouses") or ()
        warehouses = tuple(
            entry if isinstance(entry, WarehousePrice) else WarehousePrice.from_mapping(entry)
            for entry in _iter_mappings(raw_warehouses)
        )
        return cls(
            id=str(_pick(data, "id", default="") or ""),
            quantity=_positive_int(_pick(data, "quantity", default=1)),
            price=_pick(data, "price"),
            special_price=_pick(data, "specialPrice", "special_price"),
            base_price=_pick(data, "basePrice", "base_price"),
            base_special_price=_pick(data, "baseSpecialPrice", "base_special_price"),
            warehouse_id=_optional_str(_pick(data, "warehouseId", "warehouse_id")),
            warehouse_name=_optional_str(_pick(data, "warehouseName", "warehouse_name")),
            warehouse_country=_optional_str(_pick(data, "warehouseCountry", "warehouse_country")),
            available_warehouses=warehouses,
        )

    def to_mapping(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "quantity": self.quantity,
            "price": self.price,
        }
        optional = {
            "specialPrice": self.special_price,
            "basePrice": self.base_price,
            "baseSpecialPrice": self.base_special_price,
            "warehouseId": self.warehouse_id,
            "warehouseName": self.warehouse_name,
            "warehouseCountry": self.warehouse_country,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.available_warehouses:
            payload["availableWarehouses"] = [wh.to_mapping() for wh in self.available_warehouses]
        return payload


def _iter_mappings(entries: Any) -> Iterable[Any]:
    """Пропускає все, що не є словником або `WarehousePrice`."""
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
        return ()
    valid = []
    for entry in entries:
        if isinstance(entry, (Mapping, WarehousePrice)):
            valid.append(entry)
        else:
            logger.warning("⚠️ Пропущено некоректний запис складу: %r", entry)
    return valid


# ================================
# 📚 КАТАЛОГ
# ================================
@dataclass(frozen=True, slots=True)
class Warehouse:
    """Склад (локація виконання замовлень)."""

    id: str
    name: Optional[str] = None
    displayed_name: Optional[str] = None
    country: Optional[str] = None


@dataclass(frozen=True, slots=True)
class CatalogItemPrice:
    """Ціна та залишок товару на складі (рядок таблиці цін каталогу)."""

    warehouse: Warehouse
    price: float
    promotion_price: Optional[float] = None
    quantity: int = 0


@dataclass(frozen=True, slots=True)
class CatalogItem:
    """Товар каталогу з таблицею цін по складах."""

    id: str
    item_prices: Tuple[CatalogItemPrice, ...] = field(default_factory=tuple)
