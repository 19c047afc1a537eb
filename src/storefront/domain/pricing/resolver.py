# 🧭 storefront/domain/pricing/resolver.py
"""
🧭 Визначення базової ціни одиниці товару для рядка кошика.

🔹 Перебирає джерела у строгому порядку і бере перше придатне значення:
    1. `base_special_price` рядка;
    2. `base_price` рядка;
    3. запис обраного складу: `base_special_price` → `base_price` → `special_price` → `price`;
    4. `special_price` рядка;
    5. `price` рядка;
    6. інакше 0.
🔹 Придатне значення — скінченне невідʼємне число або рядок, з якого вдалося розібрати таке число.
🔹 Ніколи не кидає винятків і не повертає NaN/Infinity/відʼємні значення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                   # 🧾 Діагностика fallback-ів
import math                                                      # 🧮 isfinite
from typing import Any, Iterator, Mapping, Optional, Union       # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.helpers import parse_leading_float, strip_price_noise
from storefront.domain.pricing.entities import CartLineItem, WarehousePrice
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.pricing")

LineItemLike = Union[CartLineItem, Mapping[str, Any]]


# ================================
# 🧰 ПЕРЕВІРКА ПРИДАТНОСТІ
# ================================
def _usable_number(value: Any) -> Optional[float]:
    """Лише числа: скінченні та ≥ 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _usable_price(value: Any) -> Optional[float]:
    """Число або рядок, що розбирається у скінченне невідʼємне число."""
    number = _usable_number(value)
    if number is not None or not isinstance(value, str):
        return number
    parsed = parse_leading_float(strip_price_noise(value))
    if parsed is None or parsed < 0:
        return None
    return parsed


# ================================
# 🔎 ДЖЕРЕЛА ЦІНИ
# ================================
def _warehouse_candidates(warehouse: WarehousePrice) -> Iterator[Optional[float]]:
    yield _usable_number(warehouse.base_special_price)
    yield _usable_number(warehouse.base_price)
    yield _usable_price(warehouse.special_price)
    yield _usable_price(warehouse.price)


def _candidates(item: CartLineItem) -> Iterator[Optional[float]]:
    yield _usable_number(item.base_special_price)
    yield _usable_number(item.base_price)

    if item.warehouse_id and item.available_warehouses:
        warehouse = item.find_warehouse()
        if warehouse is not None:
            yield from _warehouse_candidates(warehouse)

    yield _usable_price(item.special_price)
    yield _usable_price(item.price)


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def resolve_base_unit_price(item: LineItemLike) -> float:
    """
    🧭 Повертає базову ціну одиниці товару (у базовій валюті).

    Args:
        item: `CartLineItem` або сирий словник шару даних.

    Returns:
        float: Перше придатне значення за пріоритетом або 0.
    """
    if isinstance(item, CartLineItem):
        line = item
    elif isinstance(item, Mapping):
        line = CartLineItem.from_mapping(item)
    else:
        logger.warning("⚠️ resolve_base_unit_price: непідтримуваний тип %s → 0", type(item).__name__)
        return 0.0

    for candidate in _candidates(line):
        if candidate is not None:
            return candidate

    logger.debug("🚫 Немає придатної ціни для рядка %s → 0", line.id)
    return 0.0
