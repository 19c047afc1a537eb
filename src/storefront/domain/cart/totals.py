# 🧮 storefront/domain/cart/totals.py
"""
🧮 Агрегатор сум кошика.

🔹 Сумує базові ціни рядків (`resolve_base_unit_price` × кількість).
🔹 Конвертує суми у валюту відображення через переданий `ICurrencyContext`.
🔹 Приймає `CartLineItem` або сирі camelCase-словники шару даних.
🔹 Не має стану: кожне звернення перераховує значення з поточної послідовності рядків.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Mapping, Optional, Sequence                          # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.interfaces import ICurrencyContext, SupportedCurrency
from storefront.domain.pricing.entities import CartLineItem
from storefront.domain.pricing.resolver import LineItemLike, resolve_base_unit_price


def _as_line(item: LineItemLike) -> Optional[CartLineItem]:
    if isinstance(item, CartLineItem):
        return item
    if isinstance(item, Mapping):
        return CartLineItem.from_mapping(item)
    return None


class CartTotals:
    """💰 Похідні суми для послідовності рядків кошика та активної валюти."""

    def __init__(self, items: Sequence[LineItemLike], currency: ICurrencyContext) -> None:
        self._items = items                                      # 🛒 Посилання, а не копія: бачимо зміни кошика
        self._currency = currency                                # 💱 Активна валюта + конвертер

    @property
    def currency_code(self) -> SupportedCurrency:
        return self._currency.currency_code

    @property
    def base_total_price(self) -> float:
        """Сума в базовій валюті по всіх рядках."""
        return sum((self.get_item_base_total(item) for item in self._items), 0.0)

    @property
    def total_price(self) -> float:
        """Сума у валюті відображення."""
        return self._currency.convert_price(self.base_total_price)

    def get_item_base_total(self, item: LineItemLike) -> float:
        line = _as_line(item)
        if line is None:
            return 0.0
        return resolve_base_unit_price(line) * line.quantity

    def get_item_total(self, item: LineItemLike) -> float:
        return self._currency.convert_price(self.get_item_base_total(item))

    def format_price(self, base_value: float) -> str:
        """Форматує суму в базовій валюті як ціну у валюті відображення."""
        return self._currency.format_price_from_base(base_value)
