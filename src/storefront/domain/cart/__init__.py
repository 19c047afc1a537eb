# 🛒 storefront/domain/cart/__init__.py
"""
🛒 Пакет `domain.cart`: кошик та агрегатор його сум.

🔹 `cart.py` — `Cart`, `normalise_cart_item`.
🔹 `totals.py` — `CartTotals`.
"""

from .totals import CartTotals
from .cart import Cart, normalise_cart_item

__all__ = ["Cart", "CartTotals", "normalise_cart_item"]
