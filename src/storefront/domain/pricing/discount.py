# 🏷️ storefront/domain/pricing/discount.py
"""🏷️ Відсоток знижки між початковою та акційною ціною."""

from __future__ import annotations

# 🔠 Системні імпорти
import math                                                      # 🧮 isfinite / floor
from typing import Union                                         # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.helpers import parse_leading_float, strip_price_noise


def _to_number(value: Union[float, int, str, None]) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    parsed = parse_leading_float(strip_price_noise(str(value), all_commas=True))
    return parsed if parsed is not None else 0.0


def calculate_discount_percentage(
    original_price: Union[float, int, str],
    discount_price: Union[float, int, str],
) -> int:
    """
    Повертає цілий відсоток знижки або 0, якщо знижки немає.

    0 — коли початкова ціна ≤ 0, акційна ≤ 0 або акційна ≥ початкової.
    """
    original = _to_number(original_price)
    discount = _to_number(discount_price)

    if original <= 0 or discount <= 0 or discount >= original:
        return 0

    return math.floor((original - discount) / original * 100 + 0.5)  # ⬆️ half-up
