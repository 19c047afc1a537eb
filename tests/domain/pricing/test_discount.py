"""
🧪 test_discount.py — відсоток знижки

Перевіряє:
- Цілий відсоток з округленням half-up
- Нуль для відсутньої або некоректної знижки
- Рядкові ціни (усі коми → крапки)
"""

import math

import pytest

from storefront.domain.pricing import calculate_discount_percentage


def test_basic_discount():
    assert calculate_discount_percentage(100, 80) == 20


def test_rounds_half_up():
    # (200 - 199) / 200 * 100 = 0.5 → 1
    assert calculate_discount_percentage(200, 199) == 1
    # (3 - 2) / 3 * 100 = 33.33… → 33
    assert calculate_discount_percentage(3, 2) == 33


@pytest.mark.parametrize(
    "original, discount",
    [
        (100, 150),          # акційна дорожча
        (100, 100),          # без знижки
        (0, 10),             # початкова ≤ 0
        (-5, 1),
        (100, 0),            # акційна ≤ 0
        ("abc", 10),
        (math.nan, 10),
        (math.inf, 10),
    ],
)
def test_no_discount_cases(original, discount):
    assert calculate_discount_percentage(original, discount) == 0


def test_string_prices():
    assert calculate_discount_percentage("100,00 zł", "75,00 zł") == 25
    assert calculate_discount_percentage("€50", 40) == 20
