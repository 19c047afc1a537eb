"""
🧪 test_currency_helpers.py — валютна модель вітрини

Перевіряє:
- Визначення валюти за тегом локалі (підрядок, без урахування регістру)
- Відображення валюта → локаль / символ з fallback на EUR
- Конвертацію з округленням half-up і захистом від NaN/Infinity
- Парсинг «брудних» рядків цін
"""

import math

import pytest

from storefront.domain.currency import (
    SupportedCurrency,
    convert_price_value,
    detect_ambient_locale,
    detect_currency_from_locale,
    get_currency_symbol,
    get_locale_for_currency,
    parse_price_string,
)
from storefront.domain.currency.helpers import parse_leading_float, strip_price_noise


# ================================
# 🌍 ЛОКАЛЬ → ВАЛЮТА
# ================================
@pytest.mark.parametrize("locale", ["pl-PL", "PL", "pl_PL", "en-PL"])
def test_polish_locales_map_to_pln(locale):
    assert detect_currency_from_locale(locale) is SupportedCurrency.PLN


@pytest.mark.parametrize("locale", ["uk-UA", "UK", "ru-UA", "uk"])
def test_ukrainian_locales_map_to_uah(locale):
    assert detect_currency_from_locale(locale) is SupportedCurrency.UAH


@pytest.mark.parametrize("locale", ["en-US", "de-DE", "fr", "", None])
def test_other_locales_fall_back_to_eur(locale):
    assert detect_currency_from_locale(locale) is SupportedCurrency.EUR


def test_pl_wins_over_ua_when_both_present():
    # "pl" перевіряється першим
    assert detect_currency_from_locale("pl-UA") is SupportedCurrency.PLN


def test_ambient_locale_reads_environment(monkeypatch):
    monkeypatch.setenv("LC_ALL", "")
    monkeypatch.setenv("LC_MESSAGES", "C")
    monkeypatch.setenv("LANG", "uk_UA.UTF-8")
    assert detect_ambient_locale() == "uk_UA"


def test_ambient_locale_none_for_posix(monkeypatch):
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.delenv("LC_MESSAGES", raising=False)
    monkeypatch.setenv("LANG", "POSIX")
    assert detect_ambient_locale() is None


# ================================
# 🔤 ЛОКАЛЬ / СИМВОЛ
# ================================
def test_locale_for_currency():
    assert get_locale_for_currency("PLN") == "pl-PL"
    assert get_locale_for_currency("UAH") == "uk-UA"
    assert get_locale_for_currency(SupportedCurrency.EUR) == "en-US"
    assert get_locale_for_currency("usd") == "en-US"


def test_currency_symbols():
    assert get_currency_symbol("EUR") == "€"
    assert get_currency_symbol("pln") == "zł"
    assert get_currency_symbol(SupportedCurrency.UAH) == "₴"
    assert get_currency_symbol("GBP") == "€"


def test_supported_currency_coerce():
    assert SupportedCurrency.coerce(" uah ") is SupportedCurrency.UAH
    assert SupportedCurrency.coerce("USD") is None
    assert SupportedCurrency.coerce(None) is None


# ================================
# 🔁 КОНВЕРТАЦІЯ
# ================================
def test_convert_whole_amount():
    assert convert_price_value(100, 4.5) == 450


def test_convert_rounds_to_two_decimals():
    assert convert_price_value(99.99, 4.5) == pytest.approx(449.96)
    assert convert_price_value(0.005, 1) == pytest.approx(0.01)


@pytest.mark.parametrize(
    "value, rate",
    [
        (math.inf, 2),
        (100, math.nan),
        (-math.inf, 1),
        (1e308, 1e10),
        ("abc", 2),
        (None, 2),
    ],
)
def test_convert_non_finite_collapses_to_zero(value, rate):
    assert convert_price_value(value, rate) == 0


# ================================
# 🧾 ПАРСИНГ
# ================================
def test_parse_price_string_with_currency_noise():
    assert parse_price_string("1 234,56 zł") == pytest.approx(1234.56)
    assert parse_price_string("€19.99") == pytest.approx(19.99)


def test_parse_price_string_fallbacks():
    assert parse_price_string(None) == 0
    assert parse_price_string("abc") == 0
    assert parse_price_string("") == 0
    assert parse_price_string(math.nan) == 0


def test_parse_price_string_numbers_pass_through():
    assert parse_price_string(42) == 42
    assert parse_price_string(12.5) == 12.5


def test_only_first_comma_becomes_period():
    # "1,234,56" → "1.234,56" → префікс 1.234
    assert parse_price_string("1,234,56") == pytest.approx(1.234)
    assert strip_price_noise("1,234,56", all_commas=True) == "1.234.56"


def test_parse_leading_float_prefix_semantics():
    assert parse_leading_float("12.5.7") == pytest.approx(12.5)
    assert parse_leading_float(".5") == pytest.approx(0.5)
    assert parse_leading_float("-3") == -3
    assert parse_leading_float("-") is None
    assert parse_leading_float("x1") is None
