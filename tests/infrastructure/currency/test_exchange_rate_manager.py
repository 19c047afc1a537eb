"""
🧪 test_exchange_rate_manager.py — менеджер курсів валют

Перевіряє:
- Резервні курси без кешу та читання JSON-кешу
- Оновлення з API `{from, to, rate}` та запис кешу
- Повторні спроби і збереження попередніх курсів при збоях
- Валідацію ручного встановлення курсу
- Побудову контексту валюти
"""

import json
from dataclasses import replace

import httpx
import pytest

from storefront.domain.currency import SupportedCurrency
from storefront.infrastructure.currency import ExchangeRateManager
from storefront.shared.errors import InvalidExchangeRateError

API_RECORDS = [
    {"from": "EUR", "to": "PLN", "rate": 4.31},
    {"from": "EUR", "to": "UAH", "rate": "44,5"},
    {"from": "EUR", "to": "EUR", "rate": 1},
    {"from": "PLN", "to": "UAH", "rate": 10.1},
    {"from": "EUR", "to": "USD", "rate": 1.08},
    {"from": "EUR", "to": "PLN", "rate": -1},
    "junk",
]


def _transport(*responses):
    """MockTransport, що віддає відповіді по черзі та рахує виклики."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        response = responses[min(len(calls), len(responses)) - 1]
        return response(request) if callable(response) else response

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport


# ================================
# 📖 ІНІЦІАЛІЗАЦІЯ
# ================================
@pytest.mark.asyncio
async def test_initialize_without_cache_uses_fallback(currency_settings):
    async with ExchangeRateManager(currency_settings) as manager:
        assert manager.get_all_rates() == {"EUR": 1.0, "PLN": 4.5, "UAH": 40.0}
        assert manager.get_rate("PLN") == 4.5
        assert manager.get_rate("EUR") == 1.0
        assert manager.get_rate("USD") == 1.0


@pytest.mark.asyncio
async def test_initialize_reads_cache_file(currency_settings, tmp_path):
    cache = tmp_path / "data" / "currency_rates.json"
    cache.parent.mkdir(parents=True)
    cache.write_text(json.dumps({"PLN": 4.2, "UAH": "bad", "XYZ": 3}), encoding="utf-8")

    async with ExchangeRateManager(currency_settings) as manager:
        assert manager.get_all_rates() == {"EUR": 1.0, "PLN": 4.2}
        assert manager.get_rate("UAH") == 40.0                      # 🛟 із резервної таблиці


@pytest.mark.asyncio
async def test_corrupted_cache_falls_back(currency_settings, tmp_path):
    cache = tmp_path / "data" / "currency_rates.json"
    cache.parent.mkdir(parents=True)
    cache.write_text("[not json", encoding="utf-8")

    async with ExchangeRateManager(currency_settings) as manager:
        assert manager.get_rate("PLN") == 4.5


# ================================
# 🔄 ОНОВЛЕННЯ З API
# ================================
@pytest.mark.asyncio
async def test_update_rates_applies_valid_records_and_saves(currency_settings, tmp_path):
    transport = _transport(httpx.Response(200, json=API_RECORDS))

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        await manager.update_rates()

        assert manager.get_rate("PLN") == 4.31
        assert manager.get_rate("UAH") == 44.5
        assert len(transport.calls) == 1
        assert str(transport.calls[0].url) == currency_settings.rates_url

    saved = json.loads((tmp_path / "data" / "currency_rates.json").read_text(encoding="utf-8"))
    assert saved == {"EUR": 1.0, "PLN": 4.31, "UAH": 44.5}


@pytest.mark.asyncio
async def test_update_rates_retries_then_succeeds(currency_settings):
    transport = _transport(
        httpx.Response(503),
        httpx.Response(200, json=[{"from": "EUR", "to": "PLN", "rate": 4.4}]),
    )

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        await manager.update_rates()
        assert manager.get_rate("PLN") == 4.4
        assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_update_rates_failure_keeps_previous(currency_settings):
    def boom(request):
        raise httpx.ConnectError("offline", request=request)

    transport = _transport(boom)

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        await manager.update_rates()
        assert manager.get_rate("PLN") == 4.5
        assert len(transport.calls) == currency_settings.retry_attempts


@pytest.mark.asyncio
async def test_non_list_payload_is_ignored(currency_settings):
    transport = _transport(httpx.Response(200, json={"PLN": 9}))

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        await manager.update_rates()
        assert manager.get_rate("PLN") == 4.5
        assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_no_url_skips_network(currency_settings):
    transport = _transport(httpx.Response(200, json=API_RECORDS))
    settings = replace(currency_settings, rates_url="")

    async with ExchangeRateManager(settings, transport=transport) as manager:
        await manager.update_rates()
        assert transport.calls == []


@pytest.mark.asyncio
async def test_update_if_needed_respects_ttl(currency_settings, tmp_path):
    cache = tmp_path / "data" / "currency_rates.json"
    cache.parent.mkdir(parents=True)
    cache.write_text(json.dumps({"PLN": 4.2}), encoding="utf-8")
    transport = _transport(httpx.Response(200, json=API_RECORDS))

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        assert manager.is_cache_fresh()
        await manager.update_rates_if_needed()
        assert transport.calls == []
        assert manager.get_rate("PLN") == 4.2

    stale = replace(currency_settings, ttl_sec=0)
    async with ExchangeRateManager(stale, transport=transport) as manager:
        await manager.update_rates_if_needed()
        assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_cold_start_on_fallback_fetches_api(currency_settings):
    transport = _transport(httpx.Response(200, json=[{"from": "EUR", "to": "PLN", "rate": 4.3}]))

    async with ExchangeRateManager(currency_settings, transport=transport) as manager:
        assert manager.last_update_ts == 0
        assert not manager.is_cache_fresh()

        await manager.update_rates_if_needed()

        assert len(transport.calls) == 1
        assert manager.get_rate("PLN") == 4.3
        assert manager.is_cache_fresh()


# ================================
# ✍️ РУЧНЕ ВСТАНОВЛЕННЯ
# ================================
@pytest.mark.asyncio
async def test_set_rate_manually_persists(currency_settings, tmp_path):
    async with ExchangeRateManager(currency_settings) as manager:
        await manager.set_rate_manually("uah", "41,25")
        assert manager.get_rate(SupportedCurrency.UAH) == 41.25

    saved = json.loads((tmp_path / "data" / "currency_rates.json").read_text(encoding="utf-8"))
    assert saved["UAH"] == 41.25


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "currency, rate",
    [("USD", 1.1), ("EUR", 1.0), ("PLN", 0), ("PLN", -2), ("PLN", "abc"), ("PLN", float("inf"))],
)
async def test_set_rate_manually_rejects_invalid(currency_settings, currency, rate):
    async with ExchangeRateManager(currency_settings) as manager:
        with pytest.raises(InvalidExchangeRateError) as exc_info:
            await manager.set_rate_manually(currency, rate)
        assert exc_info.value.to_log_extra()["error_code"] == "invalid_exchange_rate"
        assert manager.get_rate("PLN") == 4.5


# ================================
# 💱 КОНТЕКСТ
# ================================
@pytest.mark.asyncio
async def test_build_context_uses_current_rates(currency_settings):
    async with ExchangeRateManager(currency_settings) as manager:
        await manager.set_rate_manually("PLN", 4.5)

        ctx = manager.build_context("PLN")
        assert ctx.exchange_rate == 4.5
        assert ctx.convert_price(69.98) == pytest.approx(314.91)

        assert manager.build_context(locale="uk-UA").currency_code is SupportedCurrency.UAH
        assert manager.build_context("GBP").currency_code is SupportedCurrency.EUR
