"""
🧪 test_config_service.py — конфігурація та збирання контейнера

Перевіряє:
- Пріоритет джерел: config.yaml → config.json → оточення → overrides
- Доступ за ключем з крапками
- Побудову CurrencySettings та ConfigError для непідтримуваної валюти
- build_container: логування, менеджер курсів, ціни каталогу
"""

import json
import logging

import pytest

from storefront.config import ConfigService
from storefront.config.setup import build_container
from storefront.domain.currency import IExchangeRateProvider
from storefront.infrastructure.currency import CurrencySettings
from storefront.shared.errors import ConfigError


def test_packaged_config_defaults():
    config = ConfigService(load_env=False)
    assert config.get("currency.base") == "EUR"
    assert config.get("currency.fallback_rates.PLN") == 4.5
    assert config.get("catalog.preferred_country") == "PL"
    assert config.get("missing.key", "default") == "default"


def test_json_overrides_yaml(config_dir, make_config):
    (config_dir / "config.yaml").write_text(
        "currency:\n  base: EUR\n  ttl_sec: 100\n  rates_url: https://yaml.test\n", encoding="utf-8"
    )
    (config_dir / "config.json").write_text(json.dumps({"currency": {"ttl_sec": 5}}), encoding="utf-8")

    config = make_config()
    assert config.get("currency.ttl_sec") == 5
    assert config.get("currency.rates_url") == "https://yaml.test"


def test_overrides_win(make_config):
    config = make_config({"currency.base": "PLN", "catalog.preferred_country": "UA"})
    assert config.get("currency.base") == "PLN"
    assert config.as_dict()["catalog"] == {"preferred_country": "UA"}


def test_environment_variables_are_mapped(config_dir, monkeypatch):
    monkeypatch.chdir(config_dir)
    monkeypatch.setenv("CURRENCY_RATES_URL", "https://env.test/rates")
    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "DEBUG")

    config = ConfigService(config_dir)
    assert config.get("currency.rates_url") == "https://env.test/rates"
    assert config.get("logging.level") == "DEBUG"


def test_broken_yaml_is_skipped(config_dir, make_config):
    (config_dir / "config.yaml").write_text("currency: [unclosed", encoding="utf-8")
    assert make_config().get("currency") is None


# ================================
# ⚙️ НАЛАШТУВАННЯ КУРСІВ
# ================================
def test_currency_settings_from_config(make_config):
    config = make_config(
        {
            "currency.base": "eur",
            "currency.rates_url": "https://shop.test/rates",
            "currency.fallback_rates": {"PLN": "4.4", "USD": 1.1, "UAH": -1},
            "currency.retry_attempts": 0,
            "currency.ttl_sec": "60",
            "files.currency_rates": "cache/rates.json",
        }
    )
    settings = CurrencySettings.from_config(config)

    assert settings.rates_url == "https://shop.test/rates"
    assert settings.rates_file == "cache/rates.json"
    assert dict(settings.fallback_rates) == {"EUR": 1.0, "PLN": 4.4, "UAH": 40.0}
    assert settings.retry_attempts == 1
    assert settings.ttl_sec == 60


def test_unsupported_base_currency_raises(make_config):
    with pytest.raises(ConfigError) as exc_info:
        CurrencySettings.from_config(make_config({"currency.base": "USD"}))
    assert exc_info.value.key == "currency.base"
    assert exc_info.value.to_log_extra() == {"error_code": "config_error", "config_key": "currency.base"}


# ================================
# 📦 КОНТЕЙНЕР
# ================================
def test_build_container_wires_services(make_config, tmp_path):
    log_file = tmp_path / "logs" / "storefront.log"
    config = make_config(
        {
            "logging.level": "DEBUG",
            "logging.console": False,
            "logging.file": str(log_file),
            "catalog.preferred_country": "UA",
            "files.currency_rates": str(tmp_path / "rates.json"),
        }
    )

    container = build_container(config)
    try:
        assert container.catalog_pricing.preferred_country_code == "UA"
        assert container.rate_manager.base_currency.value == "EUR"
        assert container.currency_settings.rates_file == str(tmp_path / "rates.json")
        assert isinstance(container.rate_manager, IExchangeRateProvider)
        assert container.rate_manager.build_context("PLN").currency_code.value == "PLN"
        assert log_file.exists()
    finally:
        root = logging.getLogger("storefront")
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
