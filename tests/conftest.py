# tests/conftest.py
import sys
from pathlib import Path

import pytest

# 1) Додаємо src у sys.path, щоб працював імпорт "storefront.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from storefront.config.config_service import ConfigService  # noqa: E402
from storefront.infrastructure.currency.settings import CurrencySettings  # noqa: E402


# 2) Спільні фікстури
@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Порожній каталог конфігурації (без config.yaml/config.json)."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def currency_settings(tmp_path: Path) -> CurrencySettings:
    """Налаштування менеджера курсів з кешем у tmp_path і без пауз між спробами."""
    return CurrencySettings(
        rates_url="https://shop.test/api/admin/currency-exchange",
        rates_file=str(tmp_path / "data" / "currency_rates.json"),
        retry_attempts=2,
        retry_delay_sec=0,
        ttl_sec=3600,
    )


@pytest.fixture
def make_config(config_dir: Path):
    """Фабрика ConfigService поверх тимчасового каталогу, без читання .env."""

    def _factory(overrides=None) -> ConfigService:
        return ConfigService(config_dir, overrides=overrides, load_env=False)

    return _factory
