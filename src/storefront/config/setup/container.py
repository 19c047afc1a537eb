# 📦 storefront/config/setup/container.py
"""
📦 Контейнер залежностей бібліотеки цін.

🔹 Створює сервіси в правильному порядку: конфіг → логування → налаштування → сервіси.
🔹 Усі залежності передаються явно через конструктори (жодних модульних синглтонів).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                             # 🔌 Тип транспорту для DI

# 🔠 Системні імпорти
import logging                                                           # 🧾 Логування збирання
from dataclasses import dataclass                                        # 🧱 Контейнер-DTO
from typing import Optional                                              # 🧮 Типи

# 🧩 Внутрішні модулі проєкту
from storefront.config.config_service import ConfigService               # ⚙️ Конфігурація
from storefront.domain.currency.interfaces import IExchangeRateProvider         # 🤝 Контракт джерела курсів
from storefront.domain.pricing.catalog import DEFAULT_COUNTRY_CODE, CatalogPricing  # 📚 Ціни каталогу
from storefront.infrastructure.currency.exchange_rate_manager import ExchangeRateManager  # 💵 Курси
from storefront.infrastructure.currency.settings import CurrencySettings  # ⚙️ Налаштування курсів
from storefront.shared.utils.logger import LOG_NAME, init_logging_from_config  # 🧾 Логування

logger = logging.getLogger(f"{LOG_NAME}.container")


@dataclass(frozen=True)
class Container:
    """Зібрані сервіси застосунку."""

    config: ConfigService
    currency_settings: CurrencySettings
    rate_manager: IExchangeRateProvider
    catalog_pricing: CatalogPricing


def build_container(
    config: Optional[ConfigService] = None,
    *,
    init_logs: bool = True,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Container:
    """
    Збирає контейнер з конфігурації.

    Args:
        config: Готовий `ConfigService`; за замовчуванням — конфіг пакета.
        init_logs: Чи налаштовувати логування з розділу `logging`.
        transport: Опційний httpx-транспорт для менеджера курсів.
    """
    cfg = config or ConfigService()
    if init_logs:
        init_logging_from_config(cfg.get("logging", {}))

    settings = CurrencySettings.from_config(cfg)
    container = Container(
        config=cfg,
        currency_settings=settings,
        rate_manager=ExchangeRateManager(settings, transport=transport),
        catalog_pricing=CatalogPricing(str(cfg.get("catalog.preferred_country", DEFAULT_COUNTRY_CODE))),
    )
    logger.info(
        "📦 Контейнер зібрано | base=%s rates_url=%s country=%s",
        settings.base_currency.value,
        settings.rates_url or "—",
        container.catalog_pricing.preferred_country_code,
    )
    return container
