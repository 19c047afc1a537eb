# ⚙️ storefront/infrastructure/currency/settings.py
"""
⚙️ Налаштування менеджера курсів як явний immutable-обʼєкт.

🔹 Будуються з `ConfigService` (`currency.*`, `files.currency_rates`).
🔹 Змінні середовища (`CURRENCY_RATES_URL`, …) підмішує сам `ConfigService`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math                                                         # 🧮 isfinite
from dataclasses import dataclass, field                            # 🧱 Frozen-налаштування
from typing import TYPE_CHECKING, Any, Dict, Mapping                # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.interfaces import BASE_CURRENCY, SupportedCurrency
from storefront.infrastructure.currency.currency_context import DEFAULT_FALLBACK_RATES
from storefront.shared.errors import ConfigError

if TYPE_CHECKING:
    from storefront.config.config_service import ConfigService


def _int_or_default(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _normalize_rates(raw: Mapping[str, Any]) -> Dict[str, float]:
    """Лишає лише підтримувані валюти з додатним скінченним курсом."""
    rates: Dict[str, float] = {}
    for key, value in (raw or {}).items():
        code = SupportedCurrency.coerce(str(key))
        if code is None:
            continue
        try:
            rate = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(rate) and rate > 0:
            rates[code.value] = rate
    return rates


@dataclass(frozen=True)
class CurrencySettings:
    """Параметри джерела курсів."""

    base_currency: SupportedCurrency = BASE_CURRENCY
    rates_url: str = ""                                             # 🌐 Порожньо → лише кеш/резерв
    rates_file: str = "data/currency_rates.json"                    # 💾 JSON-кеш курсів
    fallback_rates: Mapping[str, float] = field(default_factory=lambda: dict(DEFAULT_FALLBACK_RATES))
    timeout_sec: int = 5
    retry_attempts: int = 2
    retry_delay_sec: int = 1
    ttl_sec: int = 3600

    @classmethod
    def from_config(cls, config: "ConfigService") -> "CurrencySettings":
        """
        Збирає налаштування з конфігурації.

        Raises:
            ConfigError: якщо `currency.base` не є підтримуваною валютою.
        """
        raw_base = config.get("currency.base", BASE_CURRENCY.value)
        base = SupportedCurrency.coerce(raw_base)
        if base is None:
            raise ConfigError(f"Непідтримувана базова валюта: {raw_base!r}", key="currency.base")

        fallback = _normalize_rates(config.get("currency.fallback_rates", {}) or {})
        merged_fallback = {**DEFAULT_FALLBACK_RATES, **fallback}

        return cls(
            base_currency=base,
            rates_url=str(config.get("currency.rates_url", "") or ""),
            rates_file=str(config.get("files.currency_rates", cls.rates_file) or cls.rates_file),
            fallback_rates=merged_fallback,
            timeout_sec=_int_or_default(config.get("currency.timeout_sec"), cls.timeout_sec),
            retry_attempts=max(1, _int_or_default(config.get("currency.retry_attempts"), cls.retry_attempts)),
            retry_delay_sec=max(0, _int_or_default(config.get("currency.retry_delay_sec"), cls.retry_delay_sec)),
            ttl_sec=max(0, _int_or_default(config.get("currency.ttl_sec"), cls.ttl_sec)),
        )
