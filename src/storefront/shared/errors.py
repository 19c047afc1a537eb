# 🚨 storefront/shared/errors.py
"""
🚨 Ієрархія винятків бібліотеки.

🔹 Ціновий шар винятків не кидає (усе невалідне згортається до 0).
🔹 Винятки тут — лише для помилок конфігурації та ручного введення курсів адміністратором.
🔹 Кожен виняток уміє віддати `to_log_extra()` для структурованих логів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування створення винятків
from typing import Dict, Optional                                   # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """Стабільні коди для логів та відповідей API."""

    CONFIG = "config_error"
    EXCHANGE_RATE = "exchange_rate_error"
    INVALID_RATE = "invalid_exchange_rate"
    UNKNOWN = "unknown_error"


# ================================
# 🧠 БАЗОВИЙ ВИНЯТОК
# ================================
class AppError(Exception):
    """Базовий виняток застосунку з опційними деталями."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class ConfigError(AppError):
    """Відсутній або некоректний параметр конфігурації."""

    code = ErrorCode.CONFIG

    def __init__(self, message: str, *, key: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.key = key

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.key:
            extra["config_key"] = self.key
        return extra


class ExchangeRateError(AppError):
    """Помилка роботи з курсами валют."""

    code = ErrorCode.EXCHANGE_RATE


class InvalidExchangeRateError(ExchangeRateError):
    """Курс або валюта не пройшли валідацію (ручне встановлення курсу)."""

    code = ErrorCode.INVALID_RATE

    def __init__(
        self,
        message: str,
        *,
        currency: Optional[str] = None,
        rate: object = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.currency = currency
        self.rate = rate
        logger.debug("🧾 InvalidExchangeRateError created", extra={"currency": currency, "rate": repr(rate)})

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.currency:
            extra["currency"] = self.currency
        if self.rate is not None:
            extra["rate"] = repr(self.rate)
        return extra


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "ConfigError",
    "ExchangeRateError",
    "InvalidExchangeRateError",
]
