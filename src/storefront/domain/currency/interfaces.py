# 💱 storefront/domain/currency/interfaces.py
"""
💱 Контракти та DTO валютного домену вітрини.

🔹 `SupportedCurrency` — закритий перелік валют відображення (EUR, PLN, UAH).
🔹 `ExchangeRateRecord` — запис курсу «з → у» у тому вигляді, в якому його віддає API курсів.
🔹 `ICurrencyContext` — протокол активної валюти, з яким працює агрегатор кошика.
🔹 `IExchangeRateProvider` — протокол джерела курсів (асинхронне оновлення + знімок).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from dataclasses import dataclass                                # 🧱 Immutable DTO
from enum import Enum                                            # 🔖 Перелік валют
from typing import Dict, Optional, Protocol, Union, runtime_checkable            # 🧰 Типізація контрактів


# ================================
# 💱 ДОМЕННІ ТИПИ
# ================================
class SupportedCurrency(str, Enum):
    """Валюти, в яких вітрина показує ціни."""

    EUR = "EUR"
    PLN = "PLN"
    UAH = "UAH"

    @classmethod
    def coerce(cls, value: Union["SupportedCurrency", str, None]) -> Optional["SupportedCurrency"]:
        """Приводить рядок (без урахування регістру) до переліку або повертає None."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


CurrencyLike = Union[SupportedCurrency, str]                     # 🔤 Код валюти у будь-якій формі

BASE_CURRENCY: SupportedCurrency = SupportedCurrency.EUR         # 🏦 Базова валюта каталогу


# ================================
# 🧾 DTO
# ================================
@dataclass(frozen=True, slots=True)
class ExchangeRateRecord:
    """Курс `from_currency → to_currency` (скільки одиниць `to` за одну `from`)."""

    from_currency: str
    to_currency: str
    rate: float


# ================================
# 🤝 ПРОТОКОЛИ
# ================================
class ICurrencyContext(Protocol):
    """Активна валюта відображення разом із функцією конвертації."""

    @property
    def currency_code(self) -> SupportedCurrency: ...

    def convert_price(self, base_value: float) -> float: ...

    def format_price_from_base(self, base_value: float) -> str: ...


@runtime_checkable
class IExchangeRateProvider(Protocol):
    """Джерело курсів для побудови `ICurrencyContext`."""

    async def initialize(self) -> None: ...

    async def close(self) -> None: ...

    async def update_rates(self) -> None: ...

    def get_rate(self, currency: CurrencyLike) -> float: ...

    def get_all_rates(self) -> Dict[str, float]: ...

    def build_context(
        self,
        currency: Optional[CurrencyLike] = None,
        *,
        locale: Optional[str] = None,
    ) -> ICurrencyContext: ...
