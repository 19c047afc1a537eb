# 💵 storefront/infrastructure/currency/exchange_rate_manager.py
"""
💵 ExchangeRateManager — життєвий цикл курсів базова валюта → валюта відображення.

🎯 Призначення:
    • асинхронно отримує записи `{from, to, rate}` з API курсів вітрини;
    • тримає JSON-кеш на диску та резервні курси з конфігурації;
    • дозволяє адміністратору вручну встановити курс (з валідацією);
    • будує `CurrencyContext` — знімок курсу для агрегатора кошика.

⚙️ Нотатки:
    • курси зберігаються як float «одиниць валюти за 1 EUR»;
    • будь-яка мережева чи файлова помилка лише логуються: лишаються попередні або резервні курси.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles                                                     # 💽 Асинхронна робота з кеш-файлом
import httpx                                                        # 🌐 HTTP-клієнт API курсів

# 🔠 Системні імпорти
import asyncio                                                      # 🔁 Локи та паузи між спробами
import json                                                         # 📄 Серіалізація кешу
import logging                                                      # 🧾 Логи сервісу
import math                                                         # 🧮 isfinite
import time                                                         # ⏱️ TTL
from pathlib import Path                                            # 📂 Каталог кешу
from typing import Any, Dict, List, Optional, Union                 # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.domain.currency.helpers import detect_ambient_locale, detect_currency_from_locale
from storefront.domain.currency.interfaces import (
    CurrencyLike,
    ExchangeRateRecord,
    SupportedCurrency,
)
from storefront.infrastructure.currency.currency_context import CurrencyContext
from storefront.infrastructure.currency.settings import CurrencySettings
from storefront.shared.errors import InvalidExchangeRateError
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.infrastructure.currency")


class ExchangeRateManager:
    """
    🏦 Керує курсами валют і видає контексти валюти (знімки стану).
    """

    def __init__(
        self,
        settings: CurrencySettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings                                   # ⚙️ Явні налаштування
        self._transport = transport                                 # 🔌 Підміна транспорту (тести, проксі)
        self._lock = asyncio.Lock()                                 # 🔐 Серіалізація оновлень
        self._init_lock = asyncio.Lock()                            # 🔐 Послідовна ініціалізація

        self._rates: Dict[str, float] = {}                          # 💱 Поточні курси
        self._client: Optional[httpx.AsyncClient] = None
        self._last_update_ts: float = 0.0
        logger.debug(
            "⚙️ ExchangeRateManager config: url=%s file=%s base=%s ttl=%s",
            settings.rates_url or "—",
            settings.rates_file,
            settings.base_currency.value,
            settings.ttl_sec,
        )

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    @property
    def base_currency(self) -> SupportedCurrency:
        return self._settings.base_currency

    @property
    def last_update_ts(self) -> float:
        return self._last_update_ts

    def is_cache_fresh(self) -> bool:
        return (time.time() - self._last_update_ts) < self._settings.ttl_sec

    def get_all_rates(self) -> Dict[str, float]:
        """Копія поточних курсів (`{"PLN": 4.5, ...}`)."""
        return dict(self._rates)

    def get_rate(self, currency: CurrencyLike) -> float:
        """
        Курс базової валюти до `currency`.

        Базова → 1; відома → збережений курс; інакше — резервний курс або 1.
        """
        code = SupportedCurrency.coerce(currency)
        if code is None or code == self._settings.base_currency:
            return 1.0
        rate = self._rates.get(code.value)
        if rate is None:
            rate = self._settings.fallback_rates.get(code.value, 1.0)
            logger.debug("🛟 Курс %s відсутній у кеші → резервний %s", code.value, rate)
        return rate

    def build_context(
        self,
        currency: Optional[CurrencyLike] = None,
        *,
        locale: Optional[str] = None,
    ) -> CurrencyContext:
        """Знімок валюти відображення: явна валюта або визначена за локаллю."""
        if currency is None:
            effective = locale if locale is not None else detect_ambient_locale()
            currency = detect_currency_from_locale(effective)
        code = SupportedCurrency.coerce(currency) or self._settings.base_currency
        return CurrencyContext(
            currency_code=code,
            exchange_rate=self.get_rate(code),
            base_currency=self._settings.base_currency,
        )

    async def initialize(self) -> None:
        """Завантажує кеш курсів і створює HTTP-клієнт."""
        async with self._init_lock:
            if not self._rates:
                self._rates = await self._load_rates_from_file()
            if self._client is None:
                self._client = httpx.AsyncClient(
                    timeout=self._settings.timeout_sec,
                    transport=self._transport,
                )
                logger.info("🔧 ExchangeRateManager ініціалізовано з курсами: %s", self._rates)

    async def ensure_initialized(self) -> None:
        if self._client is not None and self._rates:
            return
        await self.initialize()

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.info("🔌 HTTP-клієнт менеджера курсів закрито.")
        self._client = None

    async def __aenter__(self) -> "ExchangeRateManager":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def update_rates_if_needed(self) -> None:
        """🔄 Оновлює курси лише після завершення TTL."""
        await self.ensure_initialized()
        if self.is_cache_fresh():
            logger.debug("⏱️ Курси свіжі (TTL). Оновлення пропущено.")
            return
        await self.update_rates()

    async def update_rates(self) -> None:
        """🔄 Примусове оновлення курсів з API; при збої лишаються попередні значення."""
        await self.ensure_initialized()
        if not self._settings.rates_url:
            logger.debug("🌐 rates_url не задано — працюємо на кеші/резерві.")
            return

        api_data = await self._fetch_api_data()
        if api_data is None:
            logger.warning("⚠️ Не вдалося отримати курси, лишаються попередні значення.")
            return

        async with self._lock:
            records = self._parse_records(api_data)
            if self._apply_records(records):
                await self._save_rates_to_file()
            self._last_update_ts = time.time()
            logger.info("🕒 Курси оновлено, last_update_ts=%s", self._last_update_ts)

    async def set_rate_manually(self, currency: CurrencyLike, rate: Union[float, int, str]) -> None:
        """
        ✍️ Ручне встановлення курсу базова → `currency`.

        Raises:
            InvalidExchangeRateError: непідтримувана/базова валюта або курс не є додатним скінченним числом.
        """
        code = SupportedCurrency.coerce(currency)
        if code is None:
            raise InvalidExchangeRateError(f"Непідтримувана валюта: {currency!r}", currency=str(currency), rate=rate)
        if code == self._settings.base_currency:
            raise InvalidExchangeRateError(
                "Курс базової валюти завжди дорівнює 1.", currency=code.value, rate=rate
            )
        safe_rate = self._to_rate(rate)
        if safe_rate is None:
            logger.error("🚫 Спроба встановити невалідний курс для %s: %r", code.value, rate)
            raise InvalidExchangeRateError("Курс має бути додатним числом.", currency=code.value, rate=rate)

        await self.ensure_initialized()
        async with self._lock:
            self._rates[code.value] = safe_rate
            await self._save_rates_to_file()
            self._last_update_ts = time.time()
            logger.info("✍️ Курс для %s встановлено вручну: %s", code.value, safe_rate)

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _parse_records(self, api_data: List[Any]) -> List[ExchangeRateRecord]:
        """Лишає записи `base → підтримувана валюта` з додатним курсом."""
        base = self._settings.base_currency
        records: List[ExchangeRateRecord] = []
        for entry in api_data:
            if not isinstance(entry, dict):
                continue
            source = SupportedCurrency.coerce(entry.get("from"))
            target = SupportedCurrency.coerce(entry.get("to"))
            rate = self._to_rate(entry.get("rate"))
            if source != base or target is None or target == base or rate is None:
                logger.debug("🔍 Пропущено запис курсу: %r", entry)
                continue
            records.append(ExchangeRateRecord(from_currency=source.value, to_currency=target.value, rate=rate))
        return records

    def _apply_records(self, records: List[ExchangeRateRecord]) -> bool:
        was_updated = False
        for record in records:
            old_rate = self._rates.get(record.to_currency)
            if old_rate != record.rate:
                logger.info("🔺 Курс %s оновлено: %s → %s", record.to_currency, old_rate, record.rate)
                self._rates[record.to_currency] = record.rate
                was_updated = True
        return was_updated

    async def _fetch_api_data(self) -> Optional[List[Any]]:
        """Багатоспробне отримання списку курсів."""
        if self._client is None:
            raise RuntimeError("HTTP-клієнт не ініціалізовано (initialize() не викликано).")

        attempts = max(1, self._settings.retry_attempts)
        for attempt in range(attempts):
            try:
                response = await self._client.get(self._settings.rates_url)
                response.raise_for_status()
                payload = response.json()
                if isinstance(payload, list):
                    logger.info("✅ Курси з API отримано (%d записів).", len(payload))
                    return payload
                logger.warning("⚠️ API курсів повернуло не список, а %s", type(payload).__name__)
                return None
            except (httpx.HTTPError, ValueError) as exc:
                logger.error("❌ Спроба %s/%s: помилка API курсів — %s", attempt + 1, attempts, exc)
                if attempt < attempts - 1:
                    await asyncio.sleep(self._settings.retry_delay_sec)
        return None

    async def _load_rates_from_file(self) -> Dict[str, float]:
        """Читає кеш курсів; якщо не вийшло — резервні курси з налаштувань."""
        rates: Dict[str, float] = {}
        try:
            async with aiofiles.open(self._settings.rates_file, "r", encoding="utf-8") as f:
                content = await f.read()
            parsed = json.loads(content)
            if not isinstance(parsed, dict):
                raise ValueError("Очікувався обʼєкт (dict) у кеш-файлі курсів.")
            for key, value in parsed.items():
                code = SupportedCurrency.coerce(key)
                rate = self._to_rate(value)
                if code is not None and rate is not None:
                    rates[code.value] = rate
            logger.info("📖 Завантажено кешовані курси: %s", rates)
        except (OSError, ValueError) as exc:
            logger.warning("⚠️ Не вдалося прочитати файл курсів (%s). Використовуються резервні значення.", exc)

        if rates:
            self._last_update_ts = time.time()                      # ⏱️ Свіжість рахуємо лише для кешу
        else:
            rates = {k: v for k, v in self._settings.fallback_rates.items() if self._to_rate(v) is not None}
            self._last_update_ts = 0.0                              # 🛟 Резерв → перше оновлення йде в API

        rates[self._settings.base_currency.value] = 1.0             # 🏦 База завжди 1
        return rates

    async def _save_rates_to_file(self) -> None:
        payload = json.dumps(self._rates, indent=2, ensure_ascii=False, sort_keys=True)
        try:
            Path(self._settings.rates_file).parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(self._settings.rates_file, "w", encoding="utf-8") as f:
                await f.write(payload)
            logger.info("💾 Кеш курсів збережено: %s", self._rates)
        except OSError as exc:
            logger.error("❌ Помилка під час збереження курсів: %s", exc)

    @staticmethod
    def _to_rate(value: Any) -> Optional[float]:
        """Курс як додатний скінченний float або None (рядки з комою підтримуються)."""
        if isinstance(value, bool) or value is None:
            return None
        try:
            rate = float(value.strip().replace(",", ".")) if isinstance(value, str) else float(value)
        except (TypeError, ValueError, OverflowError):
            return None
        return rate if math.isfinite(rate) and rate > 0 else None
