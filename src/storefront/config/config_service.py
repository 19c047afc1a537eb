# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з .env, config.json та config.yaml.
- Надає єдиний метод .get() для доступу до будь-якого параметра за ключем з крапками.
- Створюється явно і передається в конструктори сервісів (без глобального стану).
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import json                                 # 📄 Робота з JSON-файлами
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Mapping, Optional, Union  # 🧩 Типізація

# 🧩 Внутрішні модулі проєкту
from storefront.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_DIR = Path(__file__).parent

# 🔐 Змінні середовища → ключі конфігурації
_ENV_KEYS: Mapping[str, str] = {
    "STOREFRONT_LOG_LEVEL": "logging.level",
    "STOREFRONT_LOG_FILE": "logging.file",
    "CURRENCY_BASE": "currency.base",
    "CURRENCY_RATES_URL": "currency.rates_url",
    "CURRENCY_RATES_FILE": "files.currency_rates",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних конфігураційних параметрів проєкту.

    Пріоритет (від нижчого до вищого): config.yaml → config.json → .env / оточення → overrides.
    """

    def __init__(
        self,
        config_dir: Optional[Union[str, Path]] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
        load_env: bool = True,
    ) -> None:
        self._config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._config: Dict[str, Any] = {}
        self._load_all_configs(load_env=load_env)
        if overrides:
            self._deep_update(self._config, self._unflatten_dict(dict(overrides)))
        logger.debug("✅ Конфігурацію завантажено з %s", self._config_dir)

    def _load_all_configs(self, *, load_env: bool) -> None:
        """📥 Завантажує всі джерела конфігурації в один словник."""

        # --- 1. YAML-файл ---
        yaml_path = self._config_dir / "config.yaml"
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except FileNotFoundError:
            logger.debug("📘 config.yaml відсутній у %s", self._config_dir)
        except yaml.YAMLError as e:
            logger.warning(f"⚠️ Не вдалося завантажити config.yaml: {e}")

        # --- 2. JSON-файл ---
        json_path = self._config_dir / "config.json"
        try:
            with open(json_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, json.load(f))
        except FileNotFoundError:
            logger.debug("📄 config.json відсутній у %s", self._config_dir)
        except json.JSONDecodeError as e:
            logger.warning(f"⚠️ Не вдалося завантажити config.json: {e}")

        # --- 3. .env та оточення ---
        if load_env:
            load_dotenv()
            env_vars = {key: os.getenv(var) for var, key in _ENV_KEYS.items()}
            self._deep_update(
                self._config,
                self._unflatten_dict({k: v for k, v in env_vars.items() if v not in (None, "")}),
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'currency.base').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def as_dict(self) -> Dict[str, Any]:
        return json.loads(json.dumps(self._config, default=str))     # 🧊 Глибока копія

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================
    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """🔁 'currency.base' → {'currency': {'base': ...}}"""
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    @classmethod
    def _deep_update(cls, source: Dict[str, Any], overrides: Mapping[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує словники (вкладені словники зливаються)."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                cls._deep_update(source[key], value)
            else:
                source[key] = value
