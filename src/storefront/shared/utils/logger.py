# 📜 storefront/shared/utils/logger.py
"""
📜 Єдина схема логування бібліотеки цін.

🔹 Усі модулі пишуть у дочірні логери `LOG_NAME.<область>` (`storefront.domain.pricing`, …).
🔹 `init_logging` налаштовує консоль та (опційно) файл із добовою ротацією, текстом або JSON.
🔹 `init_logging_from_config` читає розділ `logging` з `ConfigService`.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json                                                         # 📦 JSON-формат записів
import logging                                                      # 🪵 Стандартні логери
import sys                                                          # 🧵 stdout
import threading                                                    # 🔒 Потокобезпечна ініціалізація
from dataclasses import dataclass, field                            # 🧱 Конфіг логування
from logging.handlers import TimedRotatingFileHandler               # 📁 Ротація файлів
from pathlib import Path                                            # 📂 Шляхи
from typing import Any, Dict, Mapping, Optional, Union              # 🧰 Типізація

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "storefront"                                        # 🏷️ Кореневий логер бібліотеки
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(message)s"

_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime"}

_lock = threading.Lock()


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Параметри логування з дефолтами для бібліотеки."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: Optional[str] = None                                      # 📁 None → без файлового виводу
    when: str = "midnight"
    interval: int = 1
    backup_count: int = 7
    encoding: str = "utf-8"
    suppress: Dict[str, str] = field(default_factory=dict)         # 🙊 Сторонні логери та їх рівні
    console_level: str = "INFO"
    file_level: str = "DEBUG"
    console_format: str = CONSOLE_FORMAT
    file_format: str = PLAIN_FORMAT


# ================================
# 🧰 ФОРМАТТЕРИ
# ================================
class JsonFormatter(logging.Formatter):
    """Плоский JSON на запис, включно з extra-полями."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_RECORD_KEYS or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)                           # 🔄 Несеріалізоване → рядок
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    if isinstance(value, int):
        return value
    if not value:
        return default
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        interval=cfg.interval,
        backupCount=cfg.backup_count,
        encoding=cfg.encoding,
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Mapping[str, str]) -> None:
    for name, level in (suppress or {}).items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(
    *,
    level: Optional[str] = None,
    console: Optional[bool] = None,
    json_mode: Optional[bool] = None,
    file: Optional[str] = None,
    suppress: Optional[Dict[str, str]] = None,
    console_level: Optional[Union[str, int]] = None,
    file_level: Optional[Union[str, int]] = None,
) -> logging.Logger:
    """Налаштовує логер `LOG_NAME`; повторний виклик замінює наші хендлери."""
    with _lock:
        cfg = LoggingConfig(
            level=level or "INFO",
            console=True if console is None else bool(console),
            json=bool(json_mode),
            file=file or None,
            suppress=dict(suppress or {}),
            console_level=str(console_level or level or "INFO"),
            file_level=str(file_level or level or "DEBUG"),
        )

        root_logger = logging.getLogger(LOG_NAME)
        levels = [_to_level(cfg.level, logging.INFO)]
        if cfg.console:
            levels.append(_to_level(cfg.console_level, logging.INFO))
        if cfg.file:
            levels.append(_to_level(cfg.file_level, logging.DEBUG))
        root_logger.setLevel(min(levels))

        for handler in list(root_logger.handlers):                 # 🧹 Прибираємо попередню конфігурацію
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(cfg.console_format))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(cfg.file_format)
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(config: Optional[Mapping[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з розділу `logging` конфігурації.

    Args:
        config: Словник `ConfigService.get("logging")`.

    Returns:
        logging.Logger: Налаштований логер `LOG_NAME`.
    """
    node = config or {}
    return init_logging(
        level=node.get("level"),
        console=node.get("console"),
        json_mode=node.get("json"),
        file=node.get("file"),
        suppress=node.get("suppress"),
        console_level=node.get("console_level"),
        file_level=node.get("file_level"),
    )


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Дочірній логер `LOG_NAME.<suffix>` (або кореневий без суфікса)."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")
