# ⚙️ storefront/config/__init__.py
"""⚙️ Конфігурація: `ConfigService` (config.yaml + config.json + .env)."""

from .config_service import ConfigService

__all__ = ["ConfigService"]
