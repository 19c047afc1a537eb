# 🏗️ storefront/infrastructure/__init__.py
"""🏗️ Інфраструктура: контекст валюти та завантаження курсів (HTTP + файловий кеш)."""
