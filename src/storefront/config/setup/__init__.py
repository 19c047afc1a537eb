# 📦 storefront/config/setup/__init__.py
"""📦 Збирання залежностей: `build_container`."""

from .container import Container, build_container

__all__ = ["Container", "build_container"]
