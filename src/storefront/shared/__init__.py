# 🧩 storefront/shared/__init__.py
"""🧩 Спільний шар: винятки та утиліти, без залежностей від домену."""
