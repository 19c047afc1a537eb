# 🏛️ storefront/domain/__init__.py
"""
🏛️ Доменний шар: валютна модель, ціни, кошик.

Чисті синхронні обчислення без I/O та без спільного стану.
"""
