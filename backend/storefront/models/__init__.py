# Models package init
"""
Storefront Backend — ORM Models
================================

    - item.py:          Item (items table) and its query scopes
    - capabilities.py:  Ratable / Sellable protocols shared across models
"""
