# Routes package init
"""
Storefront Backend — API Routes Package
=========================================

Route Inventory:
    - items.py:   /api/items endpoints (create, list, detail, sell)
    - health.py:  GET /health

Routes stay THIN: read the request, call ItemService, return its schema.
"""
