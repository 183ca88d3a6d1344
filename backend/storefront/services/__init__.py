# Services package init
"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - ItemService: create / get / list / sell items; every result is
      presented through ItemDecorator before it is serialized.
"""
