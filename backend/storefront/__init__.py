"""
Storefront Backend — Application Package Initializer
=====================================================

What:  Marks the `storefront` directory as a Python package.
Who:   Imported by uvicorn (`storefront.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is split into the same thin layers the item catalogue needs:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← create / list / sell items
    ├─────────────────────────────────────┤
    │     Decorators (Presentation)       │  ← view-only logic over an Item
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Presentation logic never lives on the model and never lives in a route:
    services wrap each Item in an ItemDecorator before building a response.
"""

__version__ = "1.0.0"
