"""
Flavors API — Application Package Initializer
==============================================

What: Marks the `flavors_api` directory as a Python package.
Who:  Imported by uvicorn (`flavors_api.main:app`), the `flavors-api` CLI and pytest.

Architecture Note:
    The service is a thin layered stack over one table:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Repository (Flavor queries)    │  ← One statement per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async engine on app.state
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
