"""
VenueAtlas Backend — Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is split into layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Auth (identity, role, ownership)  │  ← Access control chain
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, tree resolution
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes handle status codes and envelopes and delegate to services.
    Services never touch HTTP and are testable with a bare session.
"""

__version__ = "1.0.0"
