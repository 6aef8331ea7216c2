"""
Practice CMS Backend — Application Package Initializer
======================================================

What: Marks the `practice_cms` directory as a Python package.
Why:  Enables module imports like `from practice_cms.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend serves a psychology practice's public site and its admin
    dashboard, and follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Config Store, Ordered    │  ← Upsert, reorder, publish rules
    │  Resource Manager, Articles)        │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every content type (testimonials, FAQ, services, gallery photos,
    specialties, articles, custom codes) is served by ONE generic ordered
    collection service, instantiated once per model in services/registry.py.
"""

__version__ = "1.0.0"
