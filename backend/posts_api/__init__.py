"""
Posts API: Application Package
================================

What: A single REST resource ("posts") stored in a relational table.
Who:  Imported by uvicorn (`posts_api.main:app`), pytest and the tooling in this repo.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Operations)       │  ← one method per endpoint
    ├─────────────────────────────────────┤
    │       TableQuery (Statements)       │  ← build + execute single SQL statements
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
