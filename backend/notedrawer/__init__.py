"""
NoteDrawer Backend — Application Package Initializer
=====================================================

What: Marks the `notedrawer` directory as a Python package.
Who:  Imported by uvicorn (`notedrawer.main:app`), Alembic and pytest.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │   Routes + Auth Gateway (HTTP)      │  ← status codes, bearer tokens
    ├─────────────────────────────────────┤
    │   Services (Accounts, Notes,        │  ← ownership rules, hashing,
    │   Tokens, Passwords)                │    token claims
    ├─────────────────────────────────────┤
    │   Models & Schemas (Data)           │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │   Database (Persistence)            │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Notes belong to exactly one principal: a user account or a shared
    drawer. Every note query is filtered by that (owner_type, owner_id) pair.
"""

__version__ = "1.0.0"
