"""
Q&A Service — Application Package
===================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Repository Logic)    │  ← create / list / get / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │     Database (Storage Client)       │  ← engine, sessions, schema
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
