"""
Bookshelf Backend - Application Package
=========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes (BookHandler, health)      │  ← HTTP decoding/encoding only
    ├─────────────────────────────────────┤
    │   Services (BookUsecase contract)   │  ← BookService, error translation
    ├─────────────────────────────────────┤
    │   Repository & Models               │  ← SQLAlchemy ORM + Pydantic schemas
    ├─────────────────────────────────────┤
    │   Database                          │  ← Async engine and session factory
    └─────────────────────────────────────┘

The handler only knows the BookUsecase interface; any implementation can be
passed to create_app().
"""

__version__ = "1.0.0"
