"""Database Infrastructure - SQLAlchemy Base and engine construction.

Invariants:
    - All sessions are async (AsyncSession)
    - SQLite connections always enforce foreign keys

Design Decisions:
    - aiosqlite for local/dev/test, asyncpg for PostgreSQL (ADR: native async drivers)
"""
