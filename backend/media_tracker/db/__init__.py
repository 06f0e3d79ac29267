"""Database Infrastructure - SQLAlchemy Base and shared record columns.

Invariants:
    - All sessions are async (AsyncSession), owned by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests and local runs
"""
