"""Database Infrastructure: SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - All sessions are async (AsyncSession), owned by DatabaseSessionManager

Design Decisions:
    - asyncpg driver for PostgreSQL (ADR: native async, no thread pool overhead)
"""
