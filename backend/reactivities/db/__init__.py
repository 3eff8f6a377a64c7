"""Database Infrastructure — declarative base and demo data seeding.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All sessions are async (AsyncSession)
"""
