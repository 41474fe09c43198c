"""Contract tests.

Each contract is written once and run against every catalog store backend,
so the in-memory adapters stay interchangeable with the SQLAlchemy ones.
"""
