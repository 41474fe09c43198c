"""Unit tests.

Fast and deterministic: no network and no sleeping (retry delays are
recorded, not waited for). Databases are in-memory SQLite at most.
"""
