"""Integration tests against real SQLite files and a PostgreSQL container."""
