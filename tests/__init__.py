"""TENANTCAT test suite.

Layout
- unit/        : Single modules in isolation; in-memory SQLite at most.
- contract/    : Shard registry and tenant metadata behavior, run against the
                 in-memory, SQLite and PostgreSQL implementations alike.
- integration/ : Catalog bootstrap and migrations against real database files
                 and a PostgreSQL container.
- functional/  : The ``tenantcat`` CLI driven through CliRunner.
- e2e/         : Console and flight-recorder logging of the CLI.
- fixtures/    : Engines, containers and catalogs shared as pytest plugins.

Every test is marked after its directory (see ``conftest.py``); PostgreSQL
tests are skipped when Docker is not reachable.
"""
