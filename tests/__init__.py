"""CLIENTELE test suite.

Layout
- unit/         : One module at a time, in memory (codec, validator, merge patch,
                  handlers over the in-memory unit of work, CLI helpers).
- contract/     : The same behavior asserted against every CustomerStore and id
                  generator implementation (memory, SQLite, PostgreSQL).
- integration/  : Real databases: unit of work transactions, Alembic round trips,
                  the service wired to a migrated SQLite file.
- functional/   : The ``clientele`` CLI driven through ``CliRunner``.
- fixtures/     : Engines (SQLite, PostgreSQL via Testcontainers) and data builders.
- helpers/      : Shared utilities (no tests here).

Markers (unit, contract, integration, functional) are applied per directory by
each folder's conftest. Container-backed and threaded tests add ``slow``.
"""
