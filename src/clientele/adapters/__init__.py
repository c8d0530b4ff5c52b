"""Adapters (infrastructure) for CLIENTELE.

Concrete implementations of the ports in `clientele.interfaces`: customer
stores, unit of work, identifier generators, event publishers, plus database
wiring (engine, metadata, column types, migrations).

Dependency rule: may import `clientele.domain` and `clientele.interfaces`; the
domain must not import this package.
"""
