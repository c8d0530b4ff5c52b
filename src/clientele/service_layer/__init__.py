"""Service layer for CLIENTELE.

Implements the customer use-cases: mutation handlers behind a message bus,
read queries, keyset pagination, and the translation of storage results into
domain outcomes. Owns transaction boundaries and event publication.

Dependency rule: may import `clientele.domain` and `clientele.interfaces`, but
not `clientele.adapters` or `clientele.entrypoints`.
"""
