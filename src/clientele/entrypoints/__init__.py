"""Entrypoints (inbound adapters) for CLIENTELE.

Expose the application to the outside world: the `clientele` CLI and the RFC
7807 problem renderer used to present domain outcomes.

Dependency rule: may import `clientele.service_layer` and `clientele.bootstrap`;
avoid importing `clientele.adapters` directly.
"""
