"""Bootstrap (composition root) for CLIENTELE.

Wires concrete adapters (SQLAlchemy unit of work, TSID/ULID generators, event
publisher) into the service-layer handlers and reads configuration.

Import rules:
- Entry points import *this* package rather than adapters directly.
- Inner layers must not import `clientele.bootstrap`.
"""

from .bootstrap import AppContainer, bootstrap, build_message_bus, inject_dependencies

__all__ = ["AppContainer", "bootstrap", "build_message_bus", "inject_dependencies"]
