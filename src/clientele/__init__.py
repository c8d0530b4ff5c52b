"""CLIENTELE

A customer registry that stores each Customer aggregate as a single JSON
document inside a relational database. Every mutation is validated, guarded
against duplicate email addresses across customers, and announced to
downstream consumers as a CloudEvent.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
