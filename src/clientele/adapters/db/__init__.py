"""Database wiring shared by SQL adapters: engine, dialects, metadata, types."""
