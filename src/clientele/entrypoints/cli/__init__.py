"""Command-line entry point for CLIENTELE."""

from .main import clientele

__all__ = ["clientele"]
