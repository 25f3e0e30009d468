"""Remote layer — Figma REST API access."""

from .client import DEFAULT_API_BASE, FigmaClient

__all__ = ["DEFAULT_API_BASE", "FigmaClient"]
