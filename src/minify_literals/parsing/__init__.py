"""Template literal discovery in JavaScript/TypeScript source."""

from .literals import parse_literals

__all__ = ["parse_literals"]
