"""
Module: strategy

Purpose:
    Placeholder substitution protocol: placeholder generation, combining,
    minifier adapters and splitting, bundled behind the Strategy interface.

Key Classes:
    - Strategy: Abstract interface used by the orchestrator
    - DefaultStrategy: minify-html + rcssmin implementation
"""

from .base import Strategy
from .default import DefaultStrategy, default_strategy
from .placeholders import Placeholder, get_placeholder
from .splitting import combine_html_strings, split_html_by_placeholder

__all__ = [
    "Strategy",
    "DefaultStrategy",
    "default_strategy",
    "Placeholder",
    "get_placeholder",
    "combine_html_strings",
    "split_html_by_placeholder",
]
