"""
Module: strategy.base

Purpose:
    Abstract interface for the placeholder substitution protocol. The
    orchestrator only talks to a Strategy, so the placeholder scheme and the
    minifier backends can be swapped together.

Key Classes:
    - Strategy: Abstract base class for minification strategies

Used By:
    - pipeline: Drives each template through a Strategy
    - strategy.default: DefaultStrategy implementation
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional, Sequence

from minify_literals.models import TemplatePart

from .placeholders import Placeholder


class Strategy(ABC):
    """
    How to minify HTML, and optionally CSS, inside template literals.

    Implementations must keep ``split_html_by_placeholder`` the inverse of
    ``combine_html_strings`` for whatever the minifier leaves of the
    placeholder tokens.
    """

    @abstractmethod
    def get_placeholder(
        self, parts: Sequence[TemplatePart], tag: Optional[str] = None
    ) -> Placeholder:
        """
        Get a placeholder for the given parts.

        The same parts must produce the same placeholder, and no token may
        occur in any part's text.

        Args:
            parts: Template parts.
            tag: Template tag, if any.

        Returns:
            A single token, or one token per expression slot.
        """

    @abstractmethod
    def combine_html_strings(
        self, parts: Sequence[TemplatePart], placeholder: Placeholder
    ) -> str:
        """Join the parts' texts around the placeholder token(s)."""

    @abstractmethod
    def minify_html(self, html: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """Minify a combined HTML string."""

    def minify_css(self, css: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Minify a combined CSS string.

        Only called when ``supports_css`` is True.
        """
        raise NotImplementedError(f"{type(self).__name__} does not minify CSS")

    @property
    def supports_css(self) -> bool:
        """Whether this strategy implements minify_css()."""
        return False

    @abstractmethod
    def split_html_by_placeholder(self, html: str, placeholder: Placeholder) -> List[str]:
        """
        Split minified text back into strings.

        Returns:
            One string per template part that was combined.
        """
