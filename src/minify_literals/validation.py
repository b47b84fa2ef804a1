"""Placeholder protocol validation.

Runs before minifying (placeholder shape) and after splitting (part count)
so that a misbehaving strategy fails loudly instead of corrupting output.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

from .errors import PartCountError, PlaceholderError
from .models import TemplatePart

logger = logging.getLogger(__name__)


class Validation(ABC):
    """Checks run around every template's minification."""

    @abstractmethod
    def ensure_placeholder_valid(self, placeholder: Any) -> None:
        """
        Raise if get_placeholder() did not return a usable placeholder.

        Args:
            placeholder: Value returned by Strategy.get_placeholder().

        Raises:
            PlaceholderError: If the placeholder is invalid.
        """

    @abstractmethod
    def ensure_html_parts_valid(
        self,
        parts: Sequence[TemplatePart],
        html_parts: Sequence[str],
    ) -> None:
        """
        Raise if split_html_by_placeholder() lost or gained a segment.

        Args:
            parts: Template parts that were combined.
            html_parts: Strings produced by splitting the minified output.

        Raises:
            PartCountError: If the counts differ.
        """


class DefaultValidation(Validation):
    """Non-empty placeholder, one minified string per template part."""

    def ensure_placeholder_valid(self, placeholder: Any) -> None:
        if isinstance(placeholder, str) and placeholder:
            return
        if isinstance(placeholder, list) and all(
            isinstance(token, str) and token for token in placeholder
        ):
            return
        raise PlaceholderError(
            "get_placeholder() must return a non-empty str or a list of non-empty str"
        )

    def ensure_html_parts_valid(
        self,
        parts: Sequence[TemplatePart],
        html_parts: Sequence[str],
    ) -> None:
        if len(parts) != len(html_parts):
            logger.debug(f"Expected {len(parts)} parts, split produced {len(html_parts)}")
            raise PartCountError(
                "split_html_by_placeholder() must return same number of strings as template parts"
            )


default_validation = DefaultValidation()
