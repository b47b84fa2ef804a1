"""
Module: models

Purpose:
    Immutable data models passed between the literal parser, the
    minification strategy and the orchestrator.

Key Classes:
    - TemplatePart: One literal text segment with its source offsets
    - Template: Ordered parts of a template literal plus its tag
    - MinifyResult: Rewritten code and optional source map

Dependencies:
    - dataclasses (std)
    - editing.sourcemap.SourceMap (TYPE_CHECKING only)

Used By:
    - parsing.literals: Produces Template objects
    - strategy: Consumes TemplatePart sequences
    - pipeline: Returns MinifyResult
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from .editing.sourcemap import SourceMap


@dataclass(frozen=True, slots=True)
class TemplatePart:
    """
    Literal text segment of a template literal.

    Offsets address the original source: ``source[start:end] == text``.
    Two consecutive parts are separated by exactly one ``${...}`` expression,
    so a part can be empty (``start == end``) when expressions are adjacent.

    Attributes:
        text: Raw literal text (escape sequences are not cooked).
        start: Offset of the first character of the segment.
        end: Offset one past the last character of the segment.

    Example:
        >>> source = "html`<b>${x}</b>`"
        >>> TemplatePart(text="<b>", start=5, end=8).text == source[5:8]
        True
    """

    text: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid part range: [{self.start}, {self.end})")


@dataclass(frozen=True, slots=True)
class Template:
    """
    A template literal found in source code.

    Attributes:
        parts: Literal segments, one more than the number of expressions.
        tag: Source text of the tag expression (``html``, ``this.css``),
            or None for an untagged literal.

    Invariants:
        - parts is never empty
        - parts are ordered and do not overlap
    """

    parts: Tuple[TemplatePart, ...]
    tag: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.parts:
            raise ValueError("Template must have at least one part")
        last_end = -1
        for part in self.parts:
            if part.start < last_end:
                raise ValueError(f"Template parts overlap at offset {part.start}")
            last_end = part.end

    @property
    def expression_count(self) -> int:
        """Number of ``${...}`` expressions in the template."""
        return len(self.parts) - 1


@dataclass(frozen=True)
class MinifyResult:
    """
    Result of minifying a source string.

    Attributes:
        code: The rewritten source code.
        map: v3 source map for the rewrite, or None when disabled.
    """

    code: str
    map: Optional[SourceMap] = None
