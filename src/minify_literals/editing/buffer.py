"""
Module: editing.buffer

Purpose:
    Range-addressed editing of an immutable source string. Overwrites are
    keyed by offsets into the original source, so edits never shift each
    other and can be recorded in any order.

Key Classes:
    - EditBufferLike: Interface the orchestrator depends on
    - EditBuffer: Default implementation with source map generation

Dependencies:
    - editing.sourcemap: Mapping encoder and SourceMap model

Used By:
    - pipeline: Applies minified template parts
"""

from __future__ import annotations

import bisect
import logging
import threading
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .sourcemap import Locator, MappingBuilder, SourceMap, relative_source_path

logger = logging.getLogger(__name__)


class EditBufferLike(ABC):
    """Subset of an edit buffer used by minify_literals()."""

    @abstractmethod
    def overwrite(self, start: int, end: int, content: str) -> None:
        """Replace original ``[start, end)`` with ``content``."""

    @abstractmethod
    def to_string(self) -> str:
        """Return the edited source."""

    @abstractmethod
    def generate_map(
        self,
        file: Optional[str] = None,
        source: Optional[str] = None,
        hires: bool = False,
        include_content: bool = False,
    ) -> SourceMap:
        """Return a v3 source map from the edited to the original source."""

    def __str__(self) -> str:
        return self.to_string()


class EditBuffer(EditBufferLike):
    """
    Edit buffer over an original source string.

    Overwritten ranges must be non-empty, inside the source and disjoint
    from every other overwrite.

    Example:
        >>> buffer = EditBuffer("a  b")
        >>> buffer.overwrite(1, 3, " ")
        >>> buffer.to_string()
        'a b'
    """

    def __init__(self, source: str):
        self.original = source
        self._starts: List[int] = []
        self._edits: List[Tuple[int, int, str]] = []
        self._lock = threading.Lock()

    def overwrite(self, start: int, end: int, content: str) -> None:
        if start < 0 or end > len(self.original):
            raise ValueError(f"Range [{start}, {end}) is outside the source")
        if start >= end:
            raise ValueError(f"Cannot overwrite a zero-length range [{start}, {end})")

        with self._lock:
            index = bisect.bisect_left(self._starts, start)
            if index > 0 and self._edits[index - 1][1] > start:
                raise ValueError(f"Range [{start}, {end}) overlaps an earlier overwrite")
            if index < len(self._edits) and self._edits[index][0] < end:
                raise ValueError(f"Range [{start}, {end}) overlaps a later overwrite")
            self._starts.insert(index, start)
            self._edits.insert(index, (start, end, content))

    def _chunks(self):
        pos = 0
        for start, end, content in self._edits:
            if pos < start:
                yield pos, start, None
            yield start, end, content
            pos = end
        if pos < len(self.original):
            yield pos, len(self.original), None

    def to_string(self) -> str:
        return "".join(
            self.original[start:end] if content is None else content
            for start, end, content in self._chunks()
        )

    def generate_map(
        self,
        file: Optional[str] = None,
        source: Optional[str] = None,
        hires: bool = False,
        include_content: bool = False,
    ) -> SourceMap:
        """
        Generate a v3 source map.

        Args:
            file: Name of the map's generated file; only the base name is kept.
            source: Path of the original source, made relative to ``file``.
            hires: Map every unedited character instead of each line start.
            include_content: Embed the original source in ``sourcesContent``.

        Returns:
            SourceMap for the current edits.
        """
        locator = Locator(self.original)
        builder = MappingBuilder(hires=hires)
        for start, end, content in self._chunks():
            if content is None:
                builder.add_unedited(self.original, start, end, locator)
            else:
                builder.add_edit(content, locator.locate(start))

        if source:
            source_path = relative_source_path(file or "", source)
        else:
            source_path = file or ""
        logger.debug(f"Generated source map with {len(self._edits)} edit(s)")
        return SourceMap(
            mappings=builder.encode(),
            file=file.replace("\\", "/").split("/")[-1] if file else None,
            sources=[source_path],
            sources_content=[self.original if include_content else None],
        )
