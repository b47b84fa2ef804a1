"""
Module: editing.sourcemap

Purpose:
    Source map v3 model and encoder. Builds the ``mappings`` string for an
    edited source from its unedited and overwritten chunks.

Key Classes:
    - SourceMap: v3 source map with JSON and data URL rendering
    - MappingBuilder: Accumulates segments line by line

Key Functions:
    - encode_vlq(): Base64 VLQ encoding of one integer
    - encode_mappings(): Encode decoded segments into a mappings string
    - relative_source_path(): Path of the source relative to the map file

Dependencies:
    - base64, json (std)

Used By:
    - editing.buffer.EditBuffer.generate_map()
"""

from __future__ import annotations

import base64
import bisect
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
VLQ_BASE_SHIFT = 5
VLQ_BASE = 1 << VLQ_BASE_SHIFT
VLQ_BASE_MASK = VLQ_BASE - 1
VLQ_CONTINUATION_BIT = VLQ_BASE

# (generated column, source index, original line, original column)
Segment = Tuple[int, int, int, int]


def encode_vlq(value: int) -> str:
    """
    Encode an integer as base64 VLQ.

    Example:
        >>> encode_vlq(0), encode_vlq(1), encode_vlq(-1), encode_vlq(16)
        ('A', 'C', 'D', 'gB')
    """
    vlq = (-value << 1) | 1 if value < 0 else value << 1
    encoded = ""
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq:
            digit |= VLQ_CONTINUATION_BIT
        encoded += BASE64_CHARS[digit]
        if not vlq:
            return encoded


def encode_mappings(lines: Sequence[Sequence[Segment]]) -> str:
    """
    Encode per-line segments into a v3 ``mappings`` string.

    Generated columns are relative within a line; source index, original
    line and original column are relative across the whole map.
    """
    source_index = 0
    original_line = 0
    original_column = 0
    encoded_lines = []
    for segments in lines:
        generated_column = 0
        encoded_segments = []
        for segment in segments:
            column, index, line, orig_column = segment
            encoded_segments.append(
                encode_vlq(column - generated_column)
                + encode_vlq(index - source_index)
                + encode_vlq(line - original_line)
                + encode_vlq(orig_column - original_column)
            )
            generated_column = column
            source_index = index
            original_line = line
            original_column = orig_column
        encoded_lines.append(",".join(encoded_segments))
    return ";".join(encoded_lines)


def relative_source_path(from_file: str, to_file: str) -> str:
    """
    Path of ``to_file`` relative to the directory of ``from_file``.

    Example:
        >>> relative_source_path("dist/app.js.map", "src/app.js")
        '../src/app.js'
    """
    from_parts = from_file.replace("\\", "/").split("/")
    to_parts = to_file.replace("\\", "/").split("/")
    from_parts.pop()
    while from_parts and to_parts and from_parts[0] == to_parts[0]:
        from_parts.pop(0)
        to_parts.pop(0)
    return "/".join([".."] * len(from_parts) + to_parts)


class Locator:
    """Maps string offsets to zero-based (line, column) pairs."""

    def __init__(self, source: str):
        self._line_starts = [0]
        for i, char in enumerate(source):
            if char == "\n":
                self._line_starts.append(i + 1)

    def locate(self, offset: int) -> Tuple[int, int]:
        line = bisect.bisect_right(self._line_starts, offset) - 1
        return line, offset - self._line_starts[line]


class MappingBuilder:
    """
    Accumulates source map segments while the generated code is walked in
    order.

    Attributes:
        hires: Emit a segment for every unedited character instead of one
            per line.
    """

    def __init__(self, hires: bool = False):
        self.hires = hires
        self.lines: List[List[Segment]] = [[]]
        self._column = 0

    def _new_line(self) -> None:
        self.lines.append([])
        self._column = 0

    def add_unedited(self, original: str, start: int, end: int, locator: Locator) -> None:
        """Map ``original[start:end]``, copied verbatim into the output."""
        line, column = locator.locate(start)
        first = True
        for offset in range(start, end):
            if original[offset] == "\n":
                line += 1
                column = 0
                self._new_line()
                first = True
                continue
            if self.hires or first:
                self.lines[-1].append((self._column, 0, line, column))
            column += 1
            self._column += 1
            first = False

    def add_edit(self, content: str, location: Tuple[int, int]) -> None:
        """Map replacement ``content`` to the original ``location``."""
        if not content:
            return
        line, column = location
        content_lines = content.split("\n")
        for i, content_line in enumerate(content_lines):
            if i > 0:
                self._new_line()
            if content_line or i < len(content_lines) - 1:
                self.lines[-1].append((self._column, 0, line, column))
            self._column += len(content_line)

    def encode(self) -> str:
        return encode_mappings(self.lines)


@dataclass
class SourceMap:
    """
    Version 3 source map.

    Attributes:
        version: Always 3.
        file: Name of the generated file the map belongs to.
        sources: Original source paths.
        sources_content: Original sources, or None entries when omitted.
        names: Symbol names (unused by minification, always empty).
        mappings: Base64 VLQ mappings string.
    """
    mappings: str
    file: Optional[str] = None
    sources: List[Optional[str]] = field(default_factory=list)
    sources_content: List[Optional[str]] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    version: int = 3

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"version": self.version}
        if self.file is not None:
            data["file"] = self.file
        data["sources"] = list(self.sources)
        data["sourcesContent"] = list(self.sources_content)
        data["names"] = list(self.names)
        data["mappings"] = self.mappings
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def __str__(self) -> str:
        return self.to_json()

    def to_url(self) -> str:
        """Render as a ``data:`` URL for inline ``sourceMappingURL`` comments."""
        encoded = base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")
        return f"data:application/json;charset=utf-8;base64,{encoded}"
