"""
Module: parsing.literals

Purpose:
    Finds template literals in JavaScript/TypeScript source and reports
    their literal segments with source offsets, plus the tag expression
    when the literal is tagged.

Key Functions:
    - parse_literals(): Return all templates in a source string

Dependencies:
    None (single-pass scanner)

Used By:
    - pipeline: Default literal parser for minify_literals()

Design Notes:
    The scanner only tracks what can hide a backtick: string literals,
    comments, regular expression literals and ``${...}`` expressions with
    nested braces. Whether a "/" starts a regular expression is decided from
    the previous significant token, as JS tokenizers do without a full
    grammar. Templates nested inside expressions are reported too.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from minify_literals.errors import LiteralParseError
from minify_literals.models import Template, TemplatePart

logger = logging.getLogger(__name__)

# Keywords after which "/" starts a regular expression and which can never
# be a template tag.
_EXPRESSION_KEYWORDS = frozenset({
    "return", "typeof", "instanceof", "in", "of", "new", "delete", "void",
    "throw", "case", "do", "else", "yield", "await", "export", "default",
    "extends",
})

# Marker for "previous token ends an expression", where "/" means division.
_VALUE = "value"


def _is_identifier_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


class _LiteralScanner:
    """Single-pass scanner collecting templates into ``self.templates``."""

    def __init__(self, source: str):
        self.source = source
        self.length = len(source)
        self.templates: List[Template] = []

    def scan(self) -> List[Template]:
        self._scan_code(0, nested=False)
        return sorted(self.templates, key=lambda template: template.parts[0].start)

    def _error(self, message: str, offset: int) -> LiteralParseError:
        line = self.source.count("\n", 0, offset) + 1
        return LiteralParseError(f"{message} at line {line} (offset {offset})")

    def _scan_code(self, pos: int, nested: bool) -> int:
        """
        Scan code until end of input or, when ``nested``, the "}" closing a
        template expression. Returns the offset after the last consumed char.
        """
        source = self.source
        depth = 0
        previous = ""
        while pos < self.length:
            char = source[pos]
            if char.isspace():
                pos += 1
                continue
            if source.startswith("//", pos):
                newline = source.find("\n", pos)
                pos = self.length if newline < 0 else newline + 1
                continue
            if source.startswith("/*", pos):
                end = source.find("*/", pos + 2)
                if end < 0:
                    raise self._error("Unterminated comment", pos)
                pos = end + 2
                continue
            if char in "\"'":
                pos = self._skip_string(pos)
                previous = _VALUE
                continue
            if char == "`":
                pos = self._scan_template(pos, self._tag_before(pos))
                previous = _VALUE
                continue
            if char == "/" and previous != _VALUE:
                pos = self._skip_regex(pos)
                previous = _VALUE
                continue
            if _is_identifier_char(char) and not char.isdigit():
                end = pos + 1
                while end < self.length and _is_identifier_char(source[end]):
                    end += 1
                word = source[pos:end]
                previous = word if word in _EXPRESSION_KEYWORDS else _VALUE
                pos = end
                continue
            if char.isdigit():
                end = pos + 1
                while end < self.length and (_is_identifier_char(source[end]) or source[end] == "."):
                    end += 1
                previous = _VALUE
                pos = end
                continue

            if char == "{":
                depth += 1
            elif char == "}":
                if nested and depth == 0:
                    return pos + 1
                depth -= 1
            previous = _VALUE if char in ")]" else char
            pos += 1

        if nested:
            raise self._error("Unterminated template expression", pos)
        return pos

    def _skip_string(self, pos: int) -> int:
        quote = self.source[pos]
        i = pos + 1
        while i < self.length:
            char = self.source[i]
            if char == "\\":
                i += 2
            elif char == quote:
                return i + 1
            elif char == "\n":
                break
            else:
                i += 1
        raise self._error("Unterminated string literal", pos)

    def _skip_regex(self, pos: int) -> int:
        i = pos + 1
        in_class = False
        while i < self.length:
            char = self.source[i]
            if char == "\\":
                i += 2
                continue
            if char == "\n":
                break
            if in_class:
                if char == "]":
                    in_class = False
            elif char == "[":
                in_class = True
            elif char == "/":
                i += 1
                while i < self.length and _is_identifier_char(self.source[i]):
                    i += 1
                return i
            i += 1
        raise self._error("Unterminated regular expression", pos)

    def _tag_before(self, pos: int) -> Optional[str]:
        """Dotted identifier chain directly before a backtick, if any."""
        end = pos
        while end > 0 and self.source[end - 1].isspace():
            end -= 1
        start = end
        while start > 0 and (_is_identifier_char(self.source[start - 1]) or self.source[start - 1] == "."):
            start -= 1
        tag = self.source[start:end]
        if not tag or tag.startswith(".") or tag.endswith(".") or tag[0].isdigit():
            return None
        if tag in _EXPRESSION_KEYWORDS:
            return None
        return tag

    def _scan_template(self, pos: int, tag: Optional[str]) -> int:
        source = self.source
        parts: List[TemplatePart] = []
        start = pos + 1
        i = start
        while i < self.length:
            char = source[i]
            if char == "\\":
                i += 2
                continue
            if char == "`":
                parts.append(TemplatePart(source[start:i], start, i))
                self.templates.append(Template(tuple(parts), tag))
                return i + 1
            if char == "$" and source.startswith("{", i + 1):
                parts.append(TemplatePart(source[start:i], start, i))
                i = self._scan_code(i + 2, nested=True)
                start = i
                continue
            i += 1
        raise self._error("Unterminated template literal", pos)


def parse_literals(source: str, file_name: Optional[str] = None) -> List[Template]:
    """
    Find every template literal in JS/TS source.

    Args:
        source: Source code.
        file_name: Name of the file, used in log messages only.

    Returns:
        Templates ordered by position, nested templates included.

    Raises:
        LiteralParseError: If a literal, comment or expression is unterminated.

    Example:
        >>> [t.tag for t in parse_literals("const a = html`<p>${x}</p>`;")]
        ['html']
        >>> [p.text for p in parse_literals("html`<p>${x}</p>`")[0].parts]
        ['<p>', '</p>']
    """
    templates = _LiteralScanner(source).scan()
    logger.debug(f"Found {len(templates)} template literal(s) in {file_name or '<source>'}")
    return templates
