"""
Module: config

Purpose:
    Configuration for template literal minification. Provides the default
    minifier options and the immutable option bundle accepted by
    minify_literals().

Key Classes:
    - MinifyLiteralsOptions: Options for a single minify_literals() call

Key Functions:
    - default_should_minify(): Tag contains "html" or "svg"
    - default_should_minify_css(): Tag contains "css"

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - pipeline: Resolves options and predicates
    - cli: Builds options from command-line arguments
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

from .models import Template

if TYPE_CHECKING:
    from .editing.buffer import EditBufferLike
    from .editing.sourcemap import SourceMap
    from .strategy.base import Strategy
    from .validation import Validation


# Options for the bundled rcssmin adapter. rcssmin only knows
# keep_bang_comments; anything else is rejected by the minifier.
DEFAULT_MINIFY_CSS_OPTIONS: Dict[str, Any] = {}

# Keys consumed by the HTML adapter are collapse_whitespace and minify_css.
# Every other key is forwarded to minify_html.minify().
DEFAULT_MINIFY_OPTIONS: Dict[str, Any] = {
    "collapse_whitespace": True,
    "minify_css": DEFAULT_MINIFY_CSS_OPTIONS,
    "minify_js": True,
    "keep_closing_tags": True,
    "keep_html_and_head_opening_tags": True,
    "keep_comments": False,
}


def default_should_minify(template: Template) -> bool:
    """Minify templates whose tag contains "html" or "svg" (case-insensitive)."""
    tag = (template.tag or "").lower()
    return "html" in tag or "svg" in tag


def default_should_minify_css(template: Template) -> bool:
    """Minify templates whose tag contains "css" (case-insensitive)."""
    return "css" in (template.tag or "").lower()


@dataclass(frozen=True)
class MinifyLiteralsOptions:
    """
    Options for minify_literals().

    Attributes:
        file_name: Name of the source file, used for source map naming.
        minify_options: Minifier options merged over DEFAULT_MINIFY_OPTIONS.
            ``minify_css`` may be True, False, a dict of CSS options or a
            callable taking the combined CSS string.
        should_minify: Predicate selecting HTML templates.
        should_minify_css: Predicate selecting CSS templates.
        generate_source_map: Callable ``(buffer, file_name) -> SourceMap``,
            or False to skip source maps.
        validate: Validation to run, or False to disable validation.
        parse_literals: Callable ``(source, file_name, **options) -> list[Template]``.
        parse_literals_options: Keyword arguments forwarded to parse_literals.
        edit_buffer: Factory ``source -> EditBufferLike``.
        strategy: Minification strategy (default: DefaultStrategy).
        max_workers: Worker threads for concurrent template minification.
    """

    file_name: str = ""
    minify_options: Dict[str, Any] = field(default_factory=dict)
    should_minify: Optional[Callable[[Template], bool]] = None
    should_minify_css: Optional[Callable[[Template], bool]] = None
    generate_source_map: Union[
        Callable[["EditBufferLike", str], Optional["SourceMap"]], bool, None
    ] = None
    validate: Union["Validation", bool, None] = None
    parse_literals: Optional[Callable[..., Any]] = None
    parse_literals_options: Dict[str, Any] = field(default_factory=dict)
    edit_buffer: Optional[Callable[[str], "EditBufferLike"]] = None
    strategy: Optional["Strategy"] = None
    max_workers: Optional[int] = None

    def resolved_minify_options(self) -> Dict[str, Any]:
        """Return DEFAULT_MINIFY_OPTIONS overlaid with the caller's options."""
        return {**DEFAULT_MINIFY_OPTIONS, **self.minify_options}
