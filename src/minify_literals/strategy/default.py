"""Default strategy: minify-html for markup, rcssmin for stylesheets."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence

from minify_literals.models import TemplatePart

from .base import Strategy
from .minifiers import minify_markup, minify_stylesheet
from .placeholders import Placeholder, get_placeholder
from .splitting import combine_html_strings, split_html_by_placeholder


class DefaultStrategy(Strategy):
    """Strategy backed by the bundled placeholder scheme and minifier adapters."""

    def get_placeholder(
        self, parts: Sequence[TemplatePart], tag: Optional[str] = None
    ) -> Placeholder:
        return get_placeholder(parts, tag)

    def combine_html_strings(
        self, parts: Sequence[TemplatePart], placeholder: Placeholder
    ) -> str:
        return combine_html_strings(parts, placeholder)

    def minify_html(self, html: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return minify_markup(html, options)

    def minify_css(self, css: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return minify_stylesheet(css, options)

    @property
    def supports_css(self) -> bool:
        return True

    def split_html_by_placeholder(self, html: str, placeholder: Placeholder) -> List[str]:
        return split_html_by_placeholder(html, placeholder)


default_strategy = DefaultStrategy()
