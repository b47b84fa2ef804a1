"""
Module: strategy.minifiers

Purpose:
    Adapters over the external HTML and CSS minifiers. Each adapter wraps
    the library call with string fix-ups that keep placeholder tokens
    intact and repair known minifier gaps.

Key Functions:
    - minify_markup(): Minify HTML with minify-html
    - minify_stylesheet(): Minify CSS with rcssmin
    - run_css_minifier(): rcssmin call reporting errors and warnings
    - fix_tidy_selectors(): Restore spaces inside pseudo-class arguments
    - collapse_svg_newlines(): Remove line breaks inside <svg> elements

Dependencies:
    - minify_html: HTML minification
    - rcssmin: CSS minification

Used By:
    - strategy.default.DefaultStrategy
"""

from __future__ import annotations

import logging
import re
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import minify_html
import rcssmin

from minify_literals.errors import CSSMinifyError

from .placeholders import HTML_PLACEHOLDER_BASE

logger = logging.getLogger(__name__)

# Options read by minify_markup itself and never forwarded to minify-html
ADAPTER_OPTIONS = frozenset({"collapse_whitespace", "minify_css"})

_TOKEN_NAME = HTML_PLACEHOLDER_BASE.lstrip("@")
_COMMENT_TOKEN_RE = re.compile(
    r"<!--(?:(?!-->).)*?" + re.escape(HTML_PLACEHOLDER_BASE) + r"_*\(\);",
    re.DOTALL,
)
_TAG_TOKEN_RE = re.compile(r"<(/?)(" + re.escape(HTML_PLACEHOLDER_BASE) + r"_*\(\);)")
# minify-html only keeps letters, digits and hyphens in tag names
TAG_SAFE_BASE = "template-expression"
_ATTRIBUTE_VALUE = r"""(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+))?"""
_ATTRIBUTE_RE = re.compile(r"""(?:\s+|(?<=["']))([^\s"'>/=]+)""" + _ATTRIBUTE_VALUE)
_START_TAG_RE = re.compile(
    r"""<[A-Za-z@][^\s"'>/=]*((?:(?:\s+|(?<=["']))[^\s"'>/=]+""" + _ATTRIBUTE_VALUE + r""")*)\s*/?>"""
)
_CALL_KEY_RE = re.compile(r"@(\w+)\(\);:")
_CALL_KEY_SAFE_RE = re.compile(r"--CALL-(\w+):")
_TIDY_SELECTOR_RE = re.compile(r"(::?.+\((.*)\))\s*\{")
_CSS_TOKEN_RE = re.compile(r"tmp_[0-9a-f]{12}|" + _TOKEN_NAME + r"_*(?!\w)")
_NEWLINE_RE = re.compile(r"\r?\n")

CSSOptions = Union[bool, Mapping[str, Any], Callable[[str], str], None]


def css_enabled(minify_css: CSSOptions) -> bool:
    """True when ``minify_css`` asks for CSS minification in any form."""
    return minify_css is True or isinstance(minify_css, Mapping) or callable(minify_css)


def has_comment_placeholder(html: str) -> bool:
    """True if a markup placeholder sits inside an HTML comment."""
    return _COMMENT_TOKEN_RE.search(html) is not None


def collapse_svg_newlines(html: str) -> str:
    """
    Remove line breaks inside every ``<svg ...> ... </svg`` region.

    minify-html keeps newlines inside attribute values, which matters for
    multi-line ``d`` and ``points`` attributes. Regions are processed from
    the last ``<svg`` backwards so earlier offsets stay valid; an ``<svg``
    without a closing tag is left untouched.
    """
    starts = [m.start() for m in re.finditer(r"<svg", html)]
    for start in reversed(starts):
        close = html.find("</svg", start)
        if close < 0:
            continue
        svg = _NEWLINE_RE.sub("", html[start:close])
        html = html[:start] + svg + html[close:]
    return html


def fix_tidy_selectors(original: str, result: str) -> str:
    """
    Restore whitespace inside pseudo-class arguments.

    CSS minifiers collapse ``:nth-child(2n + 1)`` to ``:nth-child(2n+1)``,
    which also mangles placeholder text inside such arguments. Every
    pseudo-class with spaced arguments in ``original`` is looked up in its
    space-stripped form in ``result`` and swapped back.

    Example:
        >>> fix_tidy_selectors("li:nth-child(2n + 1) {}", "li:nth-child(2n+1){}")
        'li:nth-child(2n + 1){}'
    """
    for match in _TIDY_SELECTOR_RE.finditer(original):
        pseudo_class = match.group(1)
        parameters = match.group(2)
        if not re.search(r"\s", parameters):
            continue

        stripped = re.sub(r"\s", "", parameters)
        tidied = pseudo_class.replace(parameters, stripped, 1)
        index = result.find(tidied)
        if index < 0:
            continue
        result = result[:index] + pseudo_class + result[index + len(tidied):]
    return result


def _minify_html_kwargs(options: Mapping[str, Any]) -> Dict[str, Any]:
    kwargs = {key: value for key, value in options.items() if key not in ADAPTER_OPTIONS}
    kwargs["minify_css"] = css_enabled(options.get("minify_css"))
    return kwargs


def protect_tag_tokens(html: str) -> Tuple[str, Dict[str, str]]:
    """
    Replace placeholders in tag-name position with a valid custom element name.

    Each distinct token gets ``template-expression-<n>``, with ``n`` chosen so
    that the name does not already occur in the markup.

    Returns:
        The rewritten markup and a mapping of safe name to token.

    Example:
        >>> protect_tag_tokens("<@TEMPLATE_EXPRESSION();></@TEMPLATE_EXPRESSION();>")
        ('<template-expression-0></template-expression-0>', {'template-expression-0': '@TEMPLATE_EXPRESSION();'})
    """
    tokens = sorted({m.group(2) for m in _TAG_TOKEN_RE.finditer(html)})
    if not tokens:
        return html, {}

    lowered = html.lower()
    safe_names: Dict[str, str] = {}
    counter = 0
    for token in tokens:
        while f"{TAG_SAFE_BASE}-{counter}" in lowered:
            counter += 1
        safe_names[token] = f"{TAG_SAFE_BASE}-{counter}"
        counter += 1

    protected = _TAG_TOKEN_RE.sub(lambda m: f"<{m.group(1)}{safe_names[m.group(2)]}", html)
    return protected, {name: token for token, name in safe_names.items()}


def restore_tag_tokens(html: str, tag_names: Mapping[str, str]) -> str:
    """Undo protect_tag_tokens(), ignoring the case the minifier wrote."""
    for name, token in tag_names.items():
        html = re.sub(
            r"<(/?)" + re.escape(name) + r"(?![\w-])",
            lambda m, token=token: f"<{m.group(1)}{token}",
            html,
            flags=re.IGNORECASE,
        )
    return html


def _attribute_names(html: str) -> Iterator[str]:
    for tag in _START_TAG_RE.finditer(html):
        for attribute in _ATTRIBUTE_RE.finditer(tag.group(1)):
            yield attribute.group(1)


def restore_attribute_case(original: str, result: str) -> str:
    """
    Put back the original case of attribute names lowercased by the minifier.

    lit bindings such as ``.someProp=`` and ``@myEvent=`` are case
    sensitive, and so is a placeholder in attribute-name position. Names
    are matched per lowercase spelling in document order, so repeated
    attributes with different case each get their own spelling back.

    Example:
        >>> restore_attribute_case('<a .fooBar="x">', '<a .foobar=x>')
        '<a .fooBar=x>'
    """
    spellings: Dict[str, List[str]] = {}
    for name in _attribute_names(original):
        spellings.setdefault(name.lower(), []).append(name)
    pending = {
        lower: deque(names)
        for lower, names in spellings.items()
        if any(name != lower for name in names)
    }
    if not pending:
        return result

    def restore_attribute(match: re.Match) -> str:
        name = match.group(1)
        queue = pending.get(name.lower())
        if not queue:
            return match.group(0)
        offset = match.start(1) - match.start()
        return match.group(0)[:offset] + queue.popleft() + match.group(0)[offset + len(name):]

    def restore_tag(match: re.Match) -> str:
        tag = match.group(0)
        start = match.start(1) - match.start()
        end = match.end(1) - match.start()
        return tag[:start] + _ATTRIBUTE_RE.sub(restore_attribute, match.group(1)) + tag[end:]

    return _START_TAG_RE.sub(restore_tag, result)


def minify_markup(html: str, options: Optional[Mapping[str, Any]] = None) -> str:
    """
    Minify a combined HTML string with minify-html.

    Args:
        html: Combined template HTML containing placeholder tokens.
        options: Adapter options (``collapse_whitespace``, ``minify_css``)
            plus keyword arguments for ``minify_html.minify``.

    Returns:
        The minified HTML, or the input unchanged when a placeholder sits
        inside an HTML comment.
    """
    options = options or {}

    if has_comment_placeholder(html):
        logger.warning(
            "HTML minification is not supported for template expressions inside comments. "
            "Minification for this template will be skipped."
        )
        return html

    prepared, tag_names = protect_tag_tokens(html)
    result = minify_html.minify(prepared, **_minify_html_kwargs(options))
    result = restore_tag_tokens(result, tag_names)
    result = restore_attribute_case(html, result)

    if options.get("collapse_whitespace"):
        result = collapse_svg_newlines(result)
    return fix_tidy_selectors(html, result)


@dataclass
class CSSMinifyOutput:
    """
    Output of a CSS minifier run.

    Attributes:
        styles: Minified CSS.
        errors: Problems that make the output unusable.
        warnings: Problems that make the output untrustworthy.
    """
    styles: str
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _structure_errors(css: str) -> List[str]:
    errors = []
    depth = 0
    i = 0
    length = len(css)
    while i < length:
        char = css[i]
        if css.startswith("/*", i):
            end = css.find("*/", i + 2)
            if end < 0:
                errors.append(f"Unterminated comment at offset {i}")
                break
            i = end + 2
            continue
        if char in "\"'":
            j = i + 1
            while j < length and css[j] != char and css[j] != "\n":
                j += 2 if css[j] == "\\" else 1
            if j >= length or css[j] != char:
                errors.append(f"Unterminated string at offset {i}")
                break
            i = j + 1
            continue
        if char == "\\":
            i += 2
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth < 0:
                errors.append(f"Unexpected '}}' at offset {i}")
                depth = 0
        i += 1
    if depth > 0:
        errors.append(f"{depth} unclosed '{{' block(s)")
    return errors


def run_css_minifier(css: str, options: Optional[Mapping[str, Any]] = None) -> CSSMinifyOutput:
    """
    Minify CSS with rcssmin and audit the result.

    rcssmin accepts any input, so malformed structure is reported here as
    errors. Placeholder-shaped tokens that disappear or multiply during
    minification are reported as warnings.

    Args:
        css: CSS to minify.
        options: Keyword arguments for ``rcssmin.cssmin``.

    Returns:
        CSSMinifyOutput with styles, errors and warnings.
    """
    errors = _structure_errors(css)
    if errors:
        return CSSMinifyOutput(styles=css, errors=errors)

    try:
        styles = rcssmin.cssmin(css, **dict(options or {}))
    except (TypeError, ValueError) as e:
        return CSSMinifyOutput(styles=css, errors=[f"rcssmin failed: {e}"])

    warnings = []
    before = Counter(_CSS_TOKEN_RE.findall(css))
    after = Counter(_CSS_TOKEN_RE.findall(styles))
    for token in sorted(set(before) | set(after)):
        if before[token] != after[token]:
            warnings.append(
                f"Placeholder {token} occurs {before[token]} time(s) in input "
                f"but {after[token]} time(s) in output"
            )
    return CSSMinifyOutput(styles=styles, warnings=warnings)


def minify_stylesheet(css: str, options: Optional[Mapping[str, Any]] = None) -> str:
    """
    Minify a combined CSS string.

    Args:
        css: Combined template CSS containing placeholder tokens.
        options: Keyword arguments for ``rcssmin.cssmin``.

    Returns:
        Minified CSS, or the input with line breaks removed when the
        minifier raised warnings.

    Raises:
        CSSMinifyError: If the minifier reported errors.
    """
    prepared = _CALL_KEY_RE.sub(r"--CALL-\1:", css)
    output = run_css_minifier(prepared, options)

    if output.errors:
        raise CSSMinifyError("\n\n".join(output.errors))

    if output.warnings:
        for warning in output.warnings:
            logger.warning(warning)
        logger.warning("Warnings during CSS minification, template was left unminified.")
        return css.replace("\r", "").replace("\n", "")

    styles = _CALL_KEY_SAFE_RE.sub(r"@\1();:", output.styles)
    return fix_tidy_selectors(css, styles)
