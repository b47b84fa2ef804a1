"""
Module: strategy.placeholders

Purpose:
    Generates placeholder tokens that stand in for ``${...}`` expressions
    while a template's literal text is minified.

Key Functions:
    - get_placeholder(): Markup or stylesheet placeholder for a template
    - get_html_placeholder(): Single call-style token for markup
    - get_css_placeholder(): Context-aware tokens for stylesheets
    - classify_css_boundary(): Syntactic position of one expression slot

Dependencies:
    - hashlib (std): Deterministic token derivation

Used By:
    - strategy.default.DefaultStrategy

Design Notes:
    Tokens are derived from a digest of the part texts rather than a random
    source, so the same parts always produce the same placeholder while
    different templates still get distinguishable tokens. Every token is
    checked against the template text so it never collides with a literal.
"""

from __future__ import annotations

import hashlib
import re
from enum import Enum
from typing import List, Optional, Sequence, Union

from minify_literals.models import TemplatePart

HTML_PLACEHOLDER_BASE = "@TEMPLATE_EXPRESSION"
# "@name();" survives CSS minification as an at-rule and HTML minification as
# a tag/attribute/text atom. The trailing ";" may still be dropped.
HTML_PLACEHOLDER_SUFFIX = "();"
CSS_BASE_PREFIX = "tmp_"

Placeholder = Union[str, List[str]]

_CSS_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_SELECTOR_RE = re.compile(r"^\s*\{")
_KEY_RE = re.compile(r"^\s*:")
_RULE_RE = re.compile(r"\}\s*$")
_UNIT_RE = re.compile(r"^\w")
_VALUE_RE = re.compile(r":\s*$")


class CSSPosition(str, Enum):
    """Where an expression sits in stylesheet syntax."""
    SELECTOR = "selector"  # ${sel} { ... }
    KEY = "key"            # ${name}: value;
    RULE = "rule"          # } ${rule} or a template starting with ${rule}
    UNIT = "unit"          # width: ${n}px;
    VALUE = "value"        # color: ${value};
    PARAM = "param"        # rgb(${r}, ${g}, ${b})

    def __str__(self) -> str:
        return self.value


def strip_css_comments(css: str) -> str:
    """Remove ``/* ... */`` comments."""
    return _CSS_COMMENT_RE.sub("", css)


def classify_css_boundary(before: str, after: str) -> CSSPosition:
    """
    Classify the expression slot between two literal segments.

    Comments are stripped from both sides first so that commented-out
    declarations cannot mislead the classifier.

    Args:
        before: Literal text preceding the expression.
        after: Literal text following the expression.

    Returns:
        The CSSPosition of the slot. Checks run in a fixed order: selector,
        key, rule, unit, value, then param as the fallback.

    Example:
        >>> classify_css_boundary("a { color: ", "; }")
        <CSSPosition.VALUE: 'value'>
        >>> classify_css_boundary("", " { color: red; }")
        <CSSPosition.SELECTOR: 'selector'>
    """
    before_css = strip_css_comments(before)
    after_css = strip_css_comments(after)

    if _SELECTOR_RE.search(after_css):
        return CSSPosition.SELECTOR
    if _KEY_RE.search(after_css):
        return CSSPosition.KEY
    if _RULE_RE.search(before_css) or not before_css.strip():
        return CSSPosition.RULE
    if _UNIT_RE.search(after_css):
        return CSSPosition.UNIT
    if _VALUE_RE.search(before_css):
        return CSSPosition.VALUE
    return CSSPosition.PARAM


def is_css_tag(tag: Optional[str]) -> bool:
    return "css" in (tag or "").lower()


def get_placeholder(parts: Sequence[TemplatePart], tag: Optional[str] = None) -> Placeholder:
    """
    Get a placeholder for the given template parts.

    Args:
        parts: Template parts the placeholder must not collide with.
        tag: Template tag; tags containing "css" get stylesheet tokens.

    Returns:
        A single token (markup, or a short-circuited stylesheet template)
        or one token per expression slot.
    """
    if is_css_tag(tag):
        return get_css_placeholder(parts)
    return get_html_placeholder(parts)


def get_html_placeholder(parts: Sequence[TemplatePart]) -> str:
    """
    Single markup token, lengthened with "_" until no part contains it.

    Example:
        >>> get_html_placeholder([TemplatePart("<p>", 0, 3)])
        '@TEMPLATE_EXPRESSION();'
    """
    base = HTML_PLACEHOLDER_BASE
    while any(base + HTML_PLACEHOLDER_SUFFIX in part.text for part in parts):
        base += "_"
    return base + HTML_PLACEHOLDER_SUFFIX


def _digest(texts: Sequence[str], salt: int) -> str:
    hasher = hashlib.sha256()
    hasher.update(str(salt).encode("ascii"))
    for text in texts:
        hasher.update(b"\0")
        hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()


def _css_base(texts: Sequence[str]) -> str:
    salt = 0
    while True:
        base = CSS_BASE_PREFIX + _digest(texts, salt)[:12]
        if not any(base in text for text in texts):
            return base
        salt += 1


def _unit_number(texts: Sequence[str], before: str, boundary: int) -> str:
    # 48-bit numerals, never starting with 0 so minifiers cannot shorten them
    salt = boundary
    while True:
        number = str(int(_digest(texts, -salt - 1)[:12], 16) % 281474976710655 + 1)
        if number not in before and not any(number in text for text in texts):
            return number
        salt += len(texts)


def get_css_placeholder(parts: Sequence[TemplatePart]) -> Placeholder:
    """
    Stylesheet placeholder, chosen per expression slot.

    Selector and rule positions cannot be represented per slot, so they
    short-circuit to a single token used for every slot in the template.

    Args:
        parts: Template parts.

    Returns:
        ``#tmp_...`` or ``@tmp_...();`` for short-circuited templates,
        otherwise a list of ``--tmp_...``, ``var(--tmp_...)`` and numeral
        tokens, one per expression.
    """
    texts = [part.text for part in parts]
    base = _css_base(texts)
    placeholder: List[str] = []
    before_full = ""

    for i in range(1, len(parts)):
        before_full += texts[i - 1]
        position = classify_css_boundary(texts[i - 1], texts[i])

        if position is CSSPosition.SELECTOR:
            return f"#{base}"
        if position is CSSPosition.RULE:
            return f"@{base}{HTML_PLACEHOLDER_SUFFIX}"

        if position is CSSPosition.KEY:
            token = f"--{base}"
        elif position is CSSPosition.UNIT:
            token = _unit_number(texts, before_full, i)
        else:
            token = f"var(--{base})"
        placeholder.append(token)
        before_full += token

    return placeholder
