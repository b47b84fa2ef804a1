"""
Tests for strategy.placeholders

Test Coverage:
- get_html_placeholder(): Base token and collision lengthening
- classify_css_boundary(): Every stylesheet position
- get_css_placeholder(): Token shapes, short-circuiting, determinism
- Collision freedom against template text
"""
import re

import pytest

from minify_literals.strategy.placeholders import (
    CSSPosition,
    classify_css_boundary,
    get_css_placeholder,
    get_html_placeholder,
    get_placeholder,
    strip_css_comments,
)


TOKEN_RE = r"tmp_[0-9a-f]{12}"


def test_html_placeholder_default(make_parts):
    """Uses the base call-style token when nothing collides."""
    assert get_html_placeholder(make_parts("<p>", "</p>")) == "@TEMPLATE_EXPRESSION();"


def test_html_placeholder_lengthens_on_collision(make_parts):
    """Appends underscores until no part contains the token."""
    parts = make_parts("<p>@TEMPLATE_EXPRESSION();", "@TEMPLATE_EXPRESSION_();</p>")
    assert get_html_placeholder(parts) == "@TEMPLATE_EXPRESSION__();"


def test_get_placeholder_dispatches_on_tag(make_parts):
    """Tags containing "css" get stylesheet tokens, everything else markup."""
    parts = make_parts(":host { color: ", "; }")
    assert get_placeholder(parts, "html") == "@TEMPLATE_EXPRESSION();"
    assert get_placeholder(parts, None) == "@TEMPLATE_EXPRESSION();"
    assert isinstance(get_placeholder(parts, "CSS"), list)


@pytest.mark.parametrize(
    "before, after, expected",
    [
        ("", " {\n  color: red;\n}", CSSPosition.SELECTOR),
        (":host {\n  ", ": red;\n}", CSSPosition.KEY),
        (":host { color: red; }\n", "\n", CSSPosition.RULE),
        ("   ", "\n.card {}", CSSPosition.RULE),
        (":host { width: ", "px; }", CSSPosition.UNIT),
        (":host { color: ", "; }", CSSPosition.VALUE),
        (":host { color: rgb(", ", 0, 0); }", CSSPosition.PARAM),
    ],
)
def test_classify_css_boundary(before, after, expected):
    """Classifies each syntactic position."""
    assert classify_css_boundary(before, after) is expected


def test_classify_ignores_comments():
    """A trailing comment does not hide a declaration value position."""
    assert classify_css_boundary(":host { color: /* brand */ ", "; }") is CSSPosition.VALUE


def test_strip_css_comments_multiline():
    assert strip_css_comments("a /* x\ny */ b") == "a  b"


def test_css_value_placeholder(make_parts):
    """Declaration values get var(--token)."""
    placeholder = get_css_placeholder(make_parts(":host { color: ", "; }"))
    assert isinstance(placeholder, list)
    assert len(placeholder) == 1
    assert re.fullmatch(rf"var\(--{TOKEN_RE}\)", placeholder[0])


def test_css_key_placeholder(make_parts):
    """Property names get a custom-property token."""
    placeholder = get_css_placeholder(make_parts(":host { ", ": red; }"))
    assert re.fullmatch(rf"--{TOKEN_RE}", placeholder[0])


def test_css_selector_short_circuits(make_parts):
    """A selector expression yields one token for the whole template."""
    parts = make_parts("", " { color: ", "; }")
    placeholder = get_css_placeholder(parts)
    assert isinstance(placeholder, str)
    assert re.fullmatch(rf"#{TOKEN_RE}", placeholder)


def test_css_rule_short_circuits(make_parts):
    """A rule expression yields a single call-style token."""
    parts = make_parts(":host { color: ", "; }\n", "\n")
    placeholder = get_css_placeholder(parts)
    assert isinstance(placeholder, str)
    assert re.fullmatch(rf"@{TOKEN_RE}\(\);", placeholder)


def test_css_unit_placeholder_is_unique_numeral(make_parts):
    """Unit positions get a numeral absent from the surrounding text."""
    parts = make_parts(":host { margin: 1px 2px ", "px ", "em; }")
    placeholder = get_css_placeholder(parts)
    assert len(placeholder) == 2
    for token in placeholder:
        assert token.isdigit()
        assert not token.startswith("0")
        assert all(token not in part.text for part in parts)
    assert placeholder[0] != placeholder[1]


def test_css_mixed_positions_share_base(make_parts):
    """Non short-circuited tokens are derived from one base string."""
    parts = make_parts(":host { ", ": ", "; border: 1px solid rgb(", ", 0, 0); }")
    key, value, param = get_css_placeholder(parts)
    base = key[2:]
    assert value == f"var(--{base})"
    assert param == f"var(--{base})"


def test_css_no_expressions(make_parts):
    """A template without expressions has an empty token list."""
    assert get_css_placeholder(make_parts(":host { color: red; }")) == []


def test_placeholder_is_deterministic(make_parts):
    """The same parts always produce the same placeholder."""
    parts = make_parts(":host { width: ", "px; color: ", "; }")
    assert get_css_placeholder(parts) == get_css_placeholder(list(parts))


def test_different_templates_get_different_bases(make_parts):
    first = get_css_placeholder(make_parts("a { color: ", "; }"))
    second = get_css_placeholder(make_parts("b { color: ", "; }"))
    assert first != second


def test_css_placeholder_never_collides(make_parts):
    """Tokens never occur in the template text, even when text mimics them."""
    parts = make_parts(":host { color: ", "; }")
    token = get_css_placeholder(parts)[0]
    base = token[len("var(--"):-1]

    crafted = make_parts(f":host {{ --{base}: 1; color: ", "; }")
    crafted_token = get_css_placeholder(crafted)[0]
    assert all(crafted_token[len("var(--"):-1] not in part.text for part in crafted)
