"""
Tests for strategy.splitting

Test Coverage:
- combine_html_strings(): Single-token and ordered-token joins
- split_html_by_placeholder(): Dropped semicolons, strict ordered scan
- Round trip of combine and split
"""
import pytest

from minify_literals.errors import PlaceholderNotFoundError
from minify_literals.strategy.placeholders import get_placeholder
from minify_literals.strategy.splitting import combine_html_strings, split_html_by_placeholder


HTML_TOKEN = "@TEMPLATE_EXPRESSION();"


def test_combine_single_token(make_parts):
    parts = make_parts("<a href=\"", "\">", "</a>")
    combined = combine_html_strings(parts, HTML_TOKEN)
    assert combined == f"<a href=\"{HTML_TOKEN}\">{HTML_TOKEN}</a>"


def test_combine_ordered_tokens(make_parts):
    """Each part is followed by its own token, except the last."""
    parts = make_parts("a{width:", "px;color:", "}")
    assert combine_html_strings(parts, ["11", "var(--t)"]) == "a{width:11px;color:var(--t)}"


def test_split_single_token():
    html = f"<p>{HTML_TOKEN}</p><b>{HTML_TOKEN}</b>"
    assert split_html_by_placeholder(html, HTML_TOKEN) == ["<p>", "</p><b>", "</b>"]


def test_split_tolerates_dropped_semicolon():
    """Minifiers may strip the token's trailing semicolon."""
    html = "<p style=\"color:@TEMPLATE_EXPRESSION()\">@TEMPLATE_EXPRESSION();</p>"
    assert split_html_by_placeholder(html, HTML_TOKEN) == [
        "<p style=\"color:",
        "\">",
        "</p>",
    ]


def test_split_without_semicolon_suffix_is_plain_split():
    assert split_html_by_placeholder("#t{a}#t{b}", "#t") == ["", "{a}", "{b}"]


def test_split_ordered_tokens():
    assert split_html_by_placeholder("a{width:11px;color:var(--t)}", ["11", "var(--t)"]) == [
        "a{width:",
        "px;color:",
        "}",
    ]


def test_split_ordered_tokens_scans_left_to_right():
    """Repeated tokens are matched in order from the previous match."""
    html = "a{color:var(--t);background:var(--t)}"
    assert split_html_by_placeholder(html, ["var(--t)", "var(--t)"]) == [
        "a{color:",
        ";background:",
        "}",
    ]


def test_split_ordered_token_missing_raises():
    with pytest.raises(PlaceholderNotFoundError, match="var\\(--gone\\)"):
        split_html_by_placeholder("a{width:11px}", ["11", "var(--gone)"])


def test_split_ordered_tokens_out_of_order_raises():
    """A token that only appears before the cursor is not found."""
    with pytest.raises(PlaceholderNotFoundError):
        split_html_by_placeholder("a{color:var(--b);width:12px}", ["12", "var(--b)"])


def test_split_empty_token_list():
    assert split_html_by_placeholder("a{color:red}", []) == ["a{color:red}"]


@pytest.mark.parametrize(
    "tag, texts",
    [
        ("html", ("<ul>", "<li>", "</li>", "</ul>")),
        ("html", ("", "", "")),
        ("css", (":host { width: ", "px; color: ", "; }")),
        ("css", ("", " { color: red; }")),
        ("css", (":host { color: red; }\n", "\n", "\n")),
    ],
)
def test_combine_split_round_trip(make_parts, tag, texts):
    """Splitting an unmodified combination returns every part's text."""
    parts = make_parts(*texts)
    placeholder = get_placeholder(parts, tag)
    combined = combine_html_strings(parts, placeholder)
    assert split_html_by_placeholder(combined, placeholder) == list(texts)
