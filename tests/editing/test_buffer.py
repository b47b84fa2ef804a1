"""
Tests for editing.buffer

Test Coverage:
- EditBuffer.overwrite(): Ordering, range checks, overlap rejection
- EditBuffer.to_string(): Applying edits against original offsets
- EditBuffer.generate_map(): Hires and line-level mappings, file naming
"""
import pytest

from minify_literals.editing import EditBuffer, EditBufferLike


def test_overwrite_out_of_order():
    """Edits address original offsets, so order does not matter."""
    buffer = EditBuffer("one two three")
    buffer.overwrite(8, 13, "3")
    buffer.overwrite(0, 3, "1")
    buffer.overwrite(4, 7, "2")
    assert buffer.to_string() == "1 2 3"


def test_overwrite_with_empty_content():
    buffer = EditBuffer("a  b")
    buffer.overwrite(1, 3, "")
    assert buffer.to_string() == "ab"


def test_no_edits_returns_original():
    buffer = EditBuffer("unchanged")
    assert buffer.to_string() == "unchanged"
    assert str(buffer) == "unchanged"


def test_edit_buffer_is_edit_buffer_like():
    assert isinstance(EditBuffer(""), EditBufferLike)


@pytest.mark.parametrize(
    "start, end, message",
    [
        (-1, 2, "outside"),
        (2, 20, "outside"),
        (3, 3, "zero-length"),
        (4, 2, "zero-length"),
    ],
)
def test_overwrite_rejects_bad_ranges(start, end, message):
    buffer = EditBuffer("0123456789")
    with pytest.raises(ValueError, match=message):
        buffer.overwrite(start, end, "x")


@pytest.mark.parametrize(
    "start, end, message",
    [(4, 6, "earlier"), (1, 4, "later"), (3, 5, "later"), (2, 8, "later")],
)
def test_overwrite_rejects_overlaps(start, end, message):
    buffer = EditBuffer("0123456789")
    buffer.overwrite(3, 5, "x")
    with pytest.raises(ValueError, match=message):
        buffer.overwrite(start, end, "y")


def test_adjacent_overwrites_are_allowed():
    buffer = EditBuffer("0123456789")
    buffer.overwrite(3, 5, "a")
    buffer.overwrite(5, 7, "b")
    buffer.overwrite(1, 3, "c")
    assert buffer.to_string() == "0cab789"


class TestGenerateMap:
    """Source map output for edited buffers."""

    def test_hires_maps_every_unedited_character(self):
        buffer = EditBuffer("a  b")
        buffer.overwrite(1, 3, " ")
        assert buffer.generate_map(hires=True).mappings == "AAAA,CAAC,CAAE"

    def test_line_level_mappings(self):
        """Without hires, only line starts of unedited chunks are mapped."""
        buffer = EditBuffer("ab\ncd")
        assert buffer.generate_map().mappings == "AAAA;AACA"

    def test_edit_spanning_lines(self):
        """Each line of replacement content maps to the edit's start."""
        buffer = EditBuffer("abcdef")
        buffer.overwrite(2, 4, "X\nY")
        assert buffer.to_string() == "abX\nYef"
        assert buffer.generate_map().mappings == "AAAA,EAAE;AAAA,CAAE"

    def test_edit_trailing_newline_has_no_empty_segment(self):
        buffer = EditBuffer("abcdef")
        buffer.overwrite(2, 4, "X\n")
        assert buffer.generate_map().mappings == "AAAA,EAAE;AAAE"

    def test_file_and_sources(self):
        buffer = EditBuffer("html`<p> x </p>`")
        buffer.overwrite(5, 15, "<p>x</p>")
        source_map = buffer.generate_map(
            file="dist/app.js.map",
            source="src/app.js",
            include_content=True,
        )
        assert source_map.file == "app.js.map"
        assert source_map.sources == ["../src/app.js"]
        assert source_map.sources_content == ["html`<p> x </p>`"]
        assert source_map.version == 3

    def test_sources_without_source_uses_file(self):
        buffer = EditBuffer("abc")
        buffer.overwrite(0, 1, "A")
        source_map = buffer.generate_map(file="a.js.map")
        assert source_map.sources == ["a.js.map"]
        assert source_map.sources_content == [None]

    def test_sources_without_file(self):
        source_map = EditBuffer("abc").generate_map()
        assert source_map.file is None
        assert source_map.sources == [""]
