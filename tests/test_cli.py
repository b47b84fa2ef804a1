"""
Tests for cli.main

Test Coverage:
- Writing minified output and its source map
- In-place rewrite, unchanged input, read and minify failures
"""
import json
import logging

from minify_literals.cli import main


SOURCE = "const t = html`<p>\n  ${x}\n</p>`;\n"


def test_writes_output_and_map(tmp_path):
    src = tmp_path / "src" / "app.js"
    src.parent.mkdir()
    src.write_text(SOURCE, encoding="utf-8")
    out = tmp_path / "dist" / "app.js"

    assert main([str(src), "-o", str(out), "--file-name", "app.js"]) == 0

    assert out.read_text(encoding="utf-8") == "const t = html`<p>${x}</p>`;\n"
    source_map = json.loads((tmp_path / "dist" / "app.js.map").read_text(encoding="utf-8"))
    assert source_map["version"] == 3
    assert source_map["file"] == "app.js.map"
    assert source_map["sources"] == ["app.js"]
    assert src.read_text(encoding="utf-8") == SOURCE


def test_in_place_without_map(tmp_path):
    src = tmp_path / "app.js"
    src.write_text(SOURCE, encoding="utf-8")

    assert main([str(src), "--no-source-map"]) == 0

    assert src.read_text(encoding="utf-8") == "const t = html`<p>${x}</p>`;\n"
    assert not (tmp_path / "app.js.map").exists()


def test_unchanged_input_is_copied(tmp_path, caplog):
    src = tmp_path / "app.js"
    src.write_text("const a = 1;\n", encoding="utf-8")
    out = tmp_path / "out.js"

    with caplog.at_level(logging.INFO):
        assert main([str(src), "-o", str(out)]) == 0

    assert out.read_text(encoding="utf-8") == "const a = 1;\n"
    assert not (tmp_path / "out.js.map").exists()
    assert "No changes" in caplog.text


def test_missing_input(tmp_path, caplog):
    assert main([str(tmp_path / "missing.js")]) == 1
    assert "Cannot read" in caplog.text


def test_minify_error(tmp_path, caplog):
    src = tmp_path / "app.js"
    src.write_text("const s = css`:host {\n  color: ${c};\n`;\n", encoding="utf-8")

    assert main([str(src)]) == 1
    assert "Minification failed" in caplog.text
