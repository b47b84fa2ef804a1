import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import minify_literals
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from minify_literals.models import TemplatePart  # noqa: E402


def build_parts(*texts: str, expression: str = "${x}") -> list:
    """Lay texts out as if separated by ``expression`` in a template body."""
    parts = []
    offset = 0
    for text in texts:
        parts.append(TemplatePart(text=text, start=offset, end=offset + len(text)))
        offset += len(text) + len(expression)
    return parts


# Common test fixtures
@pytest.fixture
def make_parts():
    """Factory for TemplatePart lists from literal texts."""
    return build_parts
