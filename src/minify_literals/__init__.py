"""Top-level package for minify-literals.

Minifies HTML and CSS embedded in tagged template literals (``html``,
``svg``, ``css``) while keeping every ``${...}`` expression in place.

Provides subpackages:
- minify_literals.parsing – template literal discovery in JS/TS source
- minify_literals.strategy – placeholder protocol and minifier adapters
- minify_literals.editing – edit buffer and source map generation
"""

from .config import (
    DEFAULT_MINIFY_OPTIONS,
    MinifyLiteralsOptions,
    default_should_minify,
    default_should_minify_css,
)
from .errors import (
    CSSMinifyError,
    LiteralParseError,
    MinifyLiteralsError,
    PartCountError,
    PlaceholderError,
    PlaceholderNotFoundError,
    ProtocolViolationError,
)
from .models import MinifyResult, Template, TemplatePart
from .pipeline import default_generate_source_map, minify_literals
from .strategy import DefaultStrategy, Strategy, default_strategy
from .validation import DefaultValidation, Validation, default_validation


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version
        return pkg_version("minify-literals")
    except Exception:
        return "0.0.0"


__version__ = _get_version()
__all__ = [
    "__version__",
    "minify_literals",
    "default_generate_source_map",
    "MinifyLiteralsOptions",
    "DEFAULT_MINIFY_OPTIONS",
    "default_should_minify",
    "default_should_minify_css",
    "MinifyResult",
    "Template",
    "TemplatePart",
    "Strategy",
    "DefaultStrategy",
    "default_strategy",
    "Validation",
    "DefaultValidation",
    "default_validation",
    "MinifyLiteralsError",
    "ProtocolViolationError",
    "PlaceholderError",
    "PartCountError",
    "PlaceholderNotFoundError",
    "CSSMinifyError",
    "LiteralParseError",
]
