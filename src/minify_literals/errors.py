"""
Module: errors

Purpose:
    Exception taxonomy for template literal minification.

    - ProtocolViolationError and subclasses: the placeholder protocol was
      broken (bad placeholder, lost token, part count mismatch). Always
      fatal for the whole source string.
    - CSSMinifyError: the CSS minifier could not process its input. Fatal.
    - LiteralParseError: the source could not be scanned for literals.

    Unsupported constructs (escape hatches, expressions inside HTML comments)
    and CSS minifier warnings are not errors; they are logged and the
    affected scope is left unminified.

Used By:
    - validation, strategy.splitting, strategy.minifiers, parsing.literals
"""


class MinifyLiteralsError(RuntimeError):
    """Base class for all minify-literals errors."""


class ProtocolViolationError(MinifyLiteralsError):
    """The placeholder substitution protocol was violated."""


class PlaceholderError(ProtocolViolationError):
    """A strategy returned an empty or malformed placeholder."""


class PartCountError(ProtocolViolationError):
    """Splitting produced a different number of strings than template parts."""


class PlaceholderNotFoundError(ProtocolViolationError):
    """An ordered placeholder token was missing from the minified output."""


class CSSMinifyError(MinifyLiteralsError):
    """The CSS minifier reported errors."""


class LiteralParseError(MinifyLiteralsError):
    """Source code could not be scanned for template literals."""
