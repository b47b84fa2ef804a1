"""
Module: strategy.splitting

Purpose:
    Forward and inverse halves of the placeholder protocol: join template
    parts around placeholder tokens, and split minified output back into
    one string per template part.

Key Functions:
    - combine_html_strings(): Join part texts with placeholder token(s)
    - split_html_by_placeholder(): Split minified text on the token(s)

Dependencies:
    None (pure functions)

Used By:
    - strategy.default.DefaultStrategy
"""

from __future__ import annotations

from typing import List, Sequence

from minify_literals.errors import PlaceholderNotFoundError
from minify_literals.models import TemplatePart

from .placeholders import Placeholder


def combine_html_strings(parts: Sequence[TemplatePart], placeholder: Placeholder) -> str:
    """
    Combine part texts into one minifiable string.

    Args:
        parts: Template parts to combine.
        placeholder: A single token placed between every pair of parts, or
            one token per expression slot.

    Returns:
        The combined string.

    Example:
        >>> parts = [TemplatePart("<a>", 0, 3), TemplatePart("</a>", 7, 11)]
        >>> combine_html_strings(parts, "@X();")
        '<a>@X();</a>'
    """
    if isinstance(placeholder, str):
        return placeholder.join(part.text for part in parts)
    return "".join(
        part.text + (placeholder[i] if i < len(placeholder) else "")
        for i, part in enumerate(parts)
    )


def split_html_by_placeholder(html: str, placeholder: Placeholder) -> List[str]:
    """
    Split minified text back into one string per template part.

    A single token ending in ";" may lose that semicolon during
    minification (inline styles, the last declaration of a block), so
    pieces are split a second time on the token without it.

    Ordered tokens are matched strictly left to right.

    Args:
        html: Minified combined string.
        placeholder: Placeholder used to combine the parts.

    Returns:
        Strings between placeholder occurrences.

    Raises:
        PlaceholderNotFoundError: If an ordered token cannot be found after
            the previous one.
    """
    if isinstance(placeholder, str):
        pieces = html.split(placeholder)
        if placeholder.endswith(";"):
            without_semicolon = placeholder[:-1]
            for i in range(len(pieces) - 1, -1, -1):
                pieces[i:i + 1] = pieces[i].split(without_semicolon)
        return pieces

    pieces = []
    pos = 0
    for token in placeholder:
        index = html.find(token, pos)
        if index == -1:
            raise PlaceholderNotFoundError(f"placeholder {token} not found in {html!r}")
        pieces.append(html[pos:index])
        pos = index + len(token)
    pieces.append(html[pos:])
    return pieces
