"""Answer normalization and comparison."""

from __future__ import annotations

import logging
import re
from pathlib import Path

__all__ = [
    "display_label",
    "equivalent",
    "label_for",
    "normalize",
]

logger = logging.getLogger(__name__)

# Everything except ASCII letters, digits and the sharp/flat signs is a
# separator.
_separator_re = re.compile(r"[^A-Za-z0-9#♭]+")
_accidentals_re = re.compile(r"[#♭]+")


def normalize(text: str) -> str:
    """Return the canonical comparison form of ``text``.

    >>> normalize("A Major/Open")
    'a major open'
    """
    return _separator_re.sub(" ", text.strip().lower()).strip()


def equivalent(actual: str, expected: str) -> bool:
    """Return ``True`` when ``actual`` names the same answer as ``expected``.

    Both sides are normalized and then compared token by token, so
    ``"A major/open"`` matches ``"A major open"`` but ``"open A major"``
    does not. A sharp or flat sign written apart from its note (``"c #"``)
    belongs to the token before it.
    """
    left = normalize(actual)
    right = normalize(expected)
    logger.debug("Compare %r and %r", right, left)
    if left == right:
        return True
    return _tokens(left) == _tokens(right)


def _tokens(normalized: str) -> list[str]:
    tokens: list[str] = []
    for token in normalized.split():
        if tokens and _accidentals_re.fullmatch(token):
            tokens[-1] += token
        else:
            tokens.append(token)
    return tokens


def display_label(text: str) -> str:
    normalized = normalize(text)
    if not normalized:
        return normalized
    return normalized[0].upper() + normalized[1:]


def label_for(path: Path) -> str:
    """Return the display label a sample file stands for."""
    return display_label(Path(path).stem)
