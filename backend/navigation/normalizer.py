"""
Command normalizer.

Strips navigational filler phrases from a transcript to isolate the
candidate keyword used for exact-match route lookup.

Known fragility (SUBSTRING mode):
- Phrases are removed wherever they appear, including inside words
  ("reopen" -> "re").
- Multiple filler phrases are all removed, which can concatenate the
  remaining fragments.

TOKEN mode only removes phrases on word boundaries. It is opt-in and changes
matching semantics.
"""

from __future__ import annotations

import re
from enum import Enum

from constants import FILLER_PHRASES


class FillerMatching(str, Enum):
    """How filler phrases are matched inside a transcript."""

    SUBSTRING = "substring"
    TOKEN = "token"

    @classmethod
    def parse(cls, value: object) -> FillerMatching:
        if not isinstance(value, str) or not value:
            return cls.SUBSTRING
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.SUBSTRING


_TOKEN_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\b{re.escape(phrase)}\b") for phrase in FILLER_PHRASES
)


def normalize_command(
    transcript: str,
    mode: FillerMatching = FillerMatching.SUBSTRING,
) -> str:
    """
    Reduce a raw transcript to a single candidate keyword.

    Example:
        >>> normalize_command("Go to Products")
        'products'
    """
    command = transcript.lower().strip()

    if mode is FillerMatching.TOKEN:
        for pattern in _TOKEN_PATTERNS:
            command = pattern.sub(" ", command)
    else:
        for phrase in FILLER_PHRASES:
            command = command.replace(phrase, "")

    return " ".join(command.split())
