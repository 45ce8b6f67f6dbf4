from __future__ import annotations

import regex

_GRAPHEME_RE = regex.compile(r"\X")


def split(text: str) -> list[str]:
    """
    Split text into extended grapheme clusters.

    Emoji ZWJ sequences, regional-indicator flags and combining marks each
    count as a single unit.
    """
    if not text:
        return []
    return _GRAPHEME_RE.findall(text)


def length(text: str) -> int:
    return len(split(text))
