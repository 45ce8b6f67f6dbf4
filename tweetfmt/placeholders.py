from __future__ import annotations

import re
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Sequence, Union

from .errors import UnexpectedPlaceholderError

# A backslash right before `$` escapes the placeholder; the backslash stays in the output.
# Field names never span lines.
_PLACEHOLDER_RE = re.compile(r"(?<!\\)\$\{(?P<field>.*?)\}")

MAX_SUGGESTIONS = 3
SUGGESTION_CUTOFF = 0.6


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class PlaceholderNode:
    field: str


TemplateNode = Union[TextNode, PlaceholderNode]


def suggest_fields(
    word: str,
    fields: Sequence[str],
    *,
    n: int = MAX_SUGGESTIONS,
    cutoff: float = SUGGESTION_CUTOFF,
) -> list[str]:
    """
    Return up to `n` fields similar to `word`, best first.

    Scores are `difflib.SequenceMatcher` ratios; ties keep the order of `fields`.
    """
    if not word or n <= 0:
        return []

    matcher = SequenceMatcher()
    matcher.set_seq2(word)

    scored: list[tuple[float, int, str]] = []
    for idx, candidate in enumerate(fields):
        matcher.set_seq1(candidate)
        if (
            matcher.real_quick_ratio() >= cutoff
            and matcher.quick_ratio() >= cutoff
            and matcher.ratio() >= cutoff
        ):
            scored.append((matcher.ratio(), idx, candidate))

    scored.sort(key=lambda item: (-item[0], item[1]))
    return [candidate for _, _, candidate in scored[:n]]


def parse(template: str, fields: Sequence[str]) -> tuple[TemplateNode, ...]:
    """
    Compile a template string into literal and placeholder nodes.

    Raises UnexpectedPlaceholderError for any `${...}` naming a field outside
    `fields`, including the empty `${}`.
    """
    legal = tuple(fields)
    nodes: list[TemplateNode] = []
    pos = 0

    for match in _PLACEHOLDER_RE.finditer(template):
        if match.start() > pos:
            nodes.append(TextNode(template[pos : match.start()]))

        field = match.group("field")
        if field not in legal:
            raise UnexpectedPlaceholderError(
                field,
                legal,
                suggestions=suggest_fields(field, legal),
            )
        nodes.append(PlaceholderNode(field))
        pos = match.end()

    if pos < len(template):
        nodes.append(TextNode(template[pos:]))

    return tuple(nodes)
