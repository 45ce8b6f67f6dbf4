from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Sequence

from . import graphemes
from .post import (
    AnnotationSpan,
    DroppedSpan,
    DropReason,
    EntitySegment,
    Post,
    Segment,
    SegmentedPost,
    TextSegment,
)
from .run_log import RunLogger

# Wider annotations first so that nested ones fall inside an entity and get dropped.
_KIND_PRIORITY = {
    "url": 0,
    "media": 0,
    "hashtag": 1,
    "cashtag": 2,
    "mention": 3,
}


@dataclass(frozen=True)
class SegmentationResult:
    segments: tuple[Segment, ...]
    dropped: tuple[DroppedSpan, ...] = ()


@dataclass
class _Piece:
    start: int
    end: int
    segment: Segment


class _Partition:
    """
    Ordered, contiguous pieces covering `[0, len)` of a grapheme list.

    `starts` mirrors the piece start offsets so the containing piece of any
    position is a single bisect away.
    """

    def __init__(self, clusters: Sequence[str]) -> None:
        self._clusters = clusters
        # An empty body still starts as one (empty) text segment.
        self.pieces: list[_Piece] = [_Piece(0, len(clusters), TextSegment("".join(clusters)))]
        self.starts: list[int] = [0]

    def __len__(self) -> int:
        return len(self._clusters)

    def locate(self, position: int) -> int:
        return bisect_right(self.starts, position) - 1

    def slice(self, start: int, end: int) -> str:
        return "".join(self._clusters[start:end])

    def replace(self, index: int, pieces: list[_Piece]) -> None:
        # List splice: O(pieces) per span, so O(spans^2) in the worst case.
        # Lookup stays O(log pieces) via `starts`.
        self.pieces[index : index + 1] = pieces
        self.starts[index : index + 1] = [p.start for p in pieces]


def order_spans(spans: Iterable[AnnotationSpan]) -> list[AnnotationSpan]:
    """
    Stable-sort spans so urls come before hashtags, cashtags, then mentions.
    """
    return sorted(spans, key=lambda s: _KIND_PRIORITY.get(s.kind, len(_KIND_PRIORITY)))


def _check_span(partition: _Partition, span: AnnotationSpan) -> tuple[int, DropReason | None]:
    if span.start < 0 or span.end > len(partition) or span.start > span.end:
        return -1, "out_of_range"
    if span.start == span.end:
        return -1, "empty_span"

    index = partition.locate(span.start)
    piece = partition.pieces[index]
    if span.end > piece.end:
        return index, "not_contained"
    if not isinstance(piece.segment, TextSegment):
        return index, "nested_in_entity"
    return index, None


def segment(
    body: str,
    spans: Iterable[AnnotationSpan],
    *,
    logger: RunLogger | None = None,
    post_id: str | None = None,
) -> SegmentationResult:
    """
    Split `body` into text and entity segments, one span at a time, in the order given.

    Spans that no longer fit inside a single text segment are dropped and reported
    in `dropped` instead of raising; upstream annotations are trusted but not assumed
    consistent.

    Locating the containing segment is a bisect, but splicing it out is a list
    replace, so the worst case is quadratic in the number of spans.
    """
    partition = _Partition(graphemes.split(body))
    dropped: list[DroppedSpan] = []

    for span in spans:
        index, reason = _check_span(partition, span)
        if reason is not None:
            drop = DroppedSpan(span=span, reason=reason)
            dropped.append(drop)
            if logger is not None:
                logger.span_dropped(drop, post_id=post_id)
            continue

        container = partition.pieces[index]
        replacement: list[_Piece] = []
        if container.start < span.start:
            head = partition.slice(container.start, span.start)
            replacement.append(_Piece(container.start, span.start, TextSegment(head)))

        body_text = partition.slice(span.start, span.end)
        replacement.append(
            _Piece(span.start, span.end, EntitySegment(text=body_text, payload=span.payload))
        )

        if span.end < container.end:
            tail = partition.slice(span.end, container.end)
            replacement.append(_Piece(span.end, container.end, TextSegment(tail)))

        partition.replace(index, replacement)

    return SegmentationResult(
        segments=tuple(p.segment for p in partition.pieces),
        dropped=tuple(dropped),
    )


def segment_post(post: Post, *, logger: RunLogger | None = None) -> SegmentedPost:
    result = segment(post.body, order_spans(post.spans), logger=logger, post_id=post.id)
    return SegmentedPost(post=post, segments=result.segments, dropped=result.dropped)
