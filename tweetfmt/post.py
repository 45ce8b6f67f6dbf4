from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal, Union

EntityKind = Literal["url", "media", "hashtag", "cashtag", "mention"]


@dataclass(frozen=True)
class User:
    name: str
    username: str
    id: str | None = None


@dataclass(frozen=True)
class MediaPhoto:
    url: str

    type: ClassVar[str] = "photo"


@dataclass(frozen=True)
class MediaVideo:
    thumbnail: str

    type: ClassVar[str] = "video"


Media = Union[MediaPhoto, MediaVideo]


@dataclass(frozen=True)
class UrlEntity:
    short_url: str
    expanded_url: str
    decoded_url: str
    display_url: str | None = None
    title: str | None = None

    kind: ClassVar[EntityKind] = "url"


@dataclass(frozen=True)
class MediaEntity:
    """A url annotation that points at an attached photo or video."""

    media_key: str
    media: Media

    kind: ClassVar[EntityKind] = "media"


@dataclass(frozen=True)
class HashtagEntity:
    tag: str
    hashmoji: str | None = None

    kind: ClassVar[EntityKind] = "hashtag"


@dataclass(frozen=True)
class CashtagEntity:
    tag: str

    kind: ClassVar[EntityKind] = "cashtag"


@dataclass(frozen=True)
class MentionEntity:
    username: str
    user_id: str | None = None

    kind: ClassVar[EntityKind] = "mention"


EntityPayload = Union[UrlEntity, MediaEntity, HashtagEntity, CashtagEntity, MentionEntity]


@dataclass(frozen=True)
class AnnotationSpan:
    """
    A `[start, end)` interval over a post body, in grapheme-cluster units.
    """

    start: int
    end: int
    payload: EntityPayload

    @property
    def kind(self) -> EntityKind:
        return self.payload.kind


@dataclass(frozen=True)
class TextSegment:
    text: str

    kind: ClassVar[str] = "text"


@dataclass(frozen=True)
class EntitySegment:
    text: str
    payload: EntityPayload

    @property
    def kind(self) -> EntityKind:
        return self.payload.kind


Segment = Union[TextSegment, EntitySegment]

DropReason = Literal["out_of_range", "empty_span", "not_contained", "nested_in_entity"]


@dataclass(frozen=True)
class DroppedSpan:
    span: AnnotationSpan
    reason: DropReason


@dataclass(frozen=True)
class Post:
    """A post already decoded upstream: author, creation time, flat body and spans."""

    id: str
    created_at: int
    author: User
    body: str
    spans: tuple[AnnotationSpan, ...] = ()


@dataclass(frozen=True)
class SegmentedPost:
    post: Post
    segments: tuple[Segment, ...]
    dropped: tuple[DroppedSpan, ...] = ()

    @property
    def text(self) -> str:
        return "".join(seg.text for seg in self.segments)
