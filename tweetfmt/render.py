from __future__ import annotations

from datetime import datetime
from typing import Callable, Mapping

from .compile import CompiledTemplate, CompiledTemplateSet
from .config_schema import RenderSettings
from .datetime_fmt import to_datetime
from .placeholders import PlaceholderNode, TextNode
from .post import (
    CashtagEntity,
    EntitySegment,
    HashtagEntity,
    MediaEntity,
    MediaPhoto,
    MediaVideo,
    MentionEntity,
    Segment,
    SegmentedPost,
    TextSegment,
    UrlEntity,
)
from .urls import status_url, user_url

_DEFAULT_SETTINGS = RenderSettings()


def _fill(template: CompiledTemplate, resolve: Callable[[str], str]) -> str:
    parts: list[str] = []
    for node in template:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, PlaceholderNode):
            parts.append(resolve(node.field))
        else:
            raise TypeError(f"unexpected template node: {node!r}")
    return "".join(parts)


def _fill_values(template: CompiledTemplate, values: Mapping[str, str]) -> str:
    return _fill(template, values.__getitem__)


def render_segment(
    segment: Segment,
    templates: CompiledTemplateSet,
    settings: RenderSettings = _DEFAULT_SETTINGS,
) -> str:
    if isinstance(segment, TextSegment):
        return _fill_values(templates.entity_text, {"text": segment.text})

    if not isinstance(segment, EntitySegment):
        raise TypeError(f"unexpected segment: {segment!r}")

    payload = segment.payload
    if isinstance(payload, UrlEntity):
        return _fill_values(
            templates.entity_url,
            {
                "text": segment.text,
                "short_url": payload.short_url,
                "expanded_url": payload.expanded_url,
                "decoded_url": payload.decoded_url,
                "title": payload.title or "",
            },
        )
    if isinstance(payload, HashtagEntity):
        return _fill_values(
            templates.entity_hashtag,
            {
                "text": segment.text,
                "tag": payload.tag,
                "hashmoji": payload.hashmoji or "",
            },
        )
    if isinstance(payload, CashtagEntity):
        return _fill_values(
            templates.entity_cashtag,
            {"text": segment.text, "tag": payload.tag},
        )
    if isinstance(payload, MentionEntity):
        return _fill_values(
            templates.entity_mention,
            {
                "text": segment.text,
                "username": payload.username,
                "user_url": user_url(payload.username, settings),
            },
        )
    if isinstance(payload, MediaEntity):
        media = payload.media
        if isinstance(media, MediaPhoto):
            return _fill_values(templates.media_photo, {"url": media.url})
        if isinstance(media, MediaVideo):
            return _fill_values(templates.media_video, {"thumbnail": media.thumbnail})
        raise TypeError(f"unexpected media: {media!r}")

    raise TypeError(f"unexpected entity payload: {payload!r}")


def render_text(
    post: SegmentedPost,
    templates: CompiledTemplateSet,
    settings: RenderSettings = _DEFAULT_SETTINGS,
) -> str:
    """Render the post body, segment by segment, through the entity templates."""
    return "".join(render_segment(seg, templates, settings) for seg in post.segments)


class _PostFields:
    """Resolves post-level placeholders; the body and the datetime are computed once."""

    def __init__(
        self,
        post: SegmentedPost,
        templates: CompiledTemplateSet,
        settings: RenderSettings,
    ) -> None:
        self._post = post
        self._templates = templates
        self._settings = settings
        self._text: str | None = None
        self._dt: datetime | None = None

    def _datetime(self) -> datetime:
        if self._dt is None:
            self._dt = to_datetime(self._post.post.created_at, self._settings.timezone)
        return self._dt

    def _body(self) -> str:
        if self._text is None:
            self._text = render_text(self._post, self._templates, self._settings)
        return self._text

    def __call__(self, field: str) -> str:
        post = self._post.post
        author = post.author

        if field == "tweet.url":
            return status_url(author.username, post.id, self._settings)
        if field == "tweet.id":
            return post.id
        if field == "tweet.text":
            return self._body()
        if field == "tweet.datetime":
            return self._datetime().strftime(self._settings.datetime_format)
        if field == "user.name":
            return author.name
        if field == "user.username":
            return author.username
        if field == "user.url":
            return user_url(author.username, self._settings)
        if field == "date.iso":
            return self._datetime().isoformat()
        if field == "date.year":
            return self._datetime().strftime("%Y")
        if field == "date.month":
            return self._datetime().strftime("%m")
        if field == "date.day":
            return self._datetime().strftime("%d")
        if field == "date.hours":
            return self._datetime().strftime("%H")
        if field == "date.minutes":
            return self._datetime().strftime("%M")
        if field == "date.seconds":
            return self._datetime().strftime("%S")
        if field == "date.timestamp":
            return str(post.created_at)

        raise KeyError(field)


def render(
    post: SegmentedPost,
    templates: CompiledTemplateSet,
    settings: RenderSettings = _DEFAULT_SETTINGS,
) -> str:
    """
    Fill the whole-post template for one segmented post.

    Pure and deterministic: the same inputs always produce the same string.
    """
    return _fill(templates.tweet, _PostFields(post, templates, settings))


def render_footer(
    post: SegmentedPost,
    templates: CompiledTemplateSet,
    settings: RenderSettings = _DEFAULT_SETTINGS,
) -> str:
    return _fill(templates.footer, _PostFields(post, templates, settings))
