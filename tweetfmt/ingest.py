from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from .errors import ParsePostError
from .post import (
    AnnotationSpan,
    CashtagEntity,
    HashtagEntity,
    Media,
    MediaEntity,
    MediaPhoto,
    MediaVideo,
    MentionEntity,
    Post,
    UrlEntity,
    User,
)
from .urls import decode_url


def _coerce_str(value: Any) -> str | None:
    if isinstance(value, str):
        s = value.strip()
        return s if s else None
    return None


def _coerce_id(value: Any) -> str | None:
    if isinstance(value, str):
        v = value.strip()
        return v if v else None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _coerce_offset(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def _mapping_list(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _parse_created_at(post_id: str, value: Any) -> int:
    raw = _coerce_str(value)
    if raw is None:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise ParsePostError(post_id, "created_at is undefined")

    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError as e:
        raise ParsePostError(post_id, f"created_at is not ISO-8601: {value!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def _parse_author(post_id: str, item: Mapping[str, Any], users: Sequence[Mapping[str, Any]]) -> User:
    author_id = _coerce_id(item.get("author_id"))
    if author_id is None:
        raise ParsePostError(post_id, "author_id is undefined")

    for user in users:
        if _coerce_id(user.get("id")) != author_id:
            continue
        username = _coerce_str(user.get("username"))
        if username is None:
            raise ParsePostError(post_id, f"author({author_id}) has no username")
        name = user.get("name") if isinstance(user.get("name"), str) else username
        return User(name=name, username=username, id=author_id)

    raise ParsePostError(post_id, f"author_id({author_id}) is not found")


def _parse_media(post_id: str, media_key: str, media: Sequence[Mapping[str, Any]]) -> Media:
    for medium in media:
        if _coerce_str(medium.get("media_key")) != media_key:
            continue
        media_type = _coerce_str(medium.get("type"))
        if media_type == "photo":
            url = _coerce_str(medium.get("url"))
            if url is None:
                raise ParsePostError(
                    post_id, f"url is not defined at photo media(media_key={media_key})"
                )
            return MediaPhoto(url=url)
        # video and animated_gif both expose a preview image
        thumbnail = _coerce_str(medium.get("preview_image_url")) or ""
        return MediaVideo(thumbnail=thumbnail)

    raise ParsePostError(post_id, f"media_key({media_key}) is not found")


def _url_span(
    post_id: str,
    data: Mapping[str, Any],
    media: Sequence[Mapping[str, Any]],
) -> AnnotationSpan | None:
    start = _coerce_offset(data.get("start"))
    end = _coerce_offset(data.get("end"))
    if start is None or end is None:
        return None

    media_key = _coerce_str(data.get("media_key"))
    if media_key is not None:
        payload = MediaEntity(media_key=media_key, media=_parse_media(post_id, media_key, media))
        return AnnotationSpan(start=start, end=end, payload=payload)

    short_url = _coerce_str(data.get("url")) or ""
    expanded = _coerce_str(data.get("expanded_url")) or short_url
    return AnnotationSpan(
        start=start,
        end=end,
        payload=UrlEntity(
            short_url=short_url,
            expanded_url=expanded,
            decoded_url=decode_url(expanded),
            display_url=_coerce_str(data.get("display_url")),
            title=_coerce_str(data.get("title")),
        ),
    )


def _tag_spans(items: Sequence[Mapping[str, Any]], *, cashtag: bool) -> list[AnnotationSpan]:
    out: list[AnnotationSpan] = []
    for data in items:
        start = _coerce_offset(data.get("start"))
        end = _coerce_offset(data.get("end"))
        tag = _coerce_str(data.get("tag"))
        if start is None or end is None or tag is None:
            continue
        payload = CashtagEntity(tag=tag) if cashtag else HashtagEntity(tag=tag)
        out.append(AnnotationSpan(start=start, end=end, payload=payload))
    return out


def _mention_spans(items: Sequence[Mapping[str, Any]]) -> list[AnnotationSpan]:
    out: list[AnnotationSpan] = []
    for data in items:
        start = _coerce_offset(data.get("start"))
        end = _coerce_offset(data.get("end"))
        username = _coerce_str(data.get("username"))
        if start is None or end is None or username is None:
            continue
        payload = MentionEntity(username=username, user_id=_coerce_id(data.get("id")))
        out.append(AnnotationSpan(start=start, end=end, payload=payload))
    return out


def post_from_api_item(
    item: Mapping[str, Any],
    includes: Mapping[str, Any] | None = None,
) -> Post:
    """
    Decode one API v2 post object into a Post.

    Spans are emitted urls first, then hashtags, cashtags and mentions; offsets
    are taken as given (grapheme units) and not re-validated here.
    """
    post_id = _coerce_id(item.get("id"))
    if post_id is None:
        raise ParsePostError("<unknown>", "id is undefined")

    inc: Mapping[str, Any] = includes or {}
    users = _mapping_list(inc.get("users"))
    media = _mapping_list(inc.get("media"))

    created_at = _parse_created_at(post_id, item.get("created_at"))
    author = _parse_author(post_id, item, users)
    body = item.get("text") if isinstance(item.get("text"), str) else ""

    entities = item.get("entities")
    if not isinstance(entities, Mapping):
        entities = {}

    spans: list[AnnotationSpan] = []
    for data in _mapping_list(entities.get("urls")):
        span = _url_span(post_id, data, media)
        if span is not None:
            spans.append(span)
    spans.extend(_tag_spans(_mapping_list(entities.get("hashtags")), cashtag=False))
    spans.extend(_tag_spans(_mapping_list(entities.get("cashtags")), cashtag=True))
    spans.extend(_mention_spans(_mapping_list(entities.get("mentions"))))

    return Post(
        id=post_id,
        created_at=created_at,
        author=author,
        body=body,
        spans=tuple(spans),
    )


def posts_from_lookup(response: Mapping[str, Any]) -> list[Post]:
    """
    Decode a lookup payload: every entry of `data`, then every `includes.tweets` entry.
    """
    includes = response.get("includes")
    if not isinstance(includes, Mapping):
        includes = {}

    posts: list[Post] = []
    for item in _mapping_list(response.get("data")):
        posts.append(post_from_api_item(item, includes))
    for item in _mapping_list(includes.get("tweets")):
        posts.append(post_from_api_item(item, includes))
    return posts
