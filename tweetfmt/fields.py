from __future__ import annotations

from typing import Literal, get_args

TweetField = Literal[
    "tweet.url",
    "tweet.id",
    "tweet.text",
    "tweet.datetime",
    "user.name",
    "user.username",
    "user.url",
    "date.iso",
    "date.year",
    "date.month",
    "date.day",
    "date.hours",
    "date.minutes",
    "date.seconds",
    "date.timestamp",
]

EntityTextField = Literal["text"]

EntityUrlField = Literal["text", "short_url", "expanded_url", "decoded_url", "title"]

EntityHashtagField = Literal["text", "tag", "hashmoji"]

EntityCashtagField = Literal["text", "tag"]

EntityMentionField = Literal["text", "username", "user_url"]

MediaPhotoField = Literal["url"]

MediaVideoField = Literal["thumbnail"]

TWEET_FIELDS: tuple[str, ...] = get_args(TweetField)
ENTITY_TEXT_FIELDS: tuple[str, ...] = get_args(EntityTextField)
ENTITY_URL_FIELDS: tuple[str, ...] = get_args(EntityUrlField)
ENTITY_HASHTAG_FIELDS: tuple[str, ...] = get_args(EntityHashtagField)
ENTITY_CASHTAG_FIELDS: tuple[str, ...] = get_args(EntityCashtagField)
ENTITY_MENTION_FIELDS: tuple[str, ...] = get_args(EntityMentionField)
MEDIA_PHOTO_FIELDS: tuple[str, ...] = get_args(MediaPhotoField)
MEDIA_VIDEO_FIELDS: tuple[str, ...] = get_args(MediaVideoField)

# Slot name -> legal placeholder fields, in declaration order.
SLOT_FIELDS: dict[str, tuple[str, ...]] = {
    "tweet": TWEET_FIELDS,
    "footer": TWEET_FIELDS,
    "entity.text": ENTITY_TEXT_FIELDS,
    "entity.url": ENTITY_URL_FIELDS,
    "entity.hashtag": ENTITY_HASHTAG_FIELDS,
    "entity.cashtag": ENTITY_CASHTAG_FIELDS,
    "entity.mention": ENTITY_MENTION_FIELDS,
    "media.photo": MEDIA_PHOTO_FIELDS,
    "media.video": MEDIA_VIDEO_FIELDS,
}
