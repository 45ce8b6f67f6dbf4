from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .datetime_fmt import validate_timezone

Hostname = Literal["x.com", "twitter.com"]


class RenderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    hostname: Hostname = "x.com"
    timezone: str = "UTC"
    datetime_format: str = "%Y/%m/%d %H:%M:%S"

    @field_validator("timezone")
    @classmethod
    def _timezone_must_exist(cls, v: str) -> str:
        name = (v or "").strip()
        validate_timezone(name)
        return name

    @field_validator("datetime_format")
    @classmethod
    def _datetime_format_not_blank(cls, v: str) -> str:
        if not (v or "").strip():
            raise ValueError("must be a non-empty strftime format")
        return v


class EntityTemplates(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "${text}"
    url: str = "[${decoded_url} ${title}]"
    hashtag: str = "${text}"
    cashtag: str = "${text}"
    mention: str = "[${user_url} ${text}]"


class MediaTemplates(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    photo: str = "[${url}]"
    video: str = "[${thumbnail}]"


class TemplateRecord(BaseModel):
    """Raw template strings, one per slot, as the user configured them."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tweet: str = "[${tweet.url} ${user.name}(@${user.username})]: ${tweet.text}"
    footer: str = "${tweet.datetime}"
    entity: EntityTemplates = Field(default_factory=EntityTemplates)
    media: MediaTemplates = Field(default_factory=MediaTemplates)

    def slots(self) -> dict[str, str]:
        return {
            "tweet": self.tweet,
            "footer": self.footer,
            "entity.text": self.entity.text,
            "entity.url": self.entity.url,
            "entity.hashtag": self.entity.hashtag,
            "entity.cashtag": self.entity.cashtag,
            "entity.mention": self.entity.mention,
            "media.photo": self.media.photo,
            "media.video": self.media.video,
        }


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    render: RenderSettings = Field(default_factory=RenderSettings)
    template: TemplateRecord = Field(default_factory=TemplateRecord)
