from __future__ import annotations

from dataclasses import dataclass

from .config_schema import TemplateRecord
from .errors import UnexpectedPlaceholderError
from .fields import SLOT_FIELDS
from .placeholders import TemplateNode, parse

CompiledTemplate = tuple[TemplateNode, ...]


@dataclass(frozen=True)
class CompiledTemplateSet:
    tweet: CompiledTemplate
    footer: CompiledTemplate
    entity_text: CompiledTemplate
    entity_url: CompiledTemplate
    entity_hashtag: CompiledTemplate
    entity_cashtag: CompiledTemplate
    entity_mention: CompiledTemplate
    media_photo: CompiledTemplate
    media_video: CompiledTemplate


def compile_slot(slot: str, template: str) -> CompiledTemplate:
    fields = SLOT_FIELDS[slot]
    try:
        return parse(template, fields)
    except UnexpectedPlaceholderError as e:
        raise UnexpectedPlaceholderError(
            e.field,
            e.fields,
            suggestions=e.suggestions,
            slot=slot,
        ) from e


def compile_templates(record: TemplateRecord) -> CompiledTemplateSet:
    """
    Compile every slot of a template record.

    All-or-nothing: the first slot with an unknown placeholder raises
    UnexpectedPlaceholderError carrying that slot's name.
    """
    compiled = {
        slot.replace(".", "_"): compile_slot(slot, template)
        for slot, template in record.slots().items()
    }
    return CompiledTemplateSet(**compiled)
