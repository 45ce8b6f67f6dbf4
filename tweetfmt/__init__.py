from __future__ import annotations

from .compile import CompiledTemplateSet, compile_templates
from .config import config_sha256, load_config, load_render_config
from .config_schema import AppConfig, RenderSettings, TemplateRecord
from .errors import ConfigError, ParsePostError, UnexpectedPlaceholderError
from .placeholders import parse
from .render import render, render_footer
from .segment import segment, segment_post

__all__ = [
    "AppConfig",
    "CompiledTemplateSet",
    "ConfigError",
    "ParsePostError",
    "RenderSettings",
    "TemplateRecord",
    "UnexpectedPlaceholderError",
    "compile_templates",
    "config_sha256",
    "load_config",
    "load_render_config",
    "parse",
    "render",
    "render_footer",
    "segment",
    "segment_post",
]
