from __future__ import annotations

import hashlib
import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from .compile import CompiledTemplateSet, compile_templates
from .config_schema import AppConfig
from .errors import ConfigError, UnexpectedPlaceholderError


def load_config(path: str | Path) -> AppConfig:
    """
    Load a YAML config file and validate it into a typed AppConfig.

    Raises ConfigError with a readable message on failure, including a template
    that references an unknown placeholder.
    """
    config, _ = load_render_config(path)
    return config


def load_render_config(path: str | Path) -> tuple[AppConfig, CompiledTemplateSet]:
    """
    Load and validate a config file, and compile its template record once.

    An unknown placeholder surfaces here as a ConfigError naming the slot.
    """
    p = Path(path)

    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")

    try:
        raw_text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file: {p}") from e

    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML in {p}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level YAML in {p} must be a mapping/object")

    try:
        config = AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_format_pydantic_errors(e, p)) from e

    try:
        templates = compile_templates(config.template)
    except UnexpectedPlaceholderError as e:
        raise ConfigError(f"Invalid template in {p}:\n- template.{e}") from e

    return config, templates


def config_sha256(config: AppConfig) -> str:
    """
    Compute a stable SHA-256 hash of the config values, e.g. to tag a render run.
    """
    payload = json.dumps(
        config.model_dump(mode="json"),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def _format_pydantic_errors(err: ValidationError, path: Path) -> str:
    lines: list[str] = [f"Invalid configuration in {path}:"]
    for item in err.errors():
        loc = ".".join(str(part) for part in item.get("loc", [])) or "<root>"
        msg = item.get("msg", "invalid value")
        lines.append(f"- {loc}: {msg}")
    return "\n".join(lines)
