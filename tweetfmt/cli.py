from __future__ import annotations

import argparse
import json
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Sequence

from .compile import CompiledTemplateSet
from .config import config_sha256, load_render_config
from .config_schema import RenderSettings
from .errors import ConfigError, ParsePostError, TemplateError
from .ingest import posts_from_lookup
from .post import Post
from .render import render, render_footer
from .run_log import RunLogger
from .segment import segment_post


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tweetfmt")

    subparsers = parser.add_subparsers(dest="command", required=True)

    rnd = subparsers.add_parser(
        "render",
        help="Render every post of an API lookup payload through the configured template.",
    )
    rnd.add_argument(
        "--config",
        required=True,
        help="Path to YAML config file.",
    )
    rnd.add_argument(
        "--input",
        required=True,
        help="Path to a JSON lookup payload ({data: [...], includes: {...}}).",
    )
    rnd.add_argument(
        "--out",
        help="Write the rendered text here instead of stdout.",
    )
    rnd.add_argument(
        "--log",
        help="Write a JSONL run log to this path.",
    )
    rnd.set_defaults(_handler=_cmd_render)

    check = subparsers.add_parser(
        "check-template",
        help="Compile the configured template and report each slot.",
    )
    check.add_argument(
        "--config",
        required=True,
        help="Path to YAML config file.",
    )
    check.set_defaults(_handler=_cmd_check_template)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _load_payload(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Failed to read input file: {p}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse JSON in {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Top-level JSON in {p} must be an object")
    return data


def _render_block(
    post: Post,
    templates: CompiledTemplateSet,
    settings: RenderSettings,
    log: RunLogger | None,
) -> str:
    segmented = segment_post(post, logger=log)
    text = render(segmented, templates, settings)
    footer = render_footer(segmented, templates, settings)
    if log is not None:
        log.post_rendered(segmented)
    return f"{text}\n{footer}" if footer else text


def _cmd_render(args: argparse.Namespace) -> int:
    with ExitStack() as stack:
        log: RunLogger | None = None
        if args.log:
            log = stack.enter_context(RunLogger.open(args.log))
            log.info(
                "render_command_started",
                config_path=str(args.config),
                input_path=str(args.input),
            )

        try:
            cfg, templates = load_render_config(args.config)
            if log is not None:
                log.info(
                    "config_loaded",
                    config_path=str(args.config),
                    config_sha256=config_sha256(cfg),
                    timezone=cfg.render.timezone,
                )

            posts = posts_from_lookup(_load_payload(args.input))
            if log is not None:
                log.info("posts_loaded", count=len(posts))

            blocks = [_render_block(p, templates, cfg.render, log) for p in posts]
            output = "\n\n".join(blocks)

            if args.out:
                out_path = Path(args.out)
                out_path.parent.mkdir(parents=True, exist_ok=True)
                out_path.write_text(output + "\n", encoding="utf-8")
            else:
                print(output)

            if log is not None:
                log.info("render_command_completed", rendered=len(blocks))
            return 0
        except Exception as e:
            if log is not None:
                log.exception("render_command_failed", exc=e)
            raise


def _cmd_check_template(args: argparse.Namespace) -> int:
    cfg, compiled = load_render_config(args.config)

    print("ok")
    for slot in cfg.template.slots():
        nodes = getattr(compiled, slot.replace(".", "_"))
        print(f"{slot}: {len(nodes)} nodes")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except (TemplateError, ParsePostError) as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
