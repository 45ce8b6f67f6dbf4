from __future__ import annotations

import json
import traceback
import uuid
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any, TextIO

from .post import DroppedSpan, SegmentedPost

_TRACEBACK_LIMIT = 12000


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RunLogger:
    """
    JSONL log of one render run.

    Records are one JSON object per line: `ts`, `level`, `event`, `session_id`,
    plus `post_id` when the event concerns a single post and `data` for the rest.
    """

    def __init__(self, fp: TextIO) -> None:
        self._fp: TextIO | None = fp
        self._session_id = uuid.uuid4().hex
        self._lock = Lock()

    @classmethod
    def open(cls, path: str | Path) -> "RunLogger":
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        return cls(p.open("w", encoding="utf-8", newline="\n"))

    def close(self) -> None:
        with self._lock:
            if self._fp is not None:
                try:
                    self._fp.flush()
                finally:
                    self._fp.close()
                self._fp = None

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def span_dropped(self, drop: DroppedSpan, *, post_id: str | None = None) -> None:
        span = drop.span
        self._write(
            "WARN",
            "span_dropped",
            post_id=post_id,
            reason=drop.reason,
            kind=span.kind,
            start=span.start,
            end=span.end,
        )

    def post_rendered(self, post: SegmentedPost) -> None:
        self._write(
            "INFO",
            "post_rendered",
            post_id=post.post.id,
            segments=len(post.segments),
            dropped_spans=len(post.dropped),
        )

    def info(self, event: str, **data: Any) -> None:
        self._write("INFO", event, **data)

    def exception(self, event: str, *, exc: BaseException, **data: Any) -> None:
        err = {
            "type": type(exc).__name__,
            "message": str(exc),
            "traceback": "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )[-_TRACEBACK_LIMIT:],
        }
        self._write("ERROR", event, error=err, **data)

    def _write(self, level: str, event: str, *, post_id: str | None = None, **data: Any) -> None:
        record: dict[str, Any] = {
            "ts": _utc_now_iso(),
            "level": level,
            "event": event,
            "session_id": self._session_id,
        }
        if post_id:
            record["post_id"] = post_id
        if data:
            record["data"] = data

        payload = json.dumps(
            record,
            ensure_ascii=False,
            sort_keys=True,
            separators=(",", ":"),
            default=str,
        )

        with self._lock:
            if self._fp is None:
                return
            self._fp.write(payload + "\n")
            self._fp.flush()
