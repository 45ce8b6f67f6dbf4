from __future__ import annotations

from typing import Sequence


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class TemplateError(RuntimeError):
    """Raised when a template string cannot be compiled."""


class UnexpectedPlaceholderError(TemplateError):
    """
    Raised when a template references a field its slot does not provide.

    `suggestions` holds the closest legal field names, best match first.
    """

    def __init__(
        self,
        field: str,
        fields: Sequence[str],
        *,
        suggestions: Sequence[str] = (),
        slot: str | None = None,
    ) -> None:
        self.field = field
        self.fields = tuple(fields)
        self.suggestions = tuple(suggestions)
        self.slot = slot
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = f'"{self.field}" is not assignable to a placeholder.'
        if self.suggestions:
            joined = " / ".join(f'"{s}"' for s in self.suggestions)
            message += f" Did you mean {joined}?"
        if self.slot:
            message = f"{self.slot}: {message}"
        return message


class InvalidTimezoneError(ValueError):
    """Raised when a timezone name is not a known IANA zone."""

    def __init__(self, timezone: str) -> None:
        self.timezone = timezone
        super().__init__(f"Unknown timezone: {timezone!r}")


class ParsePostError(RuntimeError):
    """Raised when an API post payload cannot be decoded into a Post."""

    def __init__(self, post_id: str, message: str) -> None:
        self.post_id = post_id
        super().__init__(f"post {post_id}: {message}")
