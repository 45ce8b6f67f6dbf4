from __future__ import annotations

import re
from urllib.parse import urlsplit

from .config_schema import RenderSettings

# Escapes of these characters stay encoded; decoding them would change how the URL parses.
_RESERVED = frozenset(";/?:@&=+$,#")
_ESCAPE_RUN_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def _decode_escapes(escapes: list[str]) -> str:
    try:
        return bytes(int(e[1:], 16) for e in escapes).decode("utf-8")
    except UnicodeDecodeError:
        return "".join(escapes)


def _decode_run(match: re.Match[str]) -> str:
    run = match.group(0)
    out: list[str] = []
    pending: list[str] = []
    for i in range(0, len(run), 3):
        escape = run[i : i + 3]
        byte = int(escape[1:], 16)
        if byte < 0x80 and chr(byte) in _RESERVED:
            if pending:
                out.append(_decode_escapes(pending))
                pending = []
            out.append(escape)
        else:
            pending.append(escape)
    if pending:
        out.append(_decode_escapes(pending))
    return "".join(out)


def decode_url(url: str) -> str:
    """
    Human-readable form of a URL: percent-escapes decoded, punycode host shown as Unicode.

    Escapes of reserved characters (`%2F`, `%3F`, `%26`, ...) are kept so the
    query and path still split the same way. A run of escapes that is not
    valid UTF-8 is left encoded.
    """
    value = (url or "").strip()
    if not value:
        return ""

    decoded = _ESCAPE_RUN_RE.sub(_decode_run, value)
    try:
        host = urlsplit(value).hostname
    except ValueError:
        return decoded
    if not host or "xn--" not in host:
        return decoded

    try:
        unicode_host = host.encode("ascii").decode("idna")
    except UnicodeError:
        return decoded
    return decoded.replace(host, unicode_host, 1)


def base_url(settings: RenderSettings) -> str:
    return f"https://{settings.hostname}"


def user_url(username: str, settings: RenderSettings) -> str:
    return f"{base_url(settings)}/{username}"


def status_url(username: str, post_id: str, settings: RenderSettings) -> str:
    return f"{user_url(username, settings)}/status/{post_id}"
