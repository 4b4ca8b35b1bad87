from __future__ import annotations

import hashlib
import html
import re
import time
from datetime import datetime
from urllib.parse import urlparse

_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def strip_html(text: str | None, limit: int) -> str:
    """Drop tags, unescape entities and collapse whitespace, then truncate."""
    if not text:
        return ""
    cleaned = html.unescape(_TAG_RE.sub(" ", text))
    return _WS_RE.sub(" ", cleaned).strip()[:limit]


def domain_of(url: str | None, default: str = "") -> str:
    if not url:
        return default
    host = urlparse(url).hostname or ""
    if host.startswith("www."):
        host = host[4:]
    return host or default


def fingerprint(value: str, length: int = 16) -> str:
    return hashlib.md5(value.encode()).hexdigest()[:length]


def now_ms() -> int:
    return int(time.time() * 1000)


def iso_to_ms(value: str | None) -> int:
    """ISO-8601 string to epoch ms; now when missing or malformed."""
    if not value:
        return now_ms()
    try:
        return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp() * 1000)
    except ValueError:
        return now_ms()
