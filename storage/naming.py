"""Stored filename generation and MIME filtering."""
import re
import threading
import time
import uuid
from pathlib import Path
from typing import Iterable

ALLOWED_TYPES = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "application/pdf",
)

_WHITESPACE = re.compile(r"\s+")
_FORBIDDEN = re.compile(r'[\\/:*?"<>|#%&+;=\x00-\x1f]')


def sanitize_prefix(field_name: str) -> str:
    prefix = _WHITESPACE.sub("-", (field_name or "").strip())
    return _FORBIDDEN.sub("", prefix)


def original_extension(filename: str) -> str:
    return _FORBIDDEN.sub("", Path(filename or "").suffix)


def generate_name(field_name: str, original_ext: str, now: int) -> str:
    """Build ``[<prefix>-]<uuid><ext>`` for a file submitted under ``field_name``.

    ``now`` is a nanosecond timestamp; the identifier is a UUIDv5 of it in the
    URL namespace, so distinct timestamps give distinct names.
    """
    unique = uuid.uuid5(uuid.NAMESPACE_URL, str(now))
    prefix = sanitize_prefix(field_name)
    if prefix:
        return f"{prefix}-{unique}{original_ext}"
    return f"{unique}{original_ext}"


def is_allowed_type(mime, allowed: Iterable[str] = ALLOWED_TYPES) -> bool:
    if not mime:
        return False
    return mime.lower() in {a.lower() for a in allowed}


def extract_prefix(stored_name: str) -> str:
    return stored_name.split("-", 1)[0]


class UniqueClock:
    """Hands out strictly increasing nanosecond timestamps."""

    def __init__(self, source=time.time_ns):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            now = self._source()
            if now <= self._last:
                now = self._last + 1
            self._last = now
            return now
