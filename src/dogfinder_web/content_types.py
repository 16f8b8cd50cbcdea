from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePath
from types import MappingProxyType
from typing import Final

DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"
HTML_CONTENT_TYPE: Final[str] = "text/html; charset=utf-8"
TEXT_CONTENT_TYPE: Final[str] = "text/plain; charset=utf-8"

# Keys are lowercase and include the leading dot.
CONTENT_TYPES: Final[Mapping[str, str]] = MappingProxyType(
    {
        ".html": HTML_CONTENT_TYPE,
        ".js": "application/javascript; charset=utf-8",
        ".css": "text/css; charset=utf-8",
        ".json": "application/json; charset=utf-8",
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".svg": "image/svg+xml",
        ".ico": "image/x-icon",
        ".wasm": "application/wasm",
        ".txt": TEXT_CONTENT_TYPE,
        ".map": "application/json; charset=utf-8",
    }
)


def content_type_for(
    path: str | PurePath, table: Mapping[str, str] = CONTENT_TYPES
) -> str:
    """Content type for a file path, matched on its last extension (case-insensitive)."""

    suffix = PurePath(path).suffix.lower()
    if not suffix:
        return DEFAULT_CONTENT_TYPE
    return table.get(suffix, DEFAULT_CONTENT_TYPE)
