"""Lexical resolution of request paths onto the served root.

Nothing in this module touches the filesystem: a candidate path is only handed
to the caller after it has been normalized and checked against the root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final
from urllib.parse import unquote

from dogfinder_web.errors import PathTraversalError

FALLBACK_DOCUMENT: Final[str] = "index.html"
ROOT_INDICATOR: Final[str] = "/"


def decode_request_path(raw_path: str) -> str:
    """Strip query string and fragment, then percent-decode.

    Malformed escapes and invalid UTF-8 are replaced rather than raised.
    """

    path = raw_path.split("?", 1)[0].split("#", 1)[0]
    if not path:
        return ROOT_INDICATOR
    return unquote(path, encoding="utf-8", errors="replace")


def is_within_root(root: Path, candidate: Path) -> bool:
    return candidate.is_relative_to(root)


def resolve_request_path(root: Path, request_path: str) -> Path:
    """Join a decoded request path onto `root` and normalize it.

    `root` must already be absolute and normalized. Raises PathTraversalError
    when the result is not `root` itself or somewhere beneath it.
    """

    if request_path == ROOT_INDICATOR:
        request_path = ROOT_INDICATOR + FALLBACK_DOCUMENT

    # Backslash is a separator on Windows; treat it as one everywhere.
    relative = request_path.replace("\\", "/").lstrip("/")
    candidate = Path(os.path.normpath(os.path.join(root, relative)))

    if not is_within_root(root, candidate):
        raise PathTraversalError(request_path)
    return candidate
