from __future__ import annotations

from pathlib import Path


class StaticServeError(Exception):
    """Base class for request outcomes that are not a served asset."""

    status_code: int = 500
    body: str = "Internal Server Error"


class PathTraversalError(StaticServeError):
    status_code = 403
    body = "Forbidden"

    def __init__(self, request_path: str) -> None:
        super().__init__(f"Request path escapes the served root: {request_path!r}")
        self.request_path = request_path


class AssetNotFoundError(StaticServeError):
    """A requested asset is absent or unreadable; answered with the fallback document."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No readable file at {path}")
        self.path = path


class FallbackMissingError(StaticServeError):
    status_code = 404
    body = "Not Found"

    def __init__(self, path: Path) -> None:
        super().__init__(f"Fallback document is missing or unreadable: {path}")
        self.path = path
