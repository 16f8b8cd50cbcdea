from __future__ import annotations

from pathlib import Path

from dogfinder_web.errors import (
    AssetNotFoundError,
    FallbackMissingError,
    PathTraversalError,
    StaticServeError,
)


def test_traversal_maps_to_forbidden() -> None:
    exc = PathTraversalError("/../secret")
    assert (exc.status_code, exc.body) == (403, "Forbidden")
    assert exc.request_path == "/../secret"


def test_only_missing_fallback_maps_to_not_found() -> None:
    exc = FallbackMissingError(Path("/srv/web/index.html"))
    assert (exc.status_code, exc.body) == (404, "Not Found")

    # A missing asset is answered by the fallback, never directly.
    missing = AssetNotFoundError(Path("/srv/web/app.js"))
    assert missing.status_code == StaticServeError.status_code
    assert missing.body == StaticServeError.body
    assert "status_code" not in vars(AssetNotFoundError)
    assert missing.path == Path("/srv/web/app.js")
