from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from dogfinder_web.content_types import (
    CONTENT_TYPES,
    HTML_CONTENT_TYPE,
    TEXT_CONTENT_TYPE,
    content_type_for,
)
from dogfinder_web.errors import (
    AssetNotFoundError,
    FallbackMissingError,
    PathTraversalError,
    StaticServeError,
)
from dogfinder_web.resolver import FALLBACK_DOCUMENT, decode_request_path, resolve_request_path

logger = logging.getLogger(__name__)

Outcome = Literal["file", "fallback", "forbidden", "not_found"]


@dataclass(frozen=True)
class StaticResponse:
    status_code: int
    content_type: str
    body: bytes
    outcome: Outcome

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            media_type=self.content_type,
        )


def _error_response(exc: StaticServeError, *, outcome: Outcome) -> StaticResponse:
    return StaticResponse(
        status_code=exc.status_code,
        content_type=TEXT_CONTENT_TYPE,
        body=exc.body.encode("utf-8"),
        outcome=outcome,
    )


def _is_dir(path: Path) -> bool:
    try:
        return path.is_dir()
    except (OSError, ValueError):
        return False


def _read_bytes(path: Path) -> bytes:
    return path.read_bytes()


class StaticAssetHandler:
    """Serves files beneath a fixed root with single-page-app fallback.

    The handler is immutable and keeps no per-request state, so a single
    instance can serve concurrent requests. Blocking filesystem calls run on the
    threadpool; the asset read and the fallback read are strictly sequential.
    """

    def __init__(self, root: Path, *, content_types: Mapping[str, str] = CONTENT_TYPES) -> None:
        self._root = Path(os.path.normpath(os.path.abspath(root)))
        self._content_types = content_types

    @property
    def root(self) -> Path:
        return self._root

    @property
    def fallback_path(self) -> Path:
        return self._root / FALLBACK_DOCUMENT

    async def handle(self, raw_path: str) -> StaticResponse:
        request_path = decode_request_path(raw_path)

        try:
            candidate = resolve_request_path(self._root, request_path)
        except PathTraversalError as exc:
            logger.warning("Rejected request outside served root: %r", exc.request_path)
            return _error_response(exc, outcome="forbidden")

        try:
            return await run_in_threadpool(self._serve_file, candidate)
        except AssetNotFoundError as exc:
            logger.debug("%s; falling back to %s", exc, FALLBACK_DOCUMENT)

        try:
            return await run_in_threadpool(self._serve_fallback)
        except FallbackMissingError as exc:
            logger.info("%s", exc)
            return _error_response(exc, outcome="not_found")

    def _serve_file(self, candidate: Path) -> StaticResponse:
        if _is_dir(candidate):
            candidate = candidate / FALLBACK_DOCUMENT

        try:
            body = _read_bytes(candidate)
        except (OSError, ValueError) as exc:
            raise AssetNotFoundError(candidate) from exc

        return StaticResponse(
            status_code=200,
            content_type=content_type_for(candidate, self._content_types),
            body=body,
            outcome="file",
        )

    def _serve_fallback(self) -> StaticResponse:
        fallback = self.fallback_path
        try:
            body = _read_bytes(fallback)
        except (OSError, ValueError) as exc:
            raise FallbackMissingError(fallback) from exc

        return StaticResponse(
            status_code=200,
            content_type=HTML_CONTENT_TYPE,
            body=body,
            outcome="fallback",
        )
