from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from urllib.parse import quote

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.types import Receive, Scope, Send

from dogfinder_web import __version__
from dogfinder_web.config import ServerConfig
from dogfinder_web.handler import StaticAssetHandler

logger = logging.getLogger(__name__)


def _raw_request_path(request: Request) -> str:
    # raw_path keeps the client's percent-encoding; the handler decodes it once.
    raw = request.scope.get("raw_path")
    if raw:
        # Clients may send unescaped UTF-8 in the request line.
        return raw.decode("utf-8", errors="replace")
    return quote(request.scope.get("path") or "/")


class _AssetEndpoint:
    """Answers any method on any path from the app's asset handler."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        result = await request.app.state.asset_handler.handle(_raw_request_path(request))
        await result.to_response()(scope, receive, send)


def _check_root(handler: StaticAssetHandler) -> None:
    if not handler.root.is_dir():
        logger.warning(
            "Served root %s is not a directory; every request will answer 404", handler.root
        )
    elif not handler.fallback_path.is_file():
        logger.warning(
            "Fallback document %s is missing; unknown routes will answer 404",
            handler.fallback_path,
        )


def create_app(config: ServerConfig) -> FastAPI:
    handler = StaticAssetHandler(config.root)

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        _check_root(handler)
        logger.info(
            "DogFinder web server listening on http://%s:%s",
            config.network.bind_host,
            config.network.port,
        )
        logger.info(f"Serving files from: {handler.root}")
        yield

    # No docs/openapi routes: every path belongs to the served site.
    app = FastAPI(
        title="DogFinder Web",
        version=__version__,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.server_config = config
    app.state.asset_handler = handler

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - {response.status_code}")
        return response

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error("Unhandled error serving %s", request.url.path, exc_info=exc)
        return PlainTextResponse("Internal Server Error", status_code=500)

    # An ASGI endpoint with no method list matches every method.
    app.add_route("/{asset_path:path}", _AssetEndpoint(), include_in_schema=False)

    return app
