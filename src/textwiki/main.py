"""TextWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from textwiki.config import Settings, settings as default_settings
from textwiki.context import WikiContext
from textwiki.core.errors import RenderError, StorageError
from textwiki.routes import router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: build the initial index and run the index worker."""
    wiki: WikiContext = app.state.wiki
    wiki.store.rebuild_index()
    wiki.indexer.start()
    yield
    await wiki.indexer.stop()


async def storage_error_handler(request: Request, exc: StorageError):
    return PlainTextResponse(str(exc), status_code=500)


async def render_error_handler(request: Request, exc: RenderError):
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its context from settings."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.wiki = WikiContext.from_settings(settings)

    app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
    app.include_router(router)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RenderError, render_error_handler)
    return app


def main() -> None:
    """Run the wiki server until killed.

    uvicorn logs a failed startup (e.g. port already bound) and exits non-zero.
    """
    logging.basicConfig(
        level=default_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "textwiki.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
    )
