"""Per-application state shared by all request handlers."""

import logging
from dataclasses import dataclass, field
from typing import Any

import jinja2
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from textwiki.config import Settings
from textwiki.core.errors import RenderError
from textwiki.core.indexer import IndexWorker
from textwiki.core.storage import FilePageStore, PageStore

logger = logging.getLogger(__name__)


@dataclass
class WikiContext:
    """Everything a handler needs, built once at startup."""

    settings: Settings
    store: PageStore
    templates: Jinja2Templates
    indexer: IndexWorker = field(init=False)

    def __post_init__(self) -> None:
        self.indexer = IndexWorker(self.store)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WikiContext":
        store = FilePageStore(settings.data_dir, suffix=settings.page_suffix)
        templates = Jinja2Templates(directory=str(settings.templates_dir))
        return cls(settings=settings, store=store, templates=templates)

    def render(self, request: Request, name: str, **kwargs: Any) -> HTMLResponse:
        """Render ``<name>.html`` with the base context.

        Raises RenderError if the template is missing or fails to execute.
        """
        template = f"{name}.html"
        context = {"app_title": self.settings.app_title, **kwargs}
        try:
            return self.templates.TemplateResponse(request, template, context)
        except jinja2.TemplateError as exc:
            logger.exception("Error rendering template %s", template)
            raise RenderError(template) from exc


def get_wiki(request: Request) -> WikiContext:
    """Dependency returning the application's WikiContext."""
    return request.app.state.wiki
