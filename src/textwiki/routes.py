"""Request handlers for the wiki.

Each title-bearing route runs a validation dependency before its handler:
path titles that fail the title pattern are answered with 404, submitted
titles that are empty or malformed with 400.
"""

from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from textwiki.context import WikiContext, get_wiki
from textwiki.core.errors import InvalidTitle, PageNotFound
from textwiki.core.models import Page
from textwiki.core.storage import validate_title

NOT_FOUND_PAGE = "/static/404.html"

router = APIRouter()


def path_title(title: str) -> str:
    """Validate the ``{title}`` path segment."""
    try:
        return validate_title(title)
    except InvalidTitle:
        raise HTTPException(status_code=404, detail="Not Found")


def form_title(title: str = Form("")) -> str:
    """Validate the ``title`` field of the new-page form."""
    if not title.strip():
        raise HTTPException(status_code=400, detail="Title is required")
    try:
        return validate_title(title)
    except InvalidTitle as exc:
        raise HTTPException(status_code=400, detail=exc.reason)


async def save_and_redirect(wiki: WikiContext, title: str, body: str) -> RedirectResponse:
    """Persist a page, schedule a reindex and redirect to its view."""
    await wiki.store.save(Page(title=title, body=body.encode("utf-8")))
    wiki.indexer.notify(title)
    return RedirectResponse(url=f"/view/{quote(title)}", status_code=302)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, wiki: WikiContext = Depends(get_wiki)):
    """Home page - list all indexed pages."""
    return wiki.render(request, "home", index=wiki.store.index)


@router.get("/view/{title}", response_class=HTMLResponse)
async def view_page(
    request: Request,
    title: str = Depends(path_title),
    wiki: WikiContext = Depends(get_wiki),
):
    """View a wiki page."""
    try:
        page = await wiki.store.load(title)
    except PageNotFound:
        return RedirectResponse(url=NOT_FOUND_PAGE, status_code=302)
    return wiki.render(request, "view", page=page)


@router.get("/edit/{title}", response_class=HTMLResponse)
async def edit_page(
    request: Request,
    title: str = Depends(path_title),
    wiki: WikiContext = Depends(get_wiki),
):
    """Edit page form. A missing page starts out blank."""
    try:
        page = await wiki.store.load(title)
    except PageNotFound:
        page = Page(title=title)
    return wiki.render(request, "edit", page=page)


@router.post("/save/{title}")
async def save_page(
    title: str = Depends(path_title),
    body: str = Form(""),
    wiki: WikiContext = Depends(get_wiki),
):
    """Save page content."""
    return await save_and_redirect(wiki, title, body)


@router.get("/wiki/new", response_class=HTMLResponse)
async def new_page(request: Request, wiki: WikiContext = Depends(get_wiki)):
    """Blank page creation form."""
    return wiki.render(request, "new")


@router.post("/wiki/new/save")
async def create_page(
    title: str = Depends(form_title),
    body: str = Form(""),
    wiki: WikiContext = Depends(get_wiki),
):
    """Create a page from the new-page form."""
    return await save_and_redirect(wiki, title, body)
