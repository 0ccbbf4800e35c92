"""Data models for TextWiki."""

from pydantic import BaseModel


class Page(BaseModel):
    """A wiki page: a title and its raw stored bytes."""

    title: str
    body: bytes = b""

    @property
    def text(self) -> str:
        """Body decoded for display."""
        return self.body.decode("utf-8", errors="replace")
