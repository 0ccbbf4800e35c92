"""Exceptions raised by the page store and request handlers."""


class WikiError(Exception):
    """Base class for all wiki errors."""


class PageNotFound(WikiError):
    """No page file exists for the title."""

    def __init__(self, title: str):
        super().__init__(f"Page not found: {title}")
        self.title = title


class InvalidTitle(WikiError):
    """Title is empty or contains disallowed characters."""

    def __init__(self, title: str, reason: str):
        super().__init__(reason)
        self.title = title
        self.reason = reason


class StorageError(WikiError):
    """Reading or writing a page file failed for a reason other than absence."""

    def __init__(self, title: str, cause: OSError):
        super().__init__(f"{cause.strerror or cause}: {title}")
        self.title = title
        self.cause = cause


class RenderError(WikiError):
    """A template failed to render."""

    def __init__(self, template: str):
        super().__init__(f"Failed to render template {template}")
        self.template = template
