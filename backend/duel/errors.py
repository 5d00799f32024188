"""Exceptions raised by the duel backend.

Protocol violations from clients are not exceptions: they are ignored where
they are detected. Only startup problems surface as errors.
"""

from typing import Optional


class DuelError(Exception):
    """Base class for duel backend errors."""


class CatalogError(DuelError):
    """The card catalog is missing, unreadable or malformed.

    Raised while the application starts; it is never caught by the app
    factory so the process refuses to serve with a partial catalog.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
