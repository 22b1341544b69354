from __future__ import annotations


class PantryAppError(Exception):
    """Base class for errors surfaced to API callers."""


class InvalidArgument(PantryAppError, ValueError):
    pass


class NotFound(PantryAppError, LookupError):
    pass
