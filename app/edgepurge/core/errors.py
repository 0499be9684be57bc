"""Exception hierarchy shared across edgepurge modules."""


class EdgePurgeError(Exception):
    """Base exception for all edgepurge errors."""


class PurgeClientError(EdgePurgeError):
    """Raised when a CDN response cannot be accounted for.

    A failed response that carries neither a structured error list nor
    a single error message leaves no way to report which targets failed.
    """
