"""
Error taxonomy for Edgelink.

Input problems subclass ValueError, the same way the manager layer has always
signalled bad input. The HTTP layer maps each class to a status code and a
plain-text body; nothing here knows about HTTP.
"""


class ShortLinkError(Exception):
    """Base class for all errors raised by the allocator, resolver and stores."""

    message = "Internal Server Error"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class InvalidUrl(ShortLinkError, ValueError):
    message = "Invalid URL"


class InvalidCustomId(ShortLinkError, ValueError):
    message = "Custom ID can only contain letters, numbers, hyphens, and underscores"


class MalformedRequest(ShortLinkError, ValueError):
    message = "Malformed request body"


class IdConflict(ShortLinkError):
    message = "Custom ID already exists"


class NotFound(ShortLinkError):
    message = "Short link not found"


class StoreError(ShortLinkError):
    """A read or write against the mapping store failed (connectivity, driver error)."""

    message = "Mapping store operation failed"
