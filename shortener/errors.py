"""Error taxonomy for the URL shortener core.

The core raises these and never renders HTTP responses; the web layer maps
``status_code`` onto the response.
"""

from typing import Optional


class ShortenerError(Exception):
    """Base class for all shortener errors."""

    status_code = 500


class ValidationError(ShortenerError):
    """Bad input: malformed slug, missing or malformed URL, slug in use."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
        self.reason = reason


class NotFoundError(ShortenerError):
    """No record is stored under the requested slug."""

    status_code = 404

    def __init__(self, slug: str):
        super().__init__(f"URL not found for slug '{slug}'")
        self.slug = slug


class StoreUnavailableError(ShortenerError):
    """The key-value store operation itself failed (network, backend, auth).

    Distinct from a key simply being absent, which is a normal ``None`` read.
    """

    status_code = 503
    public_message = "Service temporarily unavailable, please try again."


class GenerationExhaustedError(ShortenerError):
    """No free slug was found within the allowed number of attempts."""

    status_code = 500

    def __init__(self, attempts: int):
        super().__init__(f"Unable to generate a unique slug after {attempts} attempts")
        self.attempts = attempts


class UnclassifiedError(ShortenerError):
    """Wraps any other failure surfaced to the web layer."""

    status_code = 500
