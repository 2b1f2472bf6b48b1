"""Validation utilities for URL shortener.

All functions here are pure: no I/O, no side effects.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from ..errors import ValidationError


SLUG_MAX_LENGTH = 255
URL_MAX_LENGTH = 2048

_SLUG_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class ValidatedInput:
    """Create-request input that passed validation (slug already lower-cased)."""

    slug: Optional[str]
    url: str


def validate_slug(slug: str) -> str:
    """Validate a user-supplied slug.

    Args:
        slug: The candidate slug

    Returns:
        The slug lower-cased

    Raises:
        ValidationError: reason ``too_short``, ``too_long`` or ``invalid_characters``
    """
    if not isinstance(slug, str):
        raise ValidationError(
            "Slug must be a string.", field="slug", reason="invalid_characters"
        )

    if len(slug) < 1:
        raise ValidationError(
            "Slug must be at least 1 character long.", field="slug", reason="too_short"
        )

    if len(slug) > SLUG_MAX_LENGTH:
        raise ValidationError(
            f"Slug must be at most {SLUG_MAX_LENGTH} characters long.",
            field="slug",
            reason="too_long",
        )

    if not _SLUG_PATTERN.match(slug):
        raise ValidationError(
            "This slug uses characters that are not allowed.",
            field="slug",
            reason="invalid_characters",
        )

    return slug.lower()


def is_valid_slug(slug: str) -> bool:
    """Return True if ``slug`` could be stored as a record key."""
    try:
        validate_slug(slug)
    except ValidationError:
        return False
    return True


def validate_url(url: Optional[str]) -> str:
    """Validate a target URL (absolute: a scheme and a host).

    Raises:
        ValidationError: reason ``required`` or ``invalid``
    """
    if url is None or url == "":
        raise ValidationError(
            "A URL is required to create a short link. Please supply a URL to shorten.",
            field="url",
            reason="required",
        )

    if not isinstance(url, str):
        raise ValidationError("Invalid url", field="url", reason="invalid")

    if len(url) > URL_MAX_LENGTH:
        raise ValidationError(
            f"URL is too long (max {URL_MAX_LENGTH} characters)",
            field="url",
            reason="invalid",
        )

    try:
        result = urlparse(url)
        # Accessing .port validates it; bad ports raise ValueError
        result.port
    except ValueError:
        raise ValidationError("Invalid url", field="url", reason="invalid")

    if not result.scheme or not result.hostname:
        raise ValidationError("Invalid url", field="url", reason="invalid")

    if any(c.isspace() for c in url):
        raise ValidationError("Invalid url", field="url", reason="invalid")

    return url


def validate(candidate_slug: Optional[str], url: Optional[str]) -> ValidatedInput:
    """Validate a full create request.

    Args:
        candidate_slug: Optional slug; ``None`` means "generate one"
        url: The URL to shorten

    Returns:
        ValidatedInput with the slug lower-cased
    """
    slug = validate_slug(candidate_slug) if candidate_slug is not None else None
    return ValidatedInput(slug=slug, url=validate_url(url))
