"""Common utilities for URL shortener."""

from .validators import ValidatedInput, validate, validate_slug, validate_url, is_valid_slug
from .url_builder import build_short_url
from .logging_config import setup_logging

__all__ = [
    "ValidatedInput",
    "validate",
    "validate_slug",
    "validate_url",
    "is_valid_slug",
    "build_short_url",
    "setup_logging",
]
