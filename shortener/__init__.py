"""Core business logic for URL shortener."""

from .slugs import SlugGenerator
from .records import RecordStore
from .models import URLRecord

__all__ = ["SlugGenerator", "RecordStore", "URLRecord"]
