"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    Both fields are optional here; the record store validates them so every
    rule lives in one place.
    """

    slug: Optional[str] = Field(None, description="Optional custom slug (case-insensitive)")
    url: Optional[str] = Field(None, description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"slug": "my-repo", "url": "https://github.com/user/repo"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    message: str = Field(..., description="Success message")
    slug: str = Field(..., description="The stored slug")
    short_url: str = Field(..., alias="shortURL", description="The complete short URL")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "message": "URL has been shortened successfully!",
                    "slug": "abc12",
                    "shortURL": "https://sho.rt/abc12",
                }
            ]
        }
    }


class URLResponse(BaseModel):
    """Target of a slug."""

    url: str


class NotFoundResponse(BaseModel):
    """Body returned for unknown slugs."""

    error: str = Field(..., description="Always 'URL not found'")


class ErrorResponse(BaseModel):
    """Error response."""

    message: str = Field(..., description="Error message")
    stack: Optional[str] = Field(None, description="Traceback (non-production only)")
