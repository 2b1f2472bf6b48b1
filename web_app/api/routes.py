"""API routes implementation."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    URLResponse,
    NotFoundResponse,
    ErrorResponse,
)
from shortener.errors import NotFoundError, ShortenerError, UnclassifiedError
from shortener.common.url_builder import build_short_url
from ..middleware.logging import mark_outcome

router = APIRouter()

NOT_FOUND_MESSAGE = "URL not found"
SHORTENED_MESSAGE = "URL has been shortened successfully!"


def not_found_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": NOT_FOUND_MESSAGE},
    )


@router.get(
    "/url/{slug}",
    response_model=URLResponse,
    responses={
        404: {"model": NotFoundResponse, "description": "Slug not found"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Look up a short URL",
    description="Return the target URL of a slug without counting a visit.",
)
async def get_url(request: Request, slug: str):
    """Return the stored URL for a slug."""
    records = request.app.state.records

    try:
        url = await records.resolve_for_display(slug)
    except NotFoundError:
        mark_outcome(request, "not_found", slug)
        return not_found_response()
    except ShortenerError:
        raise
    except Exception as e:
        raise UnclassifiedError(str(e)) from e

    mark_outcome(request, "found", slug)
    return URLResponse(url=url)


@router.post(
    "/url",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request or slug in use"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
        503: {"model": ErrorResponse, "description": "Store unavailable"},
    },
    summary="Create short URL",
    description="Create a short URL. Optionally provide a custom slug.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a short URL."""
    records = request.app.state.records
    config = request.app.state.config

    try:
        record = await records.create_record(body.slug, body.url)
    except ShortenerError:
        raise
    except Exception as e:
        raise UnclassifiedError(str(e)) from e

    mark_outcome(request, "created", record.slug)
    return ShortenResponse(
        message=SHORTENED_MESSAGE,
        slug=record.slug,
        short_url=build_short_url(
            slug=record.slug,
            domain=config.public_domain,
            production=config.is_production,
        ),
    )
