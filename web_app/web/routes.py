"""Browser-facing routes: landing page and slug redirects."""

import os
from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from shortener.errors import NotFoundError, ShortenerError, UnclassifiedError
from ..api.routes import not_found_response
from ..middleware.logging import mark_outcome

router = APIRouter()

public_dir = os.path.join(os.path.dirname(__file__), "..", "..", "public")


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def homepage(request: Request):
    """Serve public/index.html when it exists."""
    html_file = os.path.join(public_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())

    return HTMLResponse(
        content="<h1>URL Shortener</h1><p>POST /url with {\"url\": ...} to create a short link.</p>",
        status_code=200,
    )


@router.get("/{slug}", include_in_schema=False)
async def redirect_to_url(request: Request, slug: str):
    """Redirect to the stored URL, counting the visit."""
    records = request.app.state.records

    try:
        url = await records.resolve_and_count_visit(slug)
    except NotFoundError:
        mark_outcome(request, "not_found", slug)
        return not_found_response()
    except ShortenerError:
        raise
    except Exception as e:
        raise UnclassifiedError(str(e)) from e

    mark_outcome(request, "redirect", slug)
    # 302 so browsers come back through us and every visit is counted
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)
