"""Template rendering and redirect helpers shared by the route modules."""

from pathlib import Path
from typing import Any

from fastapi import Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from simple_blog.services.validation import FormError, messages
from simple_blog.utils.permissions import get_identity

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    template_name: str,
    context: dict[str, Any] | None = None,
    errors: list[FormError] | None = None,
) -> Response:
    """Render a page with the viewer's identity and any form errors."""
    base_ctx = {
        "current_user": get_identity(request),
        "errors": messages(errors or []),
    }
    return templates.TemplateResponse(request, template_name, {**base_ctx, **(context or {})})


def redirect(url: str = "/") -> RedirectResponse:
    """Redirect so the browser follows up with a GET."""
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
