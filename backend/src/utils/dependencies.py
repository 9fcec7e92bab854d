"""FastAPI dependency functions."""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from ..services.tag_admin import TagAdminService
from ..utils.exceptions import TagAdminError


def get_tag_admin(request: Request) -> TagAdminService:
    """Get the tag administration service attached to the application.

    Raises:
        TagAdminError: If the application was not built by ``create_app``
    """
    service = getattr(request.app.state, "tag_admin", None)
    if service is None:
        raise TagAdminError("Tag administration service not configured")
    return service


def get_templates(request: Request) -> Jinja2Templates:
    """Get the page template loader attached to the application."""
    return request.app.state.templates
