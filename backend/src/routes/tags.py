"""Tag administration routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..constants import TAGS_AJAX_PATH, TAGS_PAGE_PATH
from ..middleware.error_handler import status_for
from ..models.api import AjaxResponse
from ..models.requests import TagActionRequest, TagSearchRequest
from ..services.notices import add_notice, pop_notices
from ..services.tag_admin import TagAdminResult, TagAdminService
from ..utils.dependencies import get_tag_admin, get_templates

router = APIRouter(tags=["tags"])


def ajax_response(result: TagAdminResult) -> JSONResponse:
    """Serialize an orchestrator result, using an error status for rejections."""
    status_code = status_for(result.error) if result.rejected else 200
    return JSONResponse(status_code=status_code, content=result.to_response().model_dump(mode="json"))


@router.get(
    TAGS_PAGE_PATH,
    response_class=HTMLResponse,
    summary="Tag Listing",
    description="Render the weighted tag vocabulary page"
)
async def tags_page(
    request: Request,
    search: str = "",
    tag_admin: TagAdminService = Depends(get_tag_admin),
    templates: Jinja2Templates = Depends(get_templates)
):
    """Render the tag management page."""
    page = await tag_admin.render_page(search)
    return templates.TemplateResponse(
        request,
        "tags.html",
        {
            "title": request.app.title,
            "language": tag_admin.translator.language,
            "listing": page.listing,
            "collection": page.collection,
            "token": page.token,
            "vocabulary_min": page.vocabulary_min,
            "vocabulary_max": page.vocabulary_max,
            "notices": pop_notices(request),
            "page_url": TAGS_PAGE_PATH,
            "ajax_url": TAGS_AJAX_PATH
        }
    )


@router.post(
    TAGS_PAGE_PATH,
    summary="Submit Tag Form",
    description="Delete or rename selected tags and return to the listing"
)
async def submit_tags(
    request: Request,
    tag_admin: TagAdminService = Depends(get_tag_admin)
):
    """Process a full-page tag form submission."""
    form = await request.form()
    result = await tag_admin.submit(TagActionRequest.from_form(form))
    if result.message:
        add_notice(request, result.message, "error" if result.rejected else "info")
    return RedirectResponse(str(request.url_for("tags_page")), status_code=303)


@router.get(
    TAGS_AJAX_PATH,
    response_model=AjaxResponse,
    summary="Search Tags",
    description="Authenticated search returning the weighted tag fragment"
)
async def ajax_get_tags(
    request: Request,
    tag_admin: TagAdminService = Depends(get_tag_admin)
):
    """Serve the tag collection for a search query."""
    result = await tag_admin.fetch(TagSearchRequest.from_query(request.query_params))
    return ajax_response(result)


@router.post(
    TAGS_AJAX_PATH,
    response_model=AjaxResponse,
    summary="Mutate Tags",
    description="Authenticated delete or rename of selected tags"
)
async def ajax_tags(
    request: Request,
    tag_admin: TagAdminService = Depends(get_tag_admin)
):
    """Delete or rename tags and return the refreshed collection."""
    form = await request.form()
    result = await tag_admin.mutate(TagActionRequest.from_form(form))
    return ajax_response(result)
