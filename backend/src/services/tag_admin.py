"""Tag administration request orchestration."""

from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from ..constants import (
    MSG_AUTH_FAILED,
    MSG_DELETED_MANY,
    MSG_DELETED_ONE,
    MSG_MISSING_MASTER,
    MSG_RENAMED_MANY,
    MSG_RENAMED_NONE,
    MSG_RENAMED_ONE,
    MSG_UNKNOWN_ACTION,
)
from ..models.api import AjaxResponse, AjaxTerm
from ..models.requests import TagActionRequest, TagSearchRequest, WSSEFields
from ..models.term import TagListing
from ..types import ErrorCode, RequestState, TagAction
from ..utils.exceptions import DigestMismatchError
from ..utils.localization import Translator
from ..utils.logging import log_info, log_warning
from ..utils.metrics import track_auth_failure, track_mutation
from ..utils.wsse import WSSECredentials, WSSEToken
from .auth_guard import AuthGuard
from .taxonomy import TaxonomyService
from .vocabulary import VocabularyService

Renderer = Callable[[TagListing], str]


class TagAdminResult(BaseModel):
    """Outcome of an authenticated tag request."""

    state: RequestState
    message: Optional[str] = None
    data: Optional[str] = None
    listing: Optional[TagListing] = None
    affected: List[str] = Field(default_factory=list)
    error: Optional[ErrorCode] = None

    @property
    def rejected(self) -> bool:
        return self.state == RequestState.REJECTED

    def to_response(self) -> AjaxResponse:
        """Convert to the AJAX wire format."""
        items = []
        if self.listing is not None:
            items = [
                AjaxTerm(
                    id=item.term.id,
                    display_text=item.term.display_text,
                    count=item.term.count,
                    weight=item.weight
                )
                for item in self.listing.terms
            ]
        return AjaxResponse(message=self.message, data=self.data, items=items)


class TagPage(BaseModel):
    """Everything the full tag page needs to render."""

    listing: TagListing
    collection: str
    token: WSSEToken
    vocabulary_min: int
    vocabulary_max: int


class TagAdminService:
    """Composes authentication, mutation, re-query and rendering per request.

    Mutations run RECEIVED -> AUTH_CHECKED -> MUTATED -> REQUERIED -> RENDERED.
    A digest mismatch or a rename without a target name ends in REJECTED
    before the store is touched. Store errors propagate to the caller.
    """

    def __init__(
        self,
        vocabulary: VocabularyService,
        taxonomy: TaxonomyService,
        guard: AuthGuard,
        credentials: WSSECredentials,
        translator: Translator,
        renderer: Renderer
    ):
        self.vocabulary = vocabulary
        self.taxonomy = taxonomy
        self.guard = guard
        self.credentials = credentials
        self.translator = translator
        self.renderer = renderer

    def _reject(self, code: ErrorCode, message: str) -> TagAdminResult:
        return TagAdminResult(state=RequestState.REJECTED, message=message, error=code)

    def _authenticate(self, auth: WSSEFields, endpoint: str) -> Optional[TagAdminResult]:
        try:
            self.guard.verify(auth.nonce, auth.timestamp, auth.digest)
        except DigestMismatchError as e:
            track_auth_failure(endpoint)
            log_warning("Rejected tag request", {"endpoint": endpoint, "code": e.code.value})
            return self._reject(e.code, self.translator.translate(MSG_AUTH_FAILED))
        return None

    def _render(self, listing: TagListing, message: Optional[str], affected: List[str]) -> TagAdminResult:
        return TagAdminResult(
            state=RequestState.RENDERED,
            message=message,
            data=self.renderer(listing),
            listing=listing,
            affected=affected
        )

    async def render_page(self, search: str = "") -> TagPage:
        """Build the full listing page with a fresh request token."""
        listing = await self.vocabulary.listing(search)
        vocabulary_min, vocabulary_max = await self.vocabulary.vocabulary_bounds()
        return TagPage(
            listing=listing,
            collection=self.renderer(listing),
            token=self.credentials.issue(),
            vocabulary_min=vocabulary_min,
            vocabulary_max=vocabulary_max
        )

    async def fetch(self, request: TagSearchRequest) -> TagAdminResult:
        """Serve an authenticated search fragment."""
        rejection = self._authenticate(request.auth, "search")
        if rejection:
            return rejection
        listing = await self.vocabulary.listing(request.search)
        return self._render(listing, None, [])

    def _deleted_message(self, names: List[str]) -> str:
        return self.translator.translate_plural(
            MSG_DELETED_ONE,
            MSG_DELETED_MANY,
            len(names),
            {"names": ", ".join(names), "count": len(names)}
        )

    def _renamed_message(self, names: List[str], master: str) -> str:
        if not names:
            return self.translator.translate(MSG_RENAMED_NONE)
        return self.translator.translate_plural(
            MSG_RENAMED_ONE,
            MSG_RENAMED_MANY,
            len(names),
            {"names": ", ".join(names), "master": master, "count": len(names)}
        )

    async def mutate(self, request: TagActionRequest, endpoint: str = "ajax") -> TagAdminResult:
        """Authenticate and apply a delete or rename, then re-render the tree."""
        rejection = self._authenticate(request.auth, endpoint)
        if rejection:
            return rejection
        state = RequestState.AUTH_CHECKED

        if request.action is None:
            log_warning("Rejected unknown tag action", {"endpoint": endpoint, "state": state.value})
            return self._reject(ErrorCode.VALIDATION_ERROR, self.translator.translate(MSG_UNKNOWN_ACTION))

        if request.action is TagAction.DELETE:
            deleted = await self.taxonomy.delete(request.term_ids)
            affected = deleted.deleted_names
            message = self._deleted_message(affected)
        else:
            master = (request.master or "").strip()
            if not master:
                log_warning("Rejected rename without a new name", {"endpoint": endpoint, "state": state.value})
                return self._reject(
                    ErrorCode.MISSING_CANONICAL_NAME,
                    self.translator.translate(MSG_MISSING_MASTER)
                )
            merged = await self.taxonomy.merge(master, request.term_ids)
            affected = merged.merged_names
            message = self._renamed_message(affected, master)

        state = RequestState.MUTATED
        track_mutation(request.action.value, len(affected))
        log_info("Tag mutation applied", {
            "endpoint": endpoint,
            "action": request.action.value,
            "affected": affected,
            "state": state.value
        })

        listing = await self.vocabulary.listing()
        return self._render(listing, message, affected)

    async def submit(self, request: TagActionRequest) -> TagAdminResult:
        """Apply a full-page form submission; the caller redirects afterwards."""
        return await self.mutate(request, endpoint="page")
