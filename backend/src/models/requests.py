"""Parsed request models for tag administration."""

import re
from typing import Any, Mapping, Optional, Set

from pydantic import BaseModel, Field

from ..constants import FALSY_FORM_VALUES, TERM_FIELD_PATTERN
from ..types import TagAction

_TERM_FIELD = re.compile(TERM_FIELD_PATTERN)


class WSSEFields(BaseModel):
    """Authentication fields echoed back by the client."""

    nonce: str = ""
    timestamp: str = ""
    digest: str = ""

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "WSSEFields":
        """Read nonce, timestamp and digest from form or query values."""
        return cls(
            nonce=str(values.get("nonce") or ""),
            timestamp=str(values.get("timestamp") or ""),
            digest=str(values.get("digest") or "")
        )


def selected_term_ids(values: Mapping[str, Any]) -> Set[int]:
    """Collect ids from ``term_<id>`` flags whose value is set."""
    ids = set()
    for key, value in values.items():
        match = _TERM_FIELD.match(str(key))
        if match and str(value).strip().lower() not in FALSY_FORM_VALUES:
            ids.add(int(match.group(1)))
    return ids


class TagActionRequest(BaseModel):
    """A delete or rename request over selected terms."""

    auth: WSSEFields = Field(default_factory=WSSEFields)
    action: Optional[TagAction] = None
    term_ids: Set[int] = Field(default_factory=set)
    master: Optional[str] = None

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "TagActionRequest":
        """Parse a submitted form.

        A missing or unrecognised action is kept as ``None`` so it can be
        rejected after authentication.
        """
        raw_action = str(form.get("action") or "").strip().lower()
        try:
            action = TagAction(raw_action)
        except ValueError:
            action = None

        master = form.get("master")
        return cls(
            auth=WSSEFields.from_mapping(form),
            action=action,
            term_ids=selected_term_ids(form),
            master=str(master) if master is not None else None
        )


class TagSearchRequest(BaseModel):
    """An authenticated search over the vocabulary."""

    auth: WSSEFields = Field(default_factory=WSSEFields)
    search: str = ""

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "TagSearchRequest":
        """Parse query parameters."""
        return cls(
            auth=WSSEFields.from_mapping(params),
            search=str(params.get("search") or "")
        )
