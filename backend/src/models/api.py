"""API response models."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AjaxTerm(BaseModel):
    """Weighted term as sent to the client."""
    id: int
    display_text: str
    count: int
    weight: int


class AjaxResponse(BaseModel):
    """Response to an AJAX tag request."""
    message: Optional[str] = None
    data: Optional[str] = None
    items: List[AjaxTerm] = Field(default_factory=list)


class ApiErrorResponse(BaseModel):
    """Standard API error response."""
    error: str
    code: str
    details: Optional[Dict[str, Any]] = None
    request_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
