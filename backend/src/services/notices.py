"""Session-scoped notices shown on the next page render."""

from typing import Dict, List

from fastapi import Request

NOTICES_KEY = "tagadmin.notices"


def add_notice(request: Request, message: str, level: str = "info") -> None:
    """Queue a notice for the next page render."""
    notices = list(request.session.get(NOTICES_KEY, []))
    notices.append({"message": message, "level": level})
    request.session[NOTICES_KEY] = notices


def pop_notices(request: Request) -> List[Dict[str, str]]:
    """Remove and return queued notices."""
    return request.session.pop(NOTICES_KEY, [])
