"""WSSE-style request digest utilities.

A digest binds a nonce and a timestamp to a shared secret:
``base64(sha1(nonce + timestamp + secret))``. Pages embed a freshly issued
token and the client echoes it back with every privileged request.
"""

import base64
import hashlib
import secrets
from datetime import datetime, timezone
from typing import NamedTuple


class WSSEToken(NamedTuple):
    """Nonce, timestamp and digest triple."""
    nonce: str
    timestamp: str
    digest: str


class WSSECredentials:
    """Computes and issues request digests for a shared secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("WSSE secret must not be empty")
        self._secret = secret

    def compute_digest(self, nonce: str, timestamp: str) -> str:
        """Compute the expected digest for a nonce/timestamp pair."""
        raw = hashlib.sha1(f"{nonce}{timestamp}{self._secret}".encode("utf-8")).digest()
        return base64.b64encode(raw).decode("ascii")

    def issue(self) -> WSSEToken:
        """Issue a fresh token for embedding in a rendered page."""
        nonce = hashlib.sha1(secrets.token_bytes(32)).hexdigest()
        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        return WSSEToken(nonce, timestamp, self.compute_digest(nonce, timestamp))
