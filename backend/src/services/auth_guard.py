"""Per-request digest verification."""

import hmac
from typing import Callable

from ..utils.exceptions import DigestMismatchError
from ..utils.logging import log_warning

DigestFunction = Callable[[str, str], str]


class AuthGuard:
    """Verifies the digest submitted with a privileged request.

    The expected digest comes from an external credential function taking
    ``(nonce, timestamp)``. A mismatch is fatal for the request and is never
    retried.
    """

    def __init__(self, compute_digest: DigestFunction):
        self.compute_digest = compute_digest

    def verify(self, nonce: str, timestamp: str, submitted_digest: str) -> None:
        """Verify a submitted digest.

        Raises:
            DigestMismatchError: If the digest does not match
        """
        expected = self.compute_digest(nonce or "", timestamp or "")
        if not hmac.compare_digest(
            (submitted_digest or "").encode("utf-8"),
            expected.encode("utf-8")
        ):
            log_warning("Request digest mismatch", {"nonce": nonce, "timestamp": timestamp})
            raise DigestMismatchError(details={"nonce": nonce, "timestamp": timestamp})
