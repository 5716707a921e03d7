"""Nonce generation and request signing for private Kraken calls.

Private requests are signed as::

    base64(hmac_sha512(path + sha256(nonce + body), b64decode(secret)))

and sent with the ``API-Key`` and ``API-Sign`` headers.
"""

import base64
import hashlib
import hmac
import time
from typing import Callable, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from krakenph.errors import ClockError
from krakenph.models import Credentials

NONCE_WIDTH = 16


def sign_request(path: str, nonce: str, body: str, secret: bytes) -> str:
    """Compute the API-Sign value for a private request.
    
    Args:
        path: URI path, e.g. ``/0/private/Balance``.
        nonce: Nonce sent in the body.
        body: Form-encoded request body.
        secret: Decoded API secret bytes.
        
    Returns:
        Base64-encoded HMAC-SHA512 signature.
    """
    digest = hashlib.sha256((nonce + body).encode("utf-8")).digest()
    message = path.encode("utf-8") + digest
    mac = hmac.new(secret, message, hashlib.sha512).digest()
    return base64.b64encode(mac).decode("ascii")


class NonceGenerator:
    """Produces strictly increasing 16-digit nonces.

    Each value is the wall-clock seconds (10 digits) followed by the
    microseconds within that second (6 digits). When the clock has not moved
    past the last issued value the previous nonce plus one is returned.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def next(self) -> str:
        """Return the next nonce.

        Raises:
            ClockError: If the clock cannot be read.
        """
        try:
            now = self._clock()
            seconds = int(now)
            micros = int(round((now - seconds) * 1_000_000))
        except (OSError, OverflowError, ValueError, TypeError) as e:
            raise ClockError(f"cannot read clock: {e}") from e

        if micros >= 1_000_000:
            seconds, micros = seconds + 1, micros - 1_000_000

        value = int(f"{seconds:010d}{micros:06d}")
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return f"{value:0{NONCE_WIDTH}d}"


class SignedRequest(BaseModel):
    """A private request ready to be sent."""

    path: str = Field(..., description="URI path")
    nonce: str = Field(..., description="Nonce included in the body")
    body: str = Field(..., description="Form-encoded body")
    signature: str = Field(..., description="Base64 API-Sign value")

    model_config = {"frozen": True}


class RequestSigner:
    """Signs private requests with one set of credentials."""

    def __init__(self, credentials: Credentials):
        self.credentials = credentials

    def sign(self, path: str, nonce: str, body: str) -> SignedRequest:
        return SignedRequest(
            path=path,
            nonce=nonce,
            body=body,
            signature=sign_request(path, nonce, body, self.credentials.secret),
        )

    def headers(self, request: SignedRequest) -> dict[str, str]:
        """Authentication headers for a signed request."""
        return {
            "API-Key": self.credentials.api_key,
            "API-Sign": request.signature,
        }


def encode_params(params: Optional[dict[str, str]]) -> str:
    """URL-encode params as ``k=v`` pairs joined by ``&`` in insertion order."""
    if not params:
        return ""
    return urlencode(params)
