"""API credentials model."""

import base64
import binascii
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from krakenph.errors import InvalidCredentialsError


class Credentials(BaseModel):
    """Kraken API key and base64-encoded secret.

    The secret is decoded once, at construction, and exposed as raw bytes
    through :attr:`secret`.

    Raises:
        InvalidCredentialsError: If the secret is empty or not valid base64.
    """

    api_key: str = Field(..., description="Kraken API key")
    api_secret: str = Field(..., repr=False, description="Base64-encoded API secret")

    model_config = {"frozen": True}

    _secret: bytes = PrivateAttr(default=b"")

    def model_post_init(self, context: Any) -> None:
        if not self.api_secret:
            raise InvalidCredentialsError("API secret is empty")
        try:
            self._secret = base64.b64decode(self.api_secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidCredentialsError(f"API secret is not valid base64: {e}") from e

    @property
    def secret(self) -> bytes:
        """The decoded secret used as the HMAC key."""
        return self._secret
