"""Transport interface and response envelope for the Kraken client."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel, Field

from krakenph.errors import KrakenApiError


class ResponseEnvelope(BaseModel):
    """Parsed ``{"error": [...], "result": ...}`` response body."""

    errors: list[str] = Field(default_factory=list, description="Server error strings")
    result: Any = Field(default=None, description="Method result")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        """True when the server reported no errors."""
        return not self.errors

    def raise_for_errors(self, method: Optional[str] = None, pair: Optional[str] = None) -> None:
        """Raise KrakenApiError carrying every error string, if any.

        Args:
            method: API method name for error context.
            pair: Pair for error context.

        Raises:
            KrakenApiError: If the envelope carries errors.
        """
        if self.errors:
            raise KrakenApiError(self.errors, method=method, pair=pair)


class Transport(ABC):
    """Abstract base class for HTTP transports.

    A transport performs one POST per call and owns whatever connection
    resources it needs. Implementations are context managers so the
    outermost caller controls their lifetime.
    """

    @abstractmethod
    def post(self, url: str, headers: dict[str, str], body: str) -> bytes:
        """Send a POST request.
        
        Args:
            url: Absolute request URL.
            headers: Request headers.
            body: Form-encoded request body.
            
        Returns:
            Raw response body.
            
        Raises:
            TransportError: On network, TLS or timeout failure.
        """
        pass

    def close(self) -> None:
        """Release transport resources."""

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
