"""Error taxonomy for the Kraken client and trade pipeline."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kind tag carried by every KrakenError."""

    CLOCK = "clock"
    CREDENTIALS = "credentials"
    TRANSPORT = "transport"
    API = "api"
    MISSING_DATA = "missing_data"
    DECODE = "decode"


class KrakenError(Exception):
    """Base class for all krakenph errors.

    Attributes:
        kind: ErrorKind tag for callers that branch on error values.
        method: API method being called, when known.
        pair: Instrument pair being fetched, when known.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        pair: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.method = method
        self.pair = pair

    def __str__(self) -> str:
        context = []
        if self.method:
            context.append(f"method={self.method}")
        if self.pair:
            context.append(f"pair={self.pair}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class ClockError(KrakenError):
    """The wall clock could not be read while generating a nonce."""

    kind = ErrorKind.CLOCK


class InvalidCredentialsError(KrakenError):
    """API credentials are missing or the secret is not valid base64."""

    kind = ErrorKind.CREDENTIALS


class FetchError(KrakenError):
    """Base class for errors raised by a single API call."""


class TransportError(FetchError):
    """Network, TLS or timeout failure while talking to the server."""

    kind = ErrorKind.TRANSPORT


class KrakenApiError(FetchError):
    """The server answered with a non-empty error list.

    All error strings are kept in ``errors``, in server order.
    """

    kind = ErrorKind.API

    def __init__(
        self,
        errors: list[str],
        method: Optional[str] = None,
        pair: Optional[str] = None,
    ):
        self.errors = list(errors)
        super().__init__(
            "Kraken response contains errors: " + "; ".join(self.errors),
            method=method,
            pair=pair,
        )


class MissingDataError(FetchError):
    """An expected key is absent from the response result."""

    kind = ErrorKind.MISSING_DATA

    def __init__(
        self,
        key: str,
        method: Optional[str] = None,
        pair: Optional[str] = None,
    ):
        self.key = key
        super().__init__(
            f"Kraken response doesn't contain '{key}'",
            method=method,
            pair=pair,
        )


class DecodeError(FetchError):
    """A response or trade record could not be decoded."""

    kind = ErrorKind.DECODE

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        pair: Optional[str] = None,
        index: Optional[int] = None,
    ):
        self.index = index
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message, method=method, pair=pair)
