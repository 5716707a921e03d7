"""Kraken REST API client."""

import json
import logging
from typing import Optional

from krakenph.client.base import ResponseEnvelope, Transport
from krakenph.client.decode import decode_asset_pairs, decode_assets, decode_trades
from krakenph.client.signer import NonceGenerator, RequestSigner, encode_params
from krakenph.errors import DecodeError, InvalidCredentialsError
from krakenph.models import Asset, AssetPair, Credentials, TradeBatch

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://api.kraken.com"
DEFAULT_VERSION = "0"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class KrakenClient:
    """Issues public and private calls against the Kraken REST API.
    
    Private calls are signed with the client's credentials and a nonce
    from the client's own NonceGenerator. One network round trip is made
    per call; nothing is retried here.
    """

    def __init__(
        self,
        transport: Transport,
        credentials: Optional[Credentials] = None,
        url: str = DEFAULT_URL,
        version: str = DEFAULT_VERSION,
        nonce_generator: Optional[NonceGenerator] = None,
    ):
        """Initialize the client.
        
        Args:
            transport: Transport performing the HTTP POSTs.
            credentials: API credentials, required for private calls only.
            url: API base URL.
            version: API version path component.
            nonce_generator: Nonce source; a new one is created by default.
        """
        self.transport = transport
        self.credentials = credentials
        self.url = url.rstrip("/")
        self.version = version
        self._nonces = nonce_generator or NonceGenerator()
        self._signer = RequestSigner(credentials) if credentials else None

    def _path(self, scope: str, method: str) -> str:
        return f"/{self.version}/{scope}/{method}"

    def _parse(self, raw: bytes, method: str) -> ResponseEnvelope:
        """Parse a raw response body into an envelope.
        
        Raises:
            DecodeError: If the body is not a JSON object.
        """
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"response is not valid JSON: {e}", method=method) from e

        if not isinstance(data, dict):
            raise DecodeError("response is not a JSON object", method=method)

        errors = data.get("error") or []
        if isinstance(errors, str):
            errors = [errors]
        envelope = ResponseEnvelope(errors=[str(e) for e in errors], result=data.get("result"))

        if not envelope.ok:
            logger.warning("%s returned errors: %s", method, "; ".join(envelope.errors))
        return envelope

    def call_public(self, method: str, params: Optional[dict[str, str]] = None) -> ResponseEnvelope:
        """Call a public (unsigned) API method.
        
        Args:
            method: Method name, e.g. ``Trades``.
            params: Request parameters, encoded in insertion order.
            
        Returns:
            Parsed response envelope.
            
        Raises:
            TransportError: On network failure.
            DecodeError: If the response cannot be parsed.
        """
        path = self._path("public", method)
        body = encode_params(params)
        logger.debug("public call %s body=%s", path, body)

        raw = self.transport.post(self.url + path, {"Content-Type": FORM_CONTENT_TYPE}, body)
        return self._parse(raw, method)

    def call_private(self, method: str, params: Optional[dict[str, str]] = None) -> ResponseEnvelope:
        """Call a private (signed) API method.
        
        The body always starts with ``nonce=<nonce>``; params follow in
        insertion order.
        
        Args:
            method: Method name, e.g. ``Balance``.
            params: Request parameters.
            
        Returns:
            Parsed response envelope.
            
        Raises:
            InvalidCredentialsError: If the client has no credentials.
            ClockError: If no nonce could be generated.
            TransportError: On network failure.
            DecodeError: If the response cannot be parsed.
        """
        if self._signer is None:
            raise InvalidCredentialsError("private calls require API credentials", method=method)

        path = self._path("private", method)
        nonce = self._nonces.next()
        body = f"nonce={nonce}"
        if params:
            body = body + "&" + encode_params(params)

        request = self._signer.sign(path, nonce, body)
        headers = {"Content-Type": FORM_CONTENT_TYPE, **self._signer.headers(request)}
        logger.debug("private call %s nonce=%s", path, nonce)

        raw = self.transport.post(self.url + path, headers, request.body)
        return self._parse(raw, method)

    # ==================== Public market data ====================

    def server_time(self) -> int:
        """Get the server time in seconds since epoch."""
        envelope = self.call_public("Time")
        envelope.raise_for_errors("Time")
        try:
            return int(envelope.result["unixtime"])
        except (TypeError, KeyError, ValueError) as e:
            raise DecodeError(f"malformed Time result: {envelope.result!r}", method="Time") from e

    def assets(self) -> list[Asset]:
        """Get all assets known to the exchange."""
        envelope = self.call_public("Assets")
        envelope.raise_for_errors("Assets")
        return decode_assets(envelope.result)

    def asset_pairs(self, pairs: Optional[list[str]] = None) -> list[AssetPair]:
        """Get tradable asset pairs, optionally restricted to ``pairs``."""
        params = {"pair": ",".join(pairs)} if pairs else None
        envelope = self.call_public("AssetPairs", params)
        envelope.raise_for_errors("AssetPairs")
        return decode_asset_pairs(envelope.result)

    def trades(self, pair: str, since: str = "0") -> TradeBatch:
        """Get one batch of recent trades for ``pair`` after ``since``.
        
        Raises:
            KrakenApiError: If the server reports errors.
            MissingDataError: If the pair or cursor is absent.
            DecodeError: If a trade record is malformed.
        """
        envelope = self.call_public("Trades", {"pair": pair, "since": since})
        envelope.raise_for_errors("Trades", pair=pair)
        return decode_trades(envelope.result, pair)

