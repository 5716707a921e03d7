"""Kraken REST client for krakenph."""

from krakenph.client.base import ResponseEnvelope, Transport
from krakenph.client.kraken import KrakenClient
from krakenph.client.signer import NonceGenerator, RequestSigner, SignedRequest, sign_request
from krakenph.client.transport import RequestsTransport

__all__ = [
    "KrakenClient",
    "NonceGenerator",
    "RequestSigner",
    "RequestsTransport",
    "ResponseEnvelope",
    "SignedRequest",
    "Transport",
    "sign_request",
]
