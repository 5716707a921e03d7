"""Tests for the Kraken REST client.

**Feature: kraken-price-history**
"""

import base64
import json
from unittest.mock import MagicMock

import pytest
import requests

from krakenph.client import KrakenClient, NonceGenerator, RequestsTransport, Transport
from krakenph.client.signer import sign_request
from krakenph.errors import (
    DecodeError,
    ErrorKind,
    InvalidCredentialsError,
    KrakenApiError,
    MissingDataError,
    TransportError,
)
from krakenph.models import Credentials, TradeSide

SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="


def _response(result=None, errors=None) -> bytes:
    return json.dumps({"error": errors or [], "result": result if result is not None else {}}).encode()


@pytest.fixture
def transport():
    """Create a mock transport answering with an empty result."""
    mock = MagicMock(spec=Transport)
    mock.post.return_value = _response({})
    return mock


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key="test-key", api_secret=SECRET)


@pytest.fixture
def private_client(transport, credentials) -> KrakenClient:
    return KrakenClient(
        transport,
        credentials=credentials,
        nonce_generator=NonceGenerator(clock=lambda: 1234567890.123456),
    )


# ============================================================================
# Public calls
# ============================================================================

class TestPublicCalls:
    """Public calls are unsigned POSTs to /<version>/public/<method>."""

    def test_url_and_body(self, transport):
        client = KrakenClient(transport)
        client.call_public("Trades", {"pair": "XXBTZEUR", "since": "0"})

        url, headers, body = transport.post.call_args.args
        assert url == "https://api.kraken.com/0/public/Trades"
        assert body == "pair=XXBTZEUR&since=0"
        assert "API-Key" not in headers
        assert "API-Sign" not in headers

    def test_custom_url_and_version(self, transport):
        client = KrakenClient(transport, url="https://example.test/", version="1")
        client.call_public("Time")

        url, _, body = transport.post.call_args.args
        assert url == "https://example.test/1/public/Time"
        assert body == ""

    def test_envelope_carries_all_errors(self, transport):
        transport.post.return_value = _response(errors=["EGeneral:Invalid arguments", "EQuery:Unknown asset pair"])
        envelope = KrakenClient(transport).call_public("Trades", {"pair": "BAD"})

        assert not envelope.ok
        assert envelope.errors == ["EGeneral:Invalid arguments", "EQuery:Unknown asset pair"]

        with pytest.raises(KrakenApiError) as exc_info:
            envelope.raise_for_errors("Trades", pair="BAD")

        err = exc_info.value
        assert err.errors == envelope.errors
        assert err.kind == ErrorKind.API
        assert "EGeneral:Invalid arguments" in str(err)
        assert "EQuery:Unknown asset pair" in str(err)
        assert "method=Trades" in str(err)
        assert "pair=BAD" in str(err)

    def test_reserved_characters_are_escaped(self, transport):
        KrakenClient(transport).call_public("Trades", {"pair": "XBT/EUR", "since": "a&b=c"})

        _, _, body = transport.post.call_args.args
        assert body == "pair=XBT%2FEUR&since=a%26b%3Dc"

    def test_invalid_json_is_decode_error(self, transport):
        transport.post.return_value = b"<html>gateway</html>"

        with pytest.raises(DecodeError) as exc_info:
            KrakenClient(transport).call_public("Time")

        assert exc_info.value.method == "Time"

    def test_non_object_json_is_decode_error(self, transport):
        transport.post.return_value = b"[1, 2, 3]"

        with pytest.raises(DecodeError):
            KrakenClient(transport).call_public("Time")

    def test_transport_error_propagates(self, transport):
        transport.post.side_effect = TransportError("connection refused")

        with pytest.raises(TransportError) as exc_info:
            KrakenClient(transport).call_public("Time")

        assert exc_info.value.kind == ErrorKind.TRANSPORT


# ============================================================================
# Private calls
# ============================================================================

class TestPrivateCalls:
    """
    **Feature: kraken-price-history, Property: Signed Request Envelope**

    Private calls send the nonce first and sign path + body.
    """

    def test_body_headers_and_signature(self, private_client, transport):
        private_client.call_private("Balance")

        url, headers, body = transport.post.call_args.args
        assert url == "https://api.kraken.com/0/private/Balance"
        assert body == "nonce=1234567890123456"
        assert headers["API-Key"] == "test-key"
        assert headers["API-Sign"] == sign_request(
            "/0/private/Balance",
            "1234567890123456",
            "nonce=1234567890123456",
            base64.b64decode(SECRET),
        )

    def test_params_follow_nonce_in_order(self, private_client, transport):
        private_client.call_private("AddOrder", {"pair": "XBTUSD", "type": "buy", "volume": "1.25"})

        _, headers, body = transport.post.call_args.args
        assert body == "nonce=1234567890123456&pair=XBTUSD&type=buy&volume=1.25"
        assert headers["API-Sign"] == sign_request(
            "/0/private/AddOrder",
            "1234567890123456",
            body,
            base64.b64decode(SECRET),
        )

    def test_signature_covers_encoded_params(self, private_client, transport):
        private_client.call_private("AddOrder", {"price": "+5.0", "userref": "a&b=c"})

        _, headers, body = transport.post.call_args.args
        assert body == "nonce=1234567890123456&price=%2B5.0&userref=a%26b%3Dc"
        assert headers["API-Sign"] == sign_request(
            "/0/private/AddOrder",
            "1234567890123456",
            body,
            base64.b64decode(SECRET),
        )

    def test_each_call_uses_a_new_nonce(self, transport, credentials):
        client = KrakenClient(transport, credentials=credentials)
        client.call_private("Balance")
        client.call_private("Balance")

        bodies = [call.args[2] for call in transport.post.call_args_list]
        nonces = [int(body.split("=", 1)[1]) for body in bodies]
        assert nonces[1] > nonces[0]

    def test_private_without_credentials(self, transport):
        client = KrakenClient(transport)

        with pytest.raises(InvalidCredentialsError):
            client.call_private("Balance")

        transport.post.assert_not_called()


# ============================================================================
# Market data helpers
# ============================================================================

class TestMarketData:
    """Convenience calls decode their results into models."""

    def test_server_time(self, transport):
        transport.post.return_value = _response({"unixtime": 1688669448, "rfc1123": "Thu, 06 Jul 23 18:50:48 +0000"})
        assert KrakenClient(transport).server_time() == 1688669448

    def test_assets(self, transport):
        transport.post.return_value = _response({
            "XXBT": {"aclass": "currency", "altname": "XBT", "decimals": 10, "display_decimals": 5, "status": "enabled"},
        })
        assets = KrakenClient(transport).assets()

        assert len(assets) == 1
        assert assets[0].name == "XXBT"
        assert assets[0].altname == "XBT"
        assert assets[0].decimals == 10

    def test_asset_pairs_with_filter(self, transport):
        transport.post.return_value = _response({
            "XXBTZEUR": {
                "altname": "XBTEUR",
                "aclass_base": "currency",
                "base": "XXBT",
                "aclass_quote": "currency",
                "quote": "ZEUR",
                "lot": "unit",
                "pair_decimals": 1,
                "lot_decimals": 8,
                "lot_multiplier": 1,
                "fees": [[0, 0.26]],
                "fee_volume_currency": "ZUSD",
                "margin_call": 80,
                "margin_stop": 40,
            },
        })
        client = KrakenClient(transport)
        pairs = client.asset_pairs(["XXBTZEUR", "XLTCZEUR"])

        _, _, body = transport.post.call_args.args
        assert body == "pair=XXBTZEUR%2CXLTCZEUR"
        assert pairs[0].name == "XXBTZEUR"
        assert pairs[0].quote == "ZEUR"
        assert pairs[0].margin_call == 80

    def test_assets_raise_on_errors(self, transport):
        transport.post.return_value = _response(errors=["EService:Unavailable"])

        with pytest.raises(KrakenApiError):
            KrakenClient(transport).assets()

    def test_trades(self, transport):
        transport.post.return_value = _response({
            "XXBTZEUR": [["27000.1", "0.5", 1688669597.8277, "b", "m", "", 1]],
            "last": "1688669597827702069",
        })
        batch = KrakenClient(transport).trades("XXBTZEUR", since="42")

        _, _, body = transport.post.call_args.args
        assert body == "pair=XXBTZEUR&since=42"
        assert batch.cursor == "1688669597827702069"
        assert batch.trades[0].timestamp == 1688669597
        assert batch.trades[0].side == TradeSide.BUY

    def test_trades_missing_pair(self, transport):
        transport.post.return_value = _response({"XXBTZUSD": [], "last": "1"})

        with pytest.raises(MissingDataError) as exc_info:
            KrakenClient(transport).trades("XXBTZEUR")

        assert exc_info.value.key == "XXBTZEUR"


# ============================================================================
# requests transport
# ============================================================================

class TestRequestsTransport:
    """The requests transport maps failures onto TransportError."""

    def test_post_returns_body(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = MagicMock(status_code=200, content=b'{"error":[]}', reason="OK")

        transport = RequestsTransport(timeout=5, session=session)
        assert transport.post("https://api.kraken.com/0/public/Time", {}, "") == b'{"error":[]}'

        kwargs = session.post.call_args.kwargs
        assert kwargs["timeout"] == 5
        assert kwargs["data"] == b""

    def test_connection_error(self):
        session = MagicMock(spec=requests.Session)
        session.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError):
            RequestsTransport(session=session).post("https://api.kraken.com/0/public/Time", {}, "")

    def test_timeout(self):
        session = MagicMock(spec=requests.Session)
        session.post.side_effect = requests.Timeout("timed out")

        with pytest.raises(TransportError):
            RequestsTransport(session=session).post("https://api.kraken.com/0/public/Time", {}, "")

    def test_server_error_status(self):
        session = MagicMock(spec=requests.Session)
        session.post.return_value = MagicMock(status_code=502, content=b"bad gateway", reason="Bad Gateway")

        with pytest.raises(TransportError):
            RequestsTransport(session=session).post("https://api.kraken.com/0/public/Time", {}, "")

    def test_client_error_status_is_returned(self):
        session = MagicMock(spec=requests.Session)
        body = b'{"error":["EAPI:Invalid key"]}'
        session.post.return_value = MagicMock(status_code=403, content=body, reason="Forbidden")

        assert RequestsTransport(session=session).post("https://x.test", {}, "") == body

    def test_context_manager_closes_session(self):
        session = MagicMock(spec=requests.Session)

        with RequestsTransport(session=session):
            pass

        session.close.assert_called_once()
