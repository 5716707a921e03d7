"""HTTP transport backed by a requests session."""

import logging
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from krakenph.client.base import Transport
from krakenph.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
USER_AGENT = "krakenph Python API Client"


class RequestsTransport(Transport):
    """Transport using one pooled ``requests.Session``.

    Use it as a context manager so the session is closed by the caller
    that opened it::

        with RequestsTransport() as transport:
            client = KrakenClient(transport)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the transport.
        
        Args:
            timeout: Per-request timeout in seconds.
            session: Existing session to use instead of creating one.
        """
        self.timeout = timeout
        self._session = session or self._build_session()

    @staticmethod
    def _build_session() -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=2)
        session.mount("https://", adapter)
        session.headers["User-Agent"] = USER_AGENT
        return session

    def post(self, url: str, headers: dict[str, str], body: str) -> bytes:
        try:
            resp = self._session.post(
                url,
                data=body.encode("utf-8"),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"POST {url} failed: {exc}") from exc

        logger.debug("POST %s -> HTTP %s (%d bytes)", url, resp.status_code, len(resp.content))

        # Kraken reports API errors in the body; only server failures are transport errors
        if resp.status_code >= 500:
            raise TransportError(f"POST {url} failed: HTTP {resp.status_code} {resp.reason}")
        return resp.content

    def close(self) -> None:
        self._session.close()
