"""Polling trade fetcher.

Repeatedly calls the public Trades method with a ``since`` cursor, decodes
the returned trades and advances the cursor to the server's ``last`` token.
"""

import logging
import threading
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict

from krakenph.client.kraken import KrakenClient
from krakenph.errors import FetchError
from krakenph.models import TradeBatch

logger = logging.getLogger(__name__)

# Cursor meaning "beginning of available history"
SINCE_BEGINNING = "0"


class FetcherState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"


class FetchOutcome(BaseModel):
    """Result of one fetch: either a batch or the error that stopped it."""

    batch: Optional[TradeBatch] = None
    error: Optional[FetchError] = None

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        return self.error is None


class TradeFetcher:
    """Fetches trades for one pair, once or on a fixed polling interval.

    The cursor only advances after a batch decoded completely, so a failed
    call can be retried by the caller from the same position. Trades are
    emitted in server order and are never de-duplicated.
    """

    def __init__(
        self,
        client: KrakenClient,
        pair: str,
        since: str = SINCE_BEGINNING,
        interval: float = 0,
    ):
        """Initialize the fetcher.
        
        Args:
            client: Client used for the Trades calls.
            pair: Pair to fetch, e.g. ``XXBTZEUR``.
            since: Initial opaque cursor.
            interval: Seconds between polls; 0 fetches once.
        """
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.client = client
        self.pair = pair
        self.interval = interval
        self._since = since
        self._state = FetcherState.IDLE
        self._stop = threading.Event()

    @property
    def since(self) -> str:
        """Cursor to send on the next call."""
        return self._since

    @property
    def state(self) -> FetcherState:
        return self._state

    def stop(self) -> None:
        """Ask the polling loop to stop before its next request."""
        self._stop.set()

    def fetch_once(self) -> TradeBatch:
        """Fetch and decode one batch, then advance the cursor.
        
        Returns:
            Decoded trades and the cursor returned by the server.
            
        Raises:
            TransportError: On network failure.
            KrakenApiError: If the server reports errors.
            MissingDataError: If the pair or cursor is absent from the result.
            DecodeError: If a trade record is malformed.
        """
        batch = self.client.trades(self.pair, since=self._since)
        logger.info(
            "fetched %d trades for %s since=%s last=%s",
            len(batch.trades), self.pair, self._since, batch.cursor,
        )
        self._since = batch.cursor
        return batch

    def try_fetch(self) -> FetchOutcome:
        """Like fetch_once, but return the error instead of raising it."""
        try:
            return FetchOutcome(batch=self.fetch_once())
        except FetchError as e:
            logger.warning("fetch failed for %s: %s", self.pair, e)
            return FetchOutcome(error=e)

    def poll(self) -> Iterator[TradeBatch]:
        """Run the polling loop, yielding one batch per successful call.

        The loop ends after one batch when ``interval`` is 0, when
        :meth:`stop` is called, or when a call fails; failures propagate
        to the caller.
        """
        self._stop.clear()
        self._state = FetcherState.POLLING
        try:
            while not self._stop.is_set():
                yield self.fetch_once()

                if self.interval == 0:
                    break
                # interruptible sleep
                if self._stop.wait(self.interval):
                    break
        finally:
            self._state = FetcherState.IDLE
