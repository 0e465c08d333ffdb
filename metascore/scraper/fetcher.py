"""Bounded-concurrency fetcher.

Retrieves a batch of URLs in parallel with a hard ceiling on the number of
requests in flight.  The worker pool is sized to the limit, so a new request
only starts once an earlier one has finished.  Outcomes are gathered on the
calling thread as workers complete, and :meth:`Fetcher.fetch` returns only
after every target has reported.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

from metascore.errors import ConfigurationError, FetchError
from metascore.scraper.models import FetchOutcome
from metascore.scraper.transport import Transport

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetch many URLs with at most *concurrency* requests in flight.

    Every request carries a single ``User-Agent`` header.  A failing target
    yields a failure outcome and never affects the rest of the batch.
    """

    def __init__(self, transport: Transport, user_agent: str, concurrency: int) -> None:
        if concurrency < 1:
            raise ConfigurationError(
                f"concurrency must be a positive integer, got {concurrency!r}"
            )
        self.transport = transport
        self.user_agent = user_agent
        self.concurrency = concurrency

    def _fetch(self, url: str) -> FetchOutcome:
        try:
            content = self.transport.get(url, {"User-Agent": self.user_agent})
        except FetchError as exc:
            logger.warning("Fetch failed for %s: %s", url, exc.reason)
            return FetchOutcome(url=url, error=exc.reason)
        except Exception as exc:
            logger.warning("Fetch failed for %s: %s", url, exc)
            return FetchOutcome(url=url, error=str(exc) or type(exc).__name__)
        return FetchOutcome(url=url, content=content)

    def fetch(self, targets: Sequence[str]) -> list[FetchOutcome]:
        """Fetch every URL in *targets*.

        Returns:
            One :class:`FetchOutcome` per target, in completion order.  Use
            ``outcome.url`` to map an outcome back to its target.  The caller
            owns the outcomes and must :meth:`~FetchOutcome.close` them.
        """
        if not targets:
            return []

        logger.debug("Fetching %d URL(s), concurrency=%d", len(targets), self.concurrency)
        outcomes: list[FetchOutcome] = []
        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="fetch"
        ) as pool:
            futures = [pool.submit(self._fetch, url) for url in targets]
            for future in as_completed(futures):
                outcomes.append(future.result())

        failed = sum(1 for o in outcomes if not o.ok)
        logger.debug("Fetched %d URL(s), %d failed", len(outcomes), failed)
        return outcomes

    def fetch_one(self, target: str) -> FetchOutcome:
        """Fetch a single URL."""
        return self.fetch([target])[0]
