"""Search the catalog for a game and collect its scores.

The pipeline has two stages:

1. fetch the search result page and extract the detail-page links;
2. fetch every detail page concurrently and extract a :class:`Record` from
   each.

Only the first stage can fail the whole search.  Detail pages that cannot be
fetched or parsed are logged and left out of the result.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from urllib.parse import quote

from metascore.config import settings
from metascore.errors import ConfigurationError, FetchError, SearchError
from metascore.matcher import best_match
from metascore.platforms import platform_code
from metascore.scraper.extractor import extract_links, extract_record
from metascore.scraper.fetcher import Fetcher
from metascore.scraper.models import FetchOutcome, Record
from metascore.scraper.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

# Characters kept verbatim in a URL path segment besides the unreserved set.
_PATH_SEGMENT_SAFE = "$&+:=@"


class MetacriticClient:
    """Entry point for searching games and their scores.

    Settings not given explicitly come from :data:`metascore.config.settings`.
    A custom *fetcher* replaces the built-in one entirely; otherwise one is
    built from *transport* (an :class:`HttpxTransport` by default, owned and
    closed by this client).
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        *,
        fetcher: Optional[Fetcher] = None,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        concurrency: Optional[int] = None,
    ) -> None:
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self._owned_transport: Optional[HttpxTransport] = None

        if fetcher is None:
            if transport is None:
                transport = self._owned_transport = HttpxTransport()
            try:
                fetcher = Fetcher(
                    transport,
                    user_agent=user_agent or settings.user_agent,
                    concurrency=concurrency if concurrency is not None else settings.concurrency,
                )
            except ConfigurationError:
                self.close()
                raise
        self.fetcher = fetcher

    # ------------------------------------------------------------------
    # URL building
    # ------------------------------------------------------------------

    def search_url(self, title: str, platform: str) -> str:
        """Return the advanced-search URL for *title* on *platform*."""
        return (
            f"{self.base_url}/search/game/{quote(title, safe=_PATH_SEGMENT_SAFE)}"
            f"/results?plats[{platform_code(platform)}]=1&search_type=advanced"
        )

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _candidate_links(self, url: str) -> list[str]:
        outcome = self.fetcher.fetch_one(url)
        try:
            if not outcome.ok:
                raise SearchError(f"cannot crawl search result page: {outcome.error}")
            try:
                return extract_links(outcome.content.iter_bytes(), self.base_url)
            except FetchError as exc:
                raise SearchError(f"cannot read search result page: {exc.reason}") from exc
            except Exception as exc:
                raise SearchError(f"cannot parse search result page: {exc}") from exc
        finally:
            outcome.close()

    def _record_from(self, outcome: FetchOutcome) -> Optional[Record]:
        if not outcome.ok:
            return None
        try:
            return extract_record(outcome.content.iter_bytes(), source_url=outcome.url)
        except FetchError as exc:
            logger.warning("Reading %s failed: %s", outcome.url, exc.reason)
            return None
        except Exception as exc:
            logger.warning("Parsing %s failed: %s", outcome.url, exc)
            return None
        finally:
            outcome.close()

    def _records(self, links: list[str]) -> list[Record]:
        outcomes = self.fetcher.fetch(links)
        if not outcomes:
            return []

        by_url: dict[str, list[Record]] = {}
        with ThreadPoolExecutor(
            max_workers=self.fetcher.concurrency, thread_name_prefix="extract"
        ) as pool:
            for outcome, record in zip(outcomes, pool.map(self._record_from, outcomes)):
                if record is None:
                    logger.info("Dropped candidate %s", outcome.url)
                    continue
                by_url.setdefault(outcome.url, []).append(record)

        # Completion order is arbitrary; report in the order the links were found.
        records: list[Record] = []
        for link in links:
            found = by_url.get(link)
            if found:
                records.append(found.pop(0))
        return records

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, title: str, platform: str) -> list[Record]:
        """Return every game found for *title* on *platform*.

        Raises:
            UnknownPlatformError: If *platform* is not in the platform table.
            SearchError: If the search result page cannot be fetched or read.
        """
        url = self.search_url(title, platform)
        links = self._candidate_links(url)
        logger.debug("Search %r on %s: %d candidate(s)", title, platform, len(links))
        return self._records(links)

    def search_best_match(self, title: str, platform: str) -> Optional[Record]:
        """Search and return the game whose title is closest to *title*.

        Returns ``None`` when nothing was found or the search page failed.
        """
        try:
            records = self.search(title, platform)
        except SearchError as exc:
            logger.warning("Search for %r failed: %s", title, exc)
            return None
        return best_match(title, records)

    def close(self) -> None:
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> "MetacriticClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def search(title: str, platform: str) -> list[Record]:
    """Run :meth:`MetacriticClient.search` with a default client."""
    with MetacriticClient() as client:
        return client.search(title, platform)


def search_best_match(title: str, platform: str) -> Optional[Record]:
    """Run :meth:`MetacriticClient.search_best_match` with a default client."""
    with MetacriticClient() as client:
        return client.search_best_match(title, platform)
