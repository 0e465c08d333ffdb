"""HTTP transport used by the :class:`~metascore.scraper.fetcher.Fetcher`.

A transport performs exactly one GET and hands back the body as an open
stream.  Anything that goes wrong, while connecting or while the body is
being read, is reported as :class:`FetchError`; callers never see
library-specific exceptions.
"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Protocol

import httpx

from metascore.config import settings
from metascore.errors import FetchError
from metascore.scraper.models import ContentStream


class Transport(Protocol):
    def get(self, url: str, headers: Mapping[str, str]) -> ContentStream:
        """Return the body of *url*.  Raise :class:`FetchError` on failure."""


class ResponseStream:
    """Wraps a streaming :class:`httpx.Response` as a :class:`ContentStream`."""

    def __init__(self, url: str, response: httpx.Response) -> None:
        self.url = url
        self.response = response

    def iter_bytes(self) -> Iterator[bytes]:
        try:
            yield from self.response.iter_bytes()
        except httpx.HTTPError as exc:
            raise FetchError(self.url, str(exc) or type(exc).__name__) from exc

    def close(self) -> None:
        self.response.close()


class HttpxTransport:
    """Streaming GET over a shared :class:`httpx.Client`.

    Non-2xx responses are treated as failures.  When no client is passed one
    is created with ``settings.request_timeout`` and closed by :meth:`close`;
    an injected client is left for the caller to close.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.request_timeout,
            follow_redirects=True,
        )

    def get(self, url: str, headers: Mapping[str, str]) -> ResponseStream:
        try:
            request = self._client.build_request("GET", url, headers=dict(headers))
            response = self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            response.close()
            raise FetchError(url, f"HTTP {response.status_code}")

        return ResponseStream(url, response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
