"""Data models for the scraper pipeline."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Iterator, Optional, Protocol, Union


class ContentStream(Protocol):
    """A fetched page body that is read incrementally and must be closed.

    ``httpx.Response`` satisfies this protocol.
    """

    def iter_bytes(self) -> Iterator[bytes]: ...

    def close(self) -> None: ...


@dataclass(frozen=True)
class Record:
    """A game on the catalog with its aggregate scores."""

    title: str
    link: str
    meta_score: int = 0
    user_score: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class FetchOutcome:
    """The result of fetching one URL: either *content* or *error* is set."""

    url: str
    content: Optional[ContentStream] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.content is not None

    def close(self) -> None:
        """Release the content stream.  Safe to call more than once."""
        if self.content is not None:
            self.content.close()


class NumberStatus(enum.Enum):
    PARSED = "parsed"
    DEFAULTED = "defaulted"


@dataclass(frozen=True)
class ParsedNumber:
    """Tagged result of score coercion.

    ``value`` is always usable; ``status`` tells whether it came from the page
    or is the zero default for a missing, placeholder or malformed field.
    """

    value: Union[int, float]
    status: NumberStatus

    @property
    def parsed(self) -> bool:
        return self.status is NumberStatus.PARSED
