"""Field extraction from search-result and game detail pages.

Both extractors make a single left-to-right pass over the token stream from
:mod:`metascore.scraper.tokenizer` and keep only a little scan state.  Tags
they do not recognise are skipped.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, Optional, Union
from urllib.parse import urljoin, urlsplit

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from metascore.scraper.models import NumberStatus, ParsedNumber, Record
from metascore.scraper.tokenizer import START, TEXT, Token, has_classes, iter_tokens

logger = logging.getLogger(__name__)

# Search result titles: <h3 class="product_title"><a href="/game/...">
_RESULT_TITLE_TAG = "h3"
_RESULT_TITLE_CLASS = "product_title"

# Game-level user score: <div class="metascore_w user large game positive">7.5</div>
_USER_SCORE_CLASSES = ("metascore_w", "user", "game")

_STRUCTURED_DATA_TYPE = "application/ld+json"

_PLACEHOLDERS = frozenset({"", "tbd"})
_INTEGER = re.compile(r"[0-9]+")
_DECIMAL = re.compile(r"[0-9]+(?:\.[0-9]+)?|\.[0-9]+")

MAX_META_SCORE = 100
MAX_USER_SCORE = 10.0


# ---------------------------------------------------------------------------
# Structured-data payload
# ---------------------------------------------------------------------------

class AggregateRating(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rating_value: Optional[Union[str, int, float]] = Field(default=None, alias="ratingValue")


class GamePayload(BaseModel):
    """The schema.org ``VideoGame`` block embedded in every detail page."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    url: str = ""
    aggregate_rating: Optional[AggregateRating] = Field(default=None, alias="aggregateRating")

    @property
    def rating_value(self) -> Optional[Union[str, int, float]]:
        if self.aggregate_rating is None:
            return None
        return self.aggregate_rating.rating_value


# ---------------------------------------------------------------------------
# Numeric coercion
# ---------------------------------------------------------------------------

def _as_text(value: Union[str, int, float, None]) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value).strip()


def _coerce(value, pattern: re.Pattern, convert, upper, default) -> ParsedNumber:
    text = _as_text(value)
    if text.lower() in _PLACEHOLDERS or not pattern.fullmatch(text):
        return ParsedNumber(default, NumberStatus.DEFAULTED)
    number = convert(text)
    if number > upper:
        return ParsedNumber(default, NumberStatus.DEFAULTED)
    return ParsedNumber(number, NumberStatus.PARSED)


def parse_meta_score(value: Union[str, int, float, None]) -> ParsedNumber:
    """Coerce a critic score to an integer in ``0..100``.

    Empty, ``tbd``, non-integer or out-of-range input yields a defaulted 0.
    """
    return _coerce(value, _INTEGER, int, MAX_META_SCORE, 0)


def parse_user_score(value: Union[str, int, float, None]) -> ParsedNumber:
    """Coerce a user score to a decimal in ``0.0..10.0``.

    Empty, ``tbd``, non-numeric or out-of-range input yields a defaulted 0.0.
    """
    return _coerce(value, _DECIMAL, float, MAX_USER_SCORE, 0.0)


# ---------------------------------------------------------------------------
# Search result page
# ---------------------------------------------------------------------------

def _resolve_link(base_url: str, href: str) -> Optional[str]:
    """Resolve *href* against *base_url*; ``None`` if malformed or off-site."""
    try:
        link = urljoin(base_url + "/", href.strip())
        parts, base = urlsplit(link), urlsplit(base_url)
    except ValueError:
        return None
    if (parts.scheme, parts.netloc) != (base.scheme, base.netloc):
        return None
    return link


def extract_links(chunks: Iterable[bytes], base_url: str) -> list[str]:
    """Return the detail-page links of a search result page in document order.

    A result title heading arms the scanner; the next anchor whose ``href``
    resolves to a page on *base_url*'s site is recorded and disarms it.
    Malformed and off-site hrefs are skipped.  Duplicates are kept.
    """
    links: list[str] = []
    armed = False

    for token in iter_tokens(chunks):
        if token.kind != START:
            continue
        if not armed:
            if token.tag == _RESULT_TITLE_TAG and has_classes(token, _RESULT_TITLE_CLASS):
                armed = True
        elif token.tag == "a" and token.attrs.get("href"):
            link = _resolve_link(base_url, token.attrs["href"])
            if link is None:
                logger.debug("Skipping result link %r", token.attrs["href"])
                continue
            links.append(link)
            armed = False

    return links


# ---------------------------------------------------------------------------
# Game detail page
# ---------------------------------------------------------------------------

def _text_after(tokens: Iterator[Token], matches) -> Optional[str]:
    """Advance *tokens* to the first start tag accepted by *matches*.

    Returns the data of the token right after it when that token is text,
    otherwise ``None``.  The iterator is left just past that token.
    """
    for token in tokens:
        if token.kind == START and matches(token):
            following = next(tokens, None)
            if following is not None and following.kind == TEXT:
                return following.data
            return None
    return None


def _is_structured_data(token: Token) -> bool:
    return (
        token.tag == "script"
        and token.attrs.get("type", "").strip().lower() == _STRUCTURED_DATA_TYPE
    )


def _is_user_score(token: Token) -> bool:
    return has_classes(token, *_USER_SCORE_CLASSES)


def extract_record(chunks: Iterable[bytes], source_url: str = "") -> Optional[Record]:
    """Build a :class:`Record` from a game detail page.

    The structured-data block is mandatory: without it, or when it does not
    validate, ``None`` is returned.  The user score is read from the stream
    after that block and falls back to 0.0.  *source_url* is used as the link
    when the block carries no ``url``.
    """
    tokens = iter_tokens(chunks)

    raw_payload = _text_after(tokens, _is_structured_data)
    if raw_payload is None:
        logger.info("No structured data block on %s", source_url or "page")
        return None

    try:
        payload = GamePayload.model_validate_json(raw_payload)
    except ValidationError as exc:
        logger.info(
            "Invalid structured data on %s: %d error(s)",
            source_url or "page",
            exc.error_count(),
        )
        return None

    meta = parse_meta_score(payload.rating_value)
    user = parse_user_score(_text_after(tokens, _is_user_score))

    return Record(
        title=payload.name,
        link=payload.url or source_url,
        meta_score=meta.value,
        user_score=user.value,
    )
