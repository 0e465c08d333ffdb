"""Fuzzy title matching with Dice's coefficient over character bigrams."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Optional, Sequence

from metascore.scraper.models import Record

logger = logging.getLogger(__name__)


def _bigrams(text: str) -> Counter:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def dice_coefficient(a: str, b: str) -> float:
    """Return the bigram similarity of *a* and *b* in ``[0, 1]``.

    Whitespace is ignored and comparison is case-insensitive.  Bigrams are
    counted with multiplicity, so ``"aaaa"`` and ``"aa"`` share one ``"aa"``.
    """
    a = "".join(a.split()).casefold()
    b = "".join(b.split()).casefold()
    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0

    shared = sum((_bigrams(a) & _bigrams(b)).values())
    return 2.0 * shared / (len(a) + len(b) - 2)


def rank(query: str, records: Sequence[Record]) -> list[tuple[Record, float]]:
    """Score every distinct title against *query*, best first.

    Records are keyed by title; when several share a title only the first is
    kept.  Equal scores keep their input order.
    """
    by_title: dict[str, Record] = {}
    for record in records:
        by_title.setdefault(record.title, record)

    scored = [(record, dice_coefficient(query, title)) for title, record in by_title.items()]
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return scored


def best_match(query: str, records: Sequence[Record]) -> Optional[Record]:
    """Return the record whose title is most similar to *query*.

    A single candidate is returned as-is without scoring.  Ties go to the
    candidate that came first.
    """
    if not records:
        return None
    if len(records) == 1:
        return records[0]

    record, score = rank(query, records)[0]
    logger.debug("Best match for %r: %r (%.3f)", query, record.title, score)
    return record
