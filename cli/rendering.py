"""Utilities for rendering search results in the CLI."""

from __future__ import annotations

import json
from typing import Optional, Sequence

from metascore.scraper.models import Record


def _score(value: float, places: int) -> str:
    return f"{value:.{places}f}" if value else "tbd"


def format_record(record: Record, similarity: Optional[float] = None) -> str:
    """Render one record as a single aligned line.

    Scores of zero are shown as ``tbd`` since the catalog does not tell an
    unrated game from one rated zero.
    """
    line = (
        f"  meta {_score(record.meta_score, 0):>3}  "
        f"user {_score(record.user_score, 1):>4}  "
        f"{record.title}  <{record.link}>"
    )
    if similarity is not None:
        line += f"  (match {similarity:.2f})"
    return line


def records_to_json(records: Sequence[Record]) -> str:
    return json.dumps([r.to_dict() for r in records], indent=2)
