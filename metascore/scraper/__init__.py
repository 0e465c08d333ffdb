"""Scraper package — concurrent fetch & streaming field extraction."""

from metascore.scraper.extractor import extract_links, extract_record
from metascore.scraper.fetcher import Fetcher
from metascore.scraper.models import FetchOutcome, Record
from metascore.scraper.transport import HttpxTransport

__all__ = [
    "Fetcher",
    "HttpxTransport",
    "extract_links",
    "extract_record",
    "FetchOutcome",
    "Record",
]
