"""metascore — look up a game's critic and user scores on Metacritic.

Public API::

    from metascore import MetacriticClient
    with MetacriticClient() as client:
        game = client.search_best_match("Mario Kart 8", "switch")
"""

from metascore.errors import (
    ConfigurationError,
    FetchError,
    MetascoreError,
    SearchError,
    UnknownPlatformError,
)
from metascore.matcher import best_match, dice_coefficient
from metascore.scraper.models import Record
from metascore.search import MetacriticClient

__all__ = [
    "MetacriticClient",
    "Record",
    "best_match",
    "dice_coefficient",
    "MetascoreError",
    "ConfigurationError",
    "UnknownPlatformError",
    "FetchError",
    "SearchError",
]
