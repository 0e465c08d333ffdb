"""Shared HTML pages for the extractor and search tests.

The pages are trimmed copies of the catalog's markup: only the elements the
extractor looks at are kept, plus a few decoys (critic score, review-level
user scores) that must be ignored.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest


def _result(href: str, title: str) -> str:
    return (
        '<li class="result">'
        '<div class="result_wrap"><div class="basic_stats">'
        '<div class="main_stats">'
        f'<h3 class="product_title basic_stat"><a href="{href}">{title}</a></h3>'
        '<p>Switch, 2018</p>'
        '</div></div></div></li>'
    )


def _search_page(*results: str) -> str:
    return (
        "<!DOCTYPE html><html><head><title>Search - Metacritic</title></head><body>"
        '<div class="header"><a href="/">Home</a><a href="/browse/games">Games</a></div>'
        '<ul class="search_results module">'
        + "".join(results)
        + "</ul>"
        '<div class="footer"><h3 class="footer_title">Links</h3></div>'
        "</body></html>"
    )


def _ld_json(name: str, url: str, rating: str) -> str:
    return (
        '<script type="application/ld+json">'
        '{"@context":"http://schema.org","@type":"VideoGame",'
        f'"name":"{name}","url":"{url}",'
        '"aggregateRating":{"@type":"AggregateRating","bestRating":"100",'
        f'"worstRating":"0","ratingValue":"{rating}","ratingCount":"93"}}'
        "}</script>"
    )


def _detail_page(structured_data: str, user_score: str | None) -> str:
    user_block = ""
    if user_score is not None:
        user_block = (
            '<div class="userscore_wrap feature_userscore">'
            '<a class="metascore_anchor" href="/user-reviews">'
            f'<div class="metascore_w user large game positive">{user_score}</div>'
            "</a></div>"
        )
    return (
        "<!DOCTYPE html><html><head>"
        "<title>Game Reviews - Metacritic</title>"
        '<script type="text/javascript">var dataLayer = [];</script>'
        f"{structured_data}"
        "</head><body>"
        '<div class="metascore_wrap"><div class="metascore_w xlarge game positive">'
        "<span>76</span></div></div>"
        f"{user_block}"
        '<ol class="reviews user_reviews"><li>'
        '<div class="metascore_w user medium review positive indiv">9</div>'
        "</li></ol>"
        "</body></html>"
    )


PARTY_URL = "https://www.metacritic.com/game/switch/super-mario-party"
ODYSSEY_URL = "https://www.metacritic.com/game/switch/super-mario-odyssey"

SEARCH_HTML = _search_page(
    _result("/game/switch/super-mario-party", "Super Mario Party"),
    _result("/game/switch/super-mario-odyssey", "Super Mario Odyssey"),
)
SEARCH_ONE_HTML = _search_page(_result("/game/switch/super-mario-party", "Super Mario Party"))
SEARCH_ONE_ODYSSEY_HTML = _search_page(
    _result("/game/switch/super-mario-odyssey", "Super Mario Odyssey")
)
SEARCH_EMPTY_HTML = _search_page()

PARTY_HTML = _detail_page(_ld_json("Super Mario Party", PARTY_URL, "76"), "7.5")
ODYSSEY_HTML = _detail_page(_ld_json("Super Mario Odyssey", ODYSSEY_URL, "97"), "8.9")
ODYSSEY_NO_META_HTML = _detail_page(_ld_json("Super Mario Odyssey", ODYSSEY_URL, ""), "8.9")
ODYSSEY_NO_USER_HTML = _detail_page(_ld_json("Super Mario Odyssey", ODYSSEY_URL, "97"), None)
ODYSSEY_TBD_USER_HTML = _detail_page(_ld_json("Super Mario Odyssey", ODYSSEY_URL, "97"), "tbd")
ODYSSEY_NO_LD_JSON_HTML = _detail_page("", "8.9")
ODYSSEY_BROKEN_LD_JSON_HTML = _detail_page(
    '<script type="application/ld+json">{"name": "Super Mario Odyssey",</script>', "8.9"
)


@pytest.fixture
def pages() -> SimpleNamespace:
    """All fixture pages as UTF-8 bytes."""
    return SimpleNamespace(
        search=SEARCH_HTML.encode(),
        search_one=SEARCH_ONE_HTML.encode(),
        search_one_odyssey=SEARCH_ONE_ODYSSEY_HTML.encode(),
        search_empty=SEARCH_EMPTY_HTML.encode(),
        party=PARTY_HTML.encode(),
        odyssey=ODYSSEY_HTML.encode(),
        odyssey_no_meta=ODYSSEY_NO_META_HTML.encode(),
        odyssey_no_user=ODYSSEY_NO_USER_HTML.encode(),
        odyssey_tbd_user=ODYSSEY_TBD_USER_HTML.encode(),
        odyssey_no_ld_json=ODYSSEY_NO_LD_JSON_HTML.encode(),
        odyssey_broken_ld_json=ODYSSEY_BROKEN_LD_JSON_HTML.encode(),
    )
