"""Static table of the catalog's platform codes.

The search page filters by platform through a numeric code in the query
string (``plats[<code>]=1``).  The table is built once at import and is
read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from metascore.errors import UnknownPlatformError

PLATFORMS: Mapping[str, str] = MappingProxyType({
    # Mobile
    "ios": "9",
    # Sega
    "dc": "15",
    # Sony
    "ps": "10",
    "ps2": "6",
    "ps3": "1",
    "ps4": "72496",
    "psp": "7",
    "psvita": "67365",
    # Nintendo
    "gc": "13",
    "gba": "11",
    "n64": "14",
    "3ds": "16",
    "ds": "4",
    "switch": "268409",
    "wii": "8",
    "wiiu": "68410",
    # Microsoft
    "pc": "3",
    "xbox": "12",
    "xbox360": "2",
    "xboxone": "80000",
})

PLATFORM_NAMES: tuple[str, ...] = tuple(sorted(PLATFORMS))

_KNOWN_CODES = frozenset(PLATFORMS.values())


def _normalise(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch not in " -_")


def platform_code(platform: str) -> str:
    """Return the numeric code for *platform*.

    Names are matched case-insensitively with spaces, hyphens and
    underscores ignored, so ``"Xbox One"`` and ``"xbox-one"`` both resolve.
    A value that already is a known code is returned unchanged.

    Raises:
        UnknownPlatformError: If *platform* is neither a name nor a code.
    """
    key = _normalise(platform)
    if key in PLATFORMS:
        return PLATFORMS[key]
    if key in _KNOWN_CODES:
        return key
    raise UnknownPlatformError(platform)
