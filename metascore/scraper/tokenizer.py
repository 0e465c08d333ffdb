"""Flat, incremental HTML token stream.

:func:`iter_tokens` turns an iterable of byte chunks into a lazy sequence of
start-tag, end-tag and text tokens.  It never builds a document tree: the
extractor walks the stream left to right and stops reading as soon as it has
what it needs.
"""

from __future__ import annotations

import codecs
from collections import deque
from html.parser import HTMLParser
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, NamedTuple

START = "start"
END = "end"
TEXT = "text"


class Token(NamedTuple):
    kind: str
    tag: str = ""
    attrs: Mapping[str, str] = MappingProxyType({})
    data: str = ""


class _TokenCollector(HTMLParser):
    """Queues tokens as :class:`HTMLParser` reports them.

    The parser may report one run of text in several pieces when it spans
    chunk boundaries; adjacent pieces are joined before the run is released,
    so a run is only complete once the next tag (or the end of input) is seen.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: deque[Token] = deque()
        self._text: list[str] = []

    def _flush_text(self) -> None:
        if self._text:
            self.tokens.append(Token(TEXT, data="".join(self._text)))
            self._text.clear()

    def handle_starttag(self, tag, attrs):
        self._flush_text()
        self.tokens.append(Token(START, tag, {k: v or "" for k, v in attrs}))

    def handle_startendtag(self, tag, attrs):
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        self._flush_text()
        self.tokens.append(Token(END, tag))

    def handle_data(self, data):
        self._text.append(data)

    def close(self):
        super().close()
        self._flush_text()


def iter_tokens(chunks: Iterable[bytes], encoding: str = "utf-8") -> Iterator[Token]:
    """Yield tokens from *chunks* as soon as each chunk has been fed.

    Bytes are decoded incrementally so multi-byte characters split across
    chunk boundaries survive; undecodable bytes are replaced.
    """
    decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
    parser = _TokenCollector()

    for chunk in chunks:
        parser.feed(decoder.decode(chunk))
        while parser.tokens:
            yield parser.tokens.popleft()

    parser.feed(decoder.decode(b"", final=True))
    parser.close()
    while parser.tokens:
        yield parser.tokens.popleft()


def has_classes(token: Token, *names: str) -> bool:
    """Return ``True`` if *token*'s ``class`` attribute lists every one of *names*."""
    classes = token.attrs.get("class", "").split()
    return all(name in classes for name in names)
