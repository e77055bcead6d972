from __future__ import annotations

import logging

from uta.errors import StructureError, UnsupportedFeature
from uta.lrc.model import LrcDocument, LyricLine
from uta.ttml.markup import DOCUMENT_ID, MarkupDocument
from uta.ttml.timestamp import parse_timestamp

logger = logging.getLogger(__name__)


def synthesize(doc: MarkupDocument, artist: str, title: str) -> LrcDocument:
    """
    Line-timed TTML -> LRC document.

    body > div > p, in document order. Each <p> needs a `begin` clock value
    and text as its first child. Any <span> inside a <p> means word-level
    (syllable) timing, which is rejected for the whole document.
    """
    body = doc.find(DOCUMENT_ID, "body")
    if body is None:
        raise StructureError("missing body")

    lines: list[LyricLine] = []
    seen: set[int] = set()
    for div in doc.find_all(body, "div"):
        for p in doc.find_all(div, "p"):
            # nested divs would otherwise yield the same <p> twice
            if p in seen:
                continue
            seen.add(p)
            lines.append(_timed_line(doc, p))

    logger.debug("Synthesized %d lines for %s - %s", len(lines), artist, title)
    return LrcDocument.for_track(artist, title, lines)


def _timed_line(doc: MarkupDocument, p: int) -> LyricLine:
    if doc.find(p, "span") is not None:
        raise UnsupportedFeature("syllable lyrics")

    begin = doc.attr(p, "begin")
    if begin is None:
        raise StructureError("missing begin attribute")

    text = doc.text(p)
    if text is None:
        raise StructureError("missing text content")

    return LyricLine(t_ms=parse_timestamp(begin), text=text)
