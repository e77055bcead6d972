from __future__ import annotations

import re
from dataclasses import dataclass

from uta.errors import ValidationError

_TAG_KEY_RE = re.compile(r"[a-z]{2}")

ARTIST = "ar"
TITLE = "ti"


@dataclass(frozen=True, slots=True)
class LyricLine:
    t_ms: int
    text: str


@dataclass(frozen=True, slots=True)
class LrcDocument:
    """
    Ordered LRC lines plus header tags.

    Lines keep the order they were given in; nothing is sorted or merged.
    Tags are written before the lines, in the order given.
    """

    lines: tuple[LyricLine, ...]
    tags: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for key, value in self.tags:
            if not _TAG_KEY_RE.fullmatch(key):
                raise ValidationError(f"Invalid tag key: {key!r}")
            if key in seen:
                raise ValidationError(f"Duplicate tag: {key!r}")
            seen.add(key)
            if not value.strip():
                raise ValidationError(f"Empty value for tag {key!r}")
            if "\n" in value or "\r" in value:
                raise ValidationError(f"Line break in tag {key!r}")
        for line in self.lines:
            if line.t_ms < 0:
                raise ValidationError(f"Negative timestamp: {line.t_ms}")
            if "\n" in line.text or "\r" in line.text:
                raise ValidationError(f"Line break in lyric text: {line.text!r}")

    @classmethod
    def for_track(cls, artist: str, title: str, lines: tuple[LyricLine, ...] | list[LyricLine]) -> LrcDocument:
        return cls(lines=tuple(lines), tags=((ARTIST, artist), (TITLE, title)))

    def tag(self, key: str) -> str | None:
        return dict(self.tags).get(key)

    @property
    def artist(self) -> str | None:
        return self.tag(ARTIST)

    @property
    def title(self) -> str | None:
        return self.tag(TITLE)
