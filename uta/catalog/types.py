from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from uta.errors import CatalogNotFound


def _first(payload: dict[str, Any], what: str) -> dict[str, Any]:
    # catalog responses wrap every resource in a `data` list
    data = payload.get("data") or []
    if not data:
        raise CatalogNotFound(f"No {what} found")
    return data[0]


def _ttml(relationship: dict[str, Any] | None) -> str | None:
    data = (relationship or {}).get("data") or []
    if not data:
        return None
    return (data[0].get("attributes") or {}).get("ttml") or None


@dataclass(frozen=True, slots=True)
class Storefront:
    id: str
    default_language_tag: str

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> Storefront:
        entry = _first(payload, "storefront")
        attrs = entry.get("attributes") or {}
        return cls(
            id=str(entry["id"]),
            default_language_tag=attrs.get("defaultLanguageTag") or "en-US",
        )


@dataclass(frozen=True, slots=True)
class CatalogTrack:
    name: str
    artist_name: str
    lyrics: str | None = None
    syllable_lyrics: str | None = None

    @property
    def display(self) -> str:
        return f"{self.name} - {self.artist_name}"

    def get_lyrics(self, syllable: bool) -> str | None:
        return self.syllable_lyrics if syllable else self.lyrics

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> CatalogTrack:
        attrs = entry.get("attributes") or {}
        rel = entry.get("relationships") or {}
        return cls(
            name=attrs.get("name", ""),
            artist_name=attrs.get("artistName", ""),
            lyrics=_ttml(rel.get("lyrics")),
            syllable_lyrics=_ttml(rel.get("syllable-lyrics")),
        )

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> CatalogTrack:
        return cls.from_entry(_first(payload, "song"))


@dataclass(frozen=True, slots=True)
class CatalogAlbum:
    name: str
    artist_name: str
    tracks: tuple[CatalogTrack, ...]

    @classmethod
    def from_response(cls, payload: dict[str, Any]) -> CatalogAlbum:
        entry = _first(payload, "album")
        attrs = entry.get("attributes") or {}
        tracks = ((entry.get("relationships") or {}).get("tracks") or {}).get("data") or []
        return cls(
            name=attrs.get("name", ""),
            artist_name=attrs.get("artistName", ""),
            tracks=tuple(CatalogTrack.from_entry(t) for t in tracks),
        )
