from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from uta.catalog.client import CatalogClient
from uta.catalog.types import CatalogTrack
from uta.convert import OutputMode, convert
from uta.errors import ConversionError, UtaError

logger = logging.getLogger(__name__)

SONG = "song"
ALBUM = "album"

_BAD_FS = re.compile(r"[\\/]+")


def _sanitize_filename(s: str) -> str:
    s2 = _BAD_FS.sub("_", s).strip()
    return s2 or "unknown"


@dataclass(frozen=True, slots=True)
class CatalogRef:
    kind: str
    id: str


@dataclass(frozen=True, slots=True)
class SkippedTrack:
    label: str
    reason: str


@dataclass(slots=True)
class SaveReport:
    saved: list[Path] = field(default_factory=list)
    skipped: list[SkippedTrack] = field(default_factory=list)


def parse_catalog_url(url: str) -> CatalogRef:
    """
    .../album/<name>/<album id>          -> album
    .../album/<name>/<album id>?i=<id>   -> song
    """
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    song_id = parse_qs(parsed.query).get("i")
    if song_id and song_id[0]:
        return CatalogRef(SONG, song_id[0])
    if not parsed.scheme or not segments:
        raise UtaError(f"Failed to parse url: {url}")
    return CatalogRef(ALBUM, segments[-1])


def save_track(track: CatalogTrack, *, syllable: bool, mode: OutputMode, out_dir: Path, report: SaveReport) -> None:
    ttml = track.get_lyrics(syllable)
    if not ttml:
        logger.info("%s has no lyrics", track.display)
        report.skipped.append(SkippedTrack(track.display, "no lyrics"))
        return

    try:
        text = convert(ttml, track.artist_name, track.name, mode)
    except ConversionError as e:
        logger.info("Skipping %s: %s", track.display, e)
        report.skipped.append(SkippedTrack(track.display, f"{type(e).__name__}: {e}"))
        return

    path = out_dir / f"{_sanitize_filename(track.name)} - {_sanitize_filename(track.artist_name)}.{mode.extension}"
    path.write_text(text, encoding="utf-8")
    logger.debug("Wrote %s", path)
    report.saved.append(path)


def save_song_lyrics(client: CatalogClient, song_id: str, *, syllable: bool, mode: OutputMode, out_dir: Path) -> SaveReport:
    track = client.get_song(song_id)
    report = SaveReport()
    out_dir.mkdir(parents=True, exist_ok=True)
    save_track(track, syllable=syllable, mode=mode, out_dir=out_dir, report=report)
    return report


def save_album_lyrics(client: CatalogClient, album_id: str, *, syllable: bool, mode: OutputMode, out_dir: Path) -> SaveReport:
    album = client.get_album(album_id)
    folder = out_dir / f"{_sanitize_filename(album.name)} - {_sanitize_filename(album.artist_name)}"
    folder.mkdir(parents=True, exist_ok=True)

    logger.info("Saving lyrics for %d tracks into %s", len(album.tracks), folder)
    report = SaveReport()
    for track in album.tracks:
        save_track(track, syllable=syllable, mode=mode, out_dir=folder, report=report)
    return report


def download(client: CatalogClient, url: str, *, syllable: bool, mode: OutputMode, out_dir: Path) -> SaveReport:
    ref = parse_catalog_url(url)
    if ref.kind == SONG:
        return save_song_lyrics(client, ref.id, syllable=syllable, mode=mode, out_dir=out_dir)
    return save_album_lyrics(client, ref.id, syllable=syllable, mode=mode, out_dir=out_dir)
