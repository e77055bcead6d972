from __future__ import annotations

import pytest

from uta.app import ALBUM, SONG, CatalogRef, download, parse_catalog_url, save_album_lyrics
from uta.catalog.types import CatalogAlbum, CatalogTrack
from uta.convert import OutputMode
from uta.errors import UtaError
from tests.mocks.catalog_mock import MockCatalogClient

LINE = '<tt><body><div><p begin="00:01.200">Hello</p></div></body></tt>'
SYLLABLE = '<tt><body><div><p begin="00:01.200"><span begin="00:01.200">Hel</span></p></div></body></tt>'


class TestParseUrl:
    def test_song_from_query(self):
        ref = parse_catalog_url("https://music.apple.com/us/album/some-album/1440841234?i=1440841999")
        assert ref == CatalogRef(SONG, "1440841999")

    def test_album_without_query(self):
        ref = parse_catalog_url("https://music.apple.com/us/album/some-album/1440841234")
        assert ref == CatalogRef(ALBUM, "1440841234")

    def test_album_with_other_query(self):
        ref = parse_catalog_url("https://music.apple.com/us/album/some-album/1440841234?l=en")
        assert ref == CatalogRef(ALBUM, "1440841234")

    @pytest.mark.parametrize("url", ["not a url", "https://music.apple.com"])
    def test_unparseable(self, url):
        with pytest.raises(UtaError):
            parse_catalog_url(url)


class TestSaveLyrics:
    def test_song_ttml(self, tmp_path):
        client = MockCatalogClient(songs={"9": CatalogTrack("Song", "Artist", lyrics=LINE)})
        report = download(client, "https://music.apple.com/us/album/x/1?i=9", syllable=False, mode=OutputMode.TTML, out_dir=tmp_path)

        path = tmp_path / "Song - Artist.ttml"
        assert report.saved == [path]
        assert report.skipped == []
        assert path.read_text(encoding="utf-8").endswith("</tt>\n")

    def test_song_lrc(self, tmp_path):
        client = MockCatalogClient(songs={"9": CatalogTrack("Song", "Artist", lyrics=LINE)})
        download(client, "https://music.apple.com/us/album/x/1?i=9", syllable=False, mode=OutputMode.LRC, out_dir=tmp_path)
        assert (tmp_path / "Song - Artist.lrc").read_text(encoding="utf-8") == (
            "[ar:Artist]\n[ti:Song]\n[00:01.20]Hello\n"
        )

    def test_song_without_lyrics(self, tmp_path):
        client = MockCatalogClient(songs={"9": CatalogTrack("Song", "Artist")})
        report = download(client, "https://music.apple.com/us/album/x/1?i=9", syllable=False, mode=OutputMode.LRC, out_dir=tmp_path)
        assert report.saved == []
        assert [(s.label, s.reason) for s in report.skipped] == [("Song - Artist", "no lyrics")]
        assert list(tmp_path.iterdir()) == []

    def test_album_skips_bad_tracks_and_continues(self, tmp_path):
        album = CatalogAlbum(
            name="Best/Of",
            artist_name="Band",
            tracks=(
                CatalogTrack("One", "Band", lyrics=LINE, syllable_lyrics=SYLLABLE),
                CatalogTrack("Two", "Band"),
                CatalogTrack("Three", "Band", lyrics=LINE, syllable_lyrics=SYLLABLE),
            ),
        )
        client = MockCatalogClient(albums={"5": album})
        report = save_album_lyrics(client, "5", syllable=True, mode=OutputMode.LRC, out_dir=tmp_path)

        assert report.saved == []
        assert [s.label for s in report.skipped] == ["One - Band", "Two - Band", "Three - Band"]
        assert report.skipped[0].reason == "UnsupportedFeature: syllable lyrics"
        assert (tmp_path / "Best_Of - Band").is_dir()

    def test_album_syllable_ttml(self, tmp_path):
        album = CatalogAlbum("Album", "Band", (CatalogTrack("One", "Band", lyrics=LINE, syllable_lyrics=SYLLABLE),))
        client = MockCatalogClient(albums={"5": album})
        report = download(client, "https://music.apple.com/us/album/album/5", syllable=True, mode=OutputMode.TTML, out_dir=tmp_path)

        path = tmp_path / "Album - Band" / "One - Band.ttml"
        assert report.saved == [path]
        assert "<span" in path.read_text(encoding="utf-8")
        assert client.calls == [("album", "5")]

    def test_existing_album_folder_reused(self, tmp_path):
        (tmp_path / "Album - Band").mkdir()
        album = CatalogAlbum("Album", "Band", (CatalogTrack("One", "Band", lyrics=LINE),))
        report = save_album_lyrics(MockCatalogClient(albums={"5": album}), "5", syllable=False, mode=OutputMode.LRC, out_dir=tmp_path)
        assert len(report.saved) == 1
