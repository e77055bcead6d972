from __future__ import annotations

import logging
import re
import time
from typing import Any

import requests

from uta.config import AppConfig
from uta.errors import CatalogError, CatalogNotFound, MissingCredentials, TokenBootstrapError

from .types import CatalogAlbum, CatalogTrack, Storefront

logger = logging.getLogger(__name__)

WEB_BASE = "https://music.apple.com"
API_BASE = "https://amp-api.music.apple.com/v1"

_JS_ASSET_RE = re.compile(r"index(.*?)\.js")
_JWT_RE = re.compile(r'"(?P<key>eyJh(.*?))"')

DEFAULT_HEADERS = {
    "Content-Type": "application/json;charset=utf-8",
    "Connection": "keep-alive",
    "Accept": "application/json",
    "Origin": WEB_BASE,
    "Referer": f"{WEB_BASE}/",
    "Accept-Encoding": "gzip, deflate, br",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/110.0.0.0 Safari/537.36"
    ),
}


def new_session() -> requests.Session:
    s = requests.Session()
    s.headers.update(DEFAULT_HEADERS)
    return s


class CatalogClient:
    def __init__(
        self,
        *,
        session: requests.Session,
        media_user_token: str,
        access_token: str | None = None,
        storefront: str | None = None,
        language: str | None = None,
        timeout_s: float = 10.0,
        max_retries: int = 3,
        backoff_base_s: float = 1.0,
    ):
        self.session = session
        self.media_user_token = media_user_token
        self.access_token = access_token
        self.storefront = storefront
        self.language = language
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self.backoff_base_s = backoff_base_s

    @classmethod
    def bootstrap(cls, cfg: AppConfig, session: requests.Session | None = None) -> CatalogClient:
        """
        Scrape the web player's bearer token, then resolve storefront and
        language unless both are configured.
        """
        if not cfg.media_user_token:
            raise MissingCredentials("APPLE_META_TOKEN is not set")

        client = cls(
            session=session or new_session(),
            media_user_token=cfg.media_user_token,
            storefront=cfg.storefront,
            language=cfg.language,
            timeout_s=cfg.request_timeout_s,
            max_retries=cfg.api_max_retries,
            backoff_base_s=cfg.api_backoff_base_s,
        )
        logger.info("Initializing...")
        client.access_token = client.fetch_access_token()
        if not (client.storefront and client.language):
            sf = client.get_storefront()
            client.storefront = client.storefront or sf.id
            client.language = client.language or sf.default_language_tag
        logger.debug("storefront=%s language=%s", client.storefront, client.language)
        return client

    def fetch_access_token(self) -> str:
        page = self._get(f"{WEB_BASE}/us/browse").text
        asset = _JS_ASSET_RE.search(page)
        if asset is None:
            raise TokenBootstrapError("Failed to find js file")

        js = self._get(f"{WEB_BASE}/assets/{asset.group(0)}").text
        jwt = _JWT_RE.search(js)
        if jwt is None:
            raise TokenBootstrapError("Failed to find jwt")
        return jwt.group("key")

    def get_storefront(self) -> Storefront:
        r = self._get(f"{API_BASE}/me/storefront", headers=self._auth_headers())
        return Storefront.from_response(_json(r))

    def get_song(self, song_id: str) -> CatalogTrack:
        logger.info("Getting song info...")
        return CatalogTrack.from_response(self._catalog_get(f"songs/{song_id}"))

    def get_album(self, album_id: str) -> CatalogAlbum:
        logger.info("Getting album info...")
        return CatalogAlbum.from_response(self._catalog_get(f"albums/{album_id}"))

    def _catalog_get(self, path: str) -> dict[str, Any]:
        params = {"include[songs]": "album,lyrics,syllable-lyrics"}
        if self.language:
            params["l"] = self.language
        r = self._get(
            f"{API_BASE}/catalog/{self.storefront}/{path}",
            params=params,
            headers=self._auth_headers(),
        )
        return _json(r)

    def _auth_headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "media-user-token": self.media_user_token,
        }
        if self.language:
            headers["Accept-Language"] = f"{self.language},en;q=0.9"
        return headers

    def _get(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        attempts = max(self.max_retries, 1)
        for attempt in range(1, attempts + 1):
            try:
                r = self.session.get(url, params=params, headers=headers, timeout=self.timeout_s)
                if r.status_code == 404:
                    raise CatalogNotFound(f"Not found: {url}")
                r.raise_for_status()
                return r
            except requests.RequestException as e:
                logger.warning("catalog error (attempt %s/%s): %s", attempt, attempts, e)
                if attempt == attempts:
                    raise CatalogError(f"Request to {url} failed: {e}") from e
                time.sleep(self.backoff_base_s * attempt)

        # unreachable, the last attempt returns or raises; keeps type checkers happy
        raise CatalogError(f"Request to {url} failed")


def _json(r: requests.Response) -> dict[str, Any]:
    try:
        return r.json()
    except ValueError as e:
        raise CatalogError(f"Failed to parse json from {r.url}") from e
