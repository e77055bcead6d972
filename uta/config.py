from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    # Credentials
    media_user_token: str | None

    # Storage
    output_dir: Path

    # Catalog
    storefront: str | None  # resolved from the API when unset
    language: str | None  # storefront default when unset
    request_timeout_s: float
    api_max_retries: int
    api_backoff_base_s: float


def load_config() -> AppConfig:
    out_env = os.getenv("UTA_OUTPUT_DIR")
    output_dir = Path(out_env) if out_env else Path.cwd()

    return AppConfig(
        media_user_token=os.getenv("APPLE_META_TOKEN") or None,
        output_dir=output_dir,
        storefront=os.getenv("UTA_STOREFRONT") or None,
        language=os.getenv("UTA_LANGUAGE") or None,
        request_timeout_s=float(os.getenv("UTA_TIMEOUT", "10.0")),
        api_max_retries=int(os.getenv("UTA_API_MAX_RETRIES", "3")),
        api_backoff_base_s=float(os.getenv("UTA_API_BACKOFF_BASE", "1.0")),
    )
