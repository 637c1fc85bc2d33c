"""Configuration for the horse farm backend.

Settings are plain frozen dataclasses built once at process start and handed
to the adapters, so nothing downstream reads the environment on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]

DEFAULT_MLS_API_URL = "https://api.mlsgrid.com/v2"
DEFAULT_SITE_URL = "https://carolinahorsefarmrealty.com"
DEFAULT_FORM_SOURCE = "Carolina Horse Farm Realty Website"


@dataclass(frozen=True)
class MLSSettings:
    """MLS Grid (RESO Web API) connection settings."""

    api_url: str = DEFAULT_MLS_API_URL
    api_key: str = ""
    page_size: int = 100
    state: str = "NC"
    timeout: float = 10.0

    @property
    def configured(self) -> bool:
        return bool(self.api_url and self.api_key)


@dataclass(frozen=True)
class WordPressSettings:
    """WPGraphQL endpoint settings."""

    api_url: str = ""
    page_size: int = 100
    timeout: float = 10.0

    @property
    def configured(self) -> bool:
        return bool(self.api_url)


@dataclass(frozen=True)
class CRMSettings:
    """Lead webhook settings."""

    webhook_url: str = ""
    form_source: str = DEFAULT_FORM_SOURCE
    timeout: float = 10.0

    @property
    def configured(self) -> bool:
        return bool(self.webhook_url)


@dataclass(frozen=True)
class SiteSettings:
    base_url: str = DEFAULT_SITE_URL

    def url(self, path: str = "") -> str:
        base = self.base_url.rstrip("/")
        if not path or path == "/":
            return base
        return f"{base}/{path.lstrip('/')}"


@dataclass(frozen=True)
class Settings:
    mls: MLSSettings = field(default_factory=MLSSettings)
    wordpress: WordPressSettings = field(default_factory=WordPressSettings)
    crm: CRMSettings = field(default_factory=CRMSettings)
    site: SiteSettings = field(default_factory=SiteSettings)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Create settings from environment variables.

        When ``env`` is omitted the process environment is used, after loading
        a ``.env`` file from the repository root without overriding variables
        that are already set.
        """
        if env is None:
            load_dotenv(dotenv_path=ROOT_DIR / ".env", override=False)
            env = os.environ

        timeout = _float(env.get("HTTP_TIMEOUT"), 10.0)

        mls = MLSSettings(
            api_url=(env.get("MLS_GRID_API_URL") or DEFAULT_MLS_API_URL).strip(),
            api_key=(env.get("MLS_GRID_API_KEY") or "").strip(),
            page_size=_int(env.get("MLS_PAGE_SIZE"), 100),
            state=(env.get("MLS_STATE") or "NC").strip(),
            timeout=timeout,
        )
        wordpress = WordPressSettings(
            api_url=(env.get("WORDPRESS_API_URL") or "").strip(),
            page_size=_int(env.get("WORDPRESS_PAGE_SIZE"), 100),
            timeout=timeout,
        )
        crm = CRMSettings(
            webhook_url=(env.get("CRM_WEBHOOK_URL") or "").strip(),
            form_source=env.get("CRM_FORM_SOURCE") or DEFAULT_FORM_SOURCE,
            timeout=timeout,
        )
        site = SiteSettings(base_url=(env.get("SITE_URL") or DEFAULT_SITE_URL).strip())

        return cls(
            mls=mls,
            wordpress=wordpress,
            crm=crm,
            site=site,
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
        )


def _int(value: Optional[str], default: int) -> int:
    try:
        return int(value) if value else default
    except ValueError:
        return default


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value else default
    except ValueError:
        return default
