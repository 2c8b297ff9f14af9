"""Settings for the portal client, read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .i18n import normalize_language
from .notify import REDIRECT_DELAY


@dataclass(frozen=True)
class Settings:
    base_url: str
    session_cookie: Optional[str] = None
    language: str = "en"
    timeout: float = 30.0
    redirect_delay: float = REDIRECT_DELAY
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        """Build settings from AFAQ_* environment variables.

        Raises:
            ConfigError: If AFAQ_BASE_URL is missing or a number is malformed
        """
        if load_dotenv_file:
            load_dotenv()

        base_url = os.getenv("AFAQ_BASE_URL")
        if not base_url:
            raise ConfigError(
                "Missing portal URL. Please set the AFAQ_BASE_URL environment variable."
            )

        try:
            timeout = float(os.getenv("AFAQ_TIMEOUT", "30"))
            redirect_delay = float(os.getenv("AFAQ_REDIRECT_DELAY", str(REDIRECT_DELAY)))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        return cls(
            base_url=base_url,
            session_cookie=os.getenv("AFAQ_SESSION_COOKIE") or None,
            language=normalize_language(os.getenv("AFAQ_LANGUAGE", "en")),
            timeout=timeout,
            redirect_delay=redirect_delay,
            log_level=os.getenv("AFAQ_LOG_LEVEL", "WARNING").upper(),
        )
