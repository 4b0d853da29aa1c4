"""
Configuration management for the ATIS Bot.
Values are read from the environment (and a .env file) once at startup
and passed explicitly to the components that need them.
"""

import os
import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv
import pytz

DEFAULT_METAR_BASE_URL = "https://metar.vatsim.net"
DEFAULT_ATIS_BASE_URL = "http://uniatis.net/atis.php"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """
    Application configuration.

    Attributes:
        bot_token: Telegram bot token used to log in
        client_id: Application id; compared against the bot id at login
        metar_base_url: Base URL of the METAR service
            Example: "https://metar.vatsim.net"
        atis_base_url: Full URL of the ATIS generator script
            Example: "http://uniatis.net/atis.php"
        timezone: Timezone name for reply timestamps
        log_level: Logging level name
    """
    bot_token: str = ""
    client_id: str = ""
    metar_base_url: str = DEFAULT_METAR_BASE_URL
    atis_base_url: str = DEFAULT_ATIS_BASE_URL
    timezone: str = "UTC"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from; defaults to os.environ after
                loading .env

        Returns:
            Config instance
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        return cls(
            bot_token=environ.get("BOT_TOKEN", "") or "",
            client_id=environ.get("CLIENT_ID", "") or "",
            metar_base_url=(
                environ.get("METAR_BASE_URL", "") or DEFAULT_METAR_BASE_URL
            ).rstrip("/"),
            atis_base_url=environ.get("ATIS_BASE_URL", "") or DEFAULT_ATIS_BASE_URL,
            timezone=environ.get("TIMEZONE", "UTC") or "UTC",
            log_level=(environ.get("LOG_LEVEL", "INFO") or "INFO").upper(),
        )

    def get_timezone(self) -> pytz.timezone:
        """Get the configured timezone object."""
        try:
            return pytz.timezone(self.timezone)
        except pytz.exceptions.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone '{self.timezone}', using UTC")
            return pytz.UTC

    def validate(self) -> List[str]:
        """
        Validate configuration and return list of errors.
        Returns empty list if configuration is valid.
        """
        errors = []

        if not self.bot_token:
            errors.append("BOT_TOKEN is required")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        log_level = getattr(logging, self.log_level, logging.INFO)

        logging.basicConfig(
            level=log_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=[logging.StreamHandler()]
        )

        # Reduce noise from external libraries
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)
        logging.getLogger("telegram").setLevel(logging.WARNING)
        logging.getLogger("aiohttp").setLevel(logging.WARNING)
