"""
VATSIM METAR client.
Fetches the current METAR for an airport as plain text.
"""

import aiohttp
import logging
from typing import Optional

from ..config import DEFAULT_METAR_BASE_URL

logger = logging.getLogger(__name__)

METAR_NOT_AVAILABLE = "METAR not available"


class MetarClient:
    """Client for the VATSIM METAR service."""

    def __init__(self, base_url: str = DEFAULT_METAR_BASE_URL):
        """
        Initialize METAR client.

        Args:
            base_url: Service base URL, without trailing slash
        """
        self.base_url = base_url
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def fetch_metar(self, airport: str) -> str:
        """
        Get the METAR for an airport.

        Never raises: any failure, and an empty body, yield
        METAR_NOT_AVAILABLE.

        Args:
            airport: ICAO code, expected uppercase

        Returns:
            Stripped METAR text or METAR_NOT_AVAILABLE
        """
        url = f"{self.base_url}/{airport}"

        try:
            session = await self._get_session()
            async with session.get(url) as response:
                metar = await response.text()
        except aiohttp.ClientError as e:
            logger.error(f"METAR request failed for {airport}: {e}")
            return METAR_NOT_AVAILABLE
        except Exception as e:
            logger.error(f"METAR unexpected error for {airport}: {e}")
            return METAR_NOT_AVAILABLE

        metar = metar.strip()
        if not metar:
            logger.warning(f"Empty METAR for {airport}")
            return METAR_NOT_AVAILABLE
        return metar
