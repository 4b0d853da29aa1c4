"""
UniATIS generator client.
Builds the generator query and returns the ATIS text it produces.
"""

import aiohttp
import logging
from typing import Optional
from urllib.parse import quote

from yarl import URL

from ..config import DEFAULT_ATIS_BASE_URL

logger = logging.getLogger(__name__)

APPROACH_TYPE = "ILS"

# Same safe set as JavaScript's encodeURIComponent
_METAR_SAFE_CHARS = "!~*'()"

# Query delimiters stay literal, anything unsafe in a request line is escaped
_QUERY_SAFE_CHARS = "!#$&'()*+,/:;=?@[]~%|"


def build_atis_url(
    base_url: str,
    airport: str,
    arr_rwy: str,
    dep_rwy: str,
    atis_code: str,
    metar: str
) -> str:
    """
    Build the generator query URL.

    The METAR is fully percent-encoded. Runways, airport and code keep
    query delimiters such as "&" and "(" as typed; only characters that
    cannot appear in a request line are escaped.

    Example:
        >>> build_atis_url("http://uniatis.net/atis.php", "EDDF", "25C", "25C", "A", "TEST METAR")
        'http://uniatis.net/atis.php?arr=25C(EDDF)&dep=25C(EDDF)&apptype=ILS&info=A&metar=TEST%20METAR'
    """
    encoded_metar = quote(metar, safe=_METAR_SAFE_CHARS)
    airport, arr_rwy, dep_rwy, atis_code = (
        quote(value, safe=_QUERY_SAFE_CHARS)
        for value in (airport, arr_rwy, dep_rwy, atis_code)
    )
    return (
        f"{base_url}?arr={arr_rwy}({airport})&dep={dep_rwy}({airport})"
        f"&apptype={APPROACH_TYPE}&info={atis_code}&metar={encoded_metar}"
    )


class UniAtisClient:
    """Client for the UniATIS text generator."""

    def __init__(self, base_url: str = DEFAULT_ATIS_BASE_URL):
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

    async def fetch_atis(
        self,
        airport: str,
        arr_rwy: str,
        dep_rwy: str,
        atis_code: str,
        metar: str
    ) -> str:
        """
        Generate ATIS text.

        Unlike the METAR fetch, transport errors are not caught here and
        reach the caller.

        Returns:
            Response body, untouched (even for non-200 responses)
        """
        url = build_atis_url(
            self.base_url, airport, arr_rwy, dep_rwy, atis_code, metar
        )
        logger.debug(f"Requesting ATIS: {url}")

        session = await self._get_session()
        # Already encoded; keep aiohttp from quoting it again
        async with session.get(URL(url, encoded=True)) as response:
            if response.status != 200:
                logger.warning(
                    f"UniATIS returned status {response.status} for {airport}"
                )
            return await response.text()
