"""
Tests for the METAR and UniATIS clients.
"""

from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import aiohttp
import pytest

from atis_bot.weather import (
    MetarClient,
    METAR_NOT_AVAILABLE,
    UniAtisClient,
    build_atis_url
)


BASE_URL = "http://uniatis.net/atis.php"


def _query(url):
    return parse_qs(urlsplit(url).query)


class TestMetarClient:
    """Test METAR fetching and its fallback."""

    @pytest.mark.asyncio
    async def test_returns_stripped_body(self, make_session):
        client = MetarClient("https://metar.vatsim.net")
        session = make_session(text="  EDDF 191220Z 25008KT CAVOK 14/06 Q1021\n")
        client._get_session = AsyncMock(return_value=session)

        metar = await client.fetch_metar("EDDF")

        assert metar == "EDDF 191220Z 25008KT CAVOK 14/06 Q1021"
        session.get.assert_called_once_with("https://metar.vatsim.net/EDDF")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["TEST METAR", " TEST METAR ", "\tA  B\n\n"])
    async def test_stripping_is_idempotent(self, make_session, body):
        client = MetarClient()
        client._get_session = AsyncMock(return_value=make_session(text=body))

        metar = await client.fetch_metar("EDDF")

        assert metar == body.strip()
        assert metar.strip() == metar

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", ["", "   ", "\n\r\n"])
    async def test_empty_body_falls_back(self, make_session, body):
        client = MetarClient()
        client._get_session = AsyncMock(return_value=make_session(text=body))

        assert await client.fetch_metar("ZZZZ") == METAR_NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_network_error_falls_back(self, make_session):
        client = MetarClient()
        session = make_session(error=aiohttp.ClientConnectionError("unreachable"))
        client._get_session = AsyncMock(return_value=session)

        assert await client.fetch_metar("EDDF") == METAR_NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_unreadable_body_falls_back(self, make_session):
        client = MetarClient()
        decode_error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        client._get_session = AsyncMock(
            return_value=make_session(text_error=decode_error)
        )

        assert await client.fetch_metar("EDDF") == METAR_NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_session_creation_error_falls_back(self):
        client = MetarClient()
        client._get_session = AsyncMock(side_effect=RuntimeError("no loop"))

        assert await client.fetch_metar("EDDF") == METAR_NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        client = MetarClient()
        await client.close()


class TestBuildAtisUrl:
    """Test generator query construction."""

    def test_example_query(self):
        url = build_atis_url(BASE_URL, "EDDF", "25C", "25C", "A", "TEST METAR")

        assert url.startswith(BASE_URL + "?")
        assert "arr=25C(EDDF)" in url
        assert "dep=25C(EDDF)" in url
        assert "apptype=ILS" in url
        assert "info=A" in url
        assert "metar=TEST%20METAR" in url

    def test_special_characters_do_not_break_query(self):
        metar = "EDDF 191220Z R25C/P1500 & more=stuff #1 +RA 50% ?"
        url = build_atis_url(BASE_URL, "EDDF", "25C", "18", "B", metar)

        query = _query(url)
        assert query["metar"] == [metar]
        assert query["arr"] == ["25C(EDDF)"]
        assert query["dep"] == ["18(EDDF)"]
        assert query["apptype"] == ["ILS"]
        assert query["info"] == ["B"]

    def test_fallback_metar_is_encoded(self):
        url = build_atis_url(BASE_URL, "EDDF", "25C", "25C", "A", METAR_NOT_AVAILABLE)

        assert url.endswith("&metar=METAR%20not%20available")

    def test_spaces_and_non_ascii_in_other_values_are_escaped(self):
        url = build_atis_url(BASE_URL, "EDDF", "07 L", "25\u0421", "A", "X")

        assert "arr=07%20L(EDDF)" in url
        assert "dep=25%D0%A1(EDDF)" in url
        assert " " not in url
        assert url.isascii()

    def test_delimiters_in_other_values_are_kept(self):
        url = build_atis_url(BASE_URL, "EDDF", "25C|x", "25C&y", "A%", "X")

        assert "arr=25C|x(EDDF)" in url
        assert "dep=25C&y(EDDF)" in url
        assert "info=A%&" in url

    @pytest.mark.asyncio
    async def test_request_line_is_ascii(self, make_session):
        client = UniAtisClient(BASE_URL)
        session = make_session(text="ATIS")
        client._get_session = AsyncMock(return_value=session)

        await client.fetch_atis("EDDF", "25\u0421", "07 L", "A", "TEST METAR")

        requested = session.get.call_args[0][0]
        assert requested.raw_query_string.isascii()
        assert " " not in requested.raw_query_string
        assert requested.query["arr"] == "25\u0421(EDDF)"
        assert requested.query["dep"] == "07 L(EDDF)"


class TestUniAtisClient:
    """Test ATIS generator requests."""

    @pytest.mark.asyncio
    async def test_returns_body_untouched(self, make_session):
        client = UniAtisClient(BASE_URL)
        body = "  FRANKFURT INFORMATION A\n"
        session = make_session(text=body)
        client._get_session = AsyncMock(return_value=session)

        text = await client.fetch_atis("EDDF", "25C", "25C", "A", "TEST METAR")

        assert text == body
        requested = session.get.call_args[0][0]
        assert str(requested) == build_atis_url(
            BASE_URL, "EDDF", "25C", "25C", "A", "TEST METAR"
        )

    @pytest.mark.asyncio
    async def test_error_page_is_returned(self, make_session):
        client = UniAtisClient(BASE_URL)
        client._get_session = AsyncMock(
            return_value=make_session(text="<html>Not Found</html>", status=404)
        )

        text = await client.fetch_atis("EDDF", "25C", "25C", "A", "TEST METAR")

        assert text == "<html>Not Found</html>"

    @pytest.mark.asyncio
    async def test_network_error_propagates(self, make_session):
        client = UniAtisClient(BASE_URL)
        client._get_session = AsyncMock(
            return_value=make_session(error=aiohttp.ClientConnectionError("down"))
        )

        with pytest.raises(aiohttp.ClientConnectionError):
            await client.fetch_atis("EDDF", "25C", "25C", "A", "TEST METAR")
