"""Shared fixtures for ATIS Bot tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def make_session():
    """
    Build a stand-in for aiohttp.ClientSession.

    session.get(...) works as an async context manager yielding a response
    whose text() returns `text`, or raises `error` when given.
    """
    def factory(text="", status=200, error=None, text_error=None):
        response = MagicMock()
        response.status = status
        response.text = AsyncMock(return_value=text, side_effect=text_error)

        session = MagicMock()
        if error is not None:
            session.get.side_effect = error
        else:
            session.get.return_value.__aenter__.return_value = response
        return session

    return factory
