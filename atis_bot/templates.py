"""
Message templates for ATIS replies.
Uses MarkdownV2 format for Telegram.
"""

import re
from datetime import datetime
from typing import Optional

import pytz

from .models import DisplayPayload, EmbedField

ERROR_MESSAGE = "Error fetching ATIS information."
PLACEHOLDER_MESSAGE = "Fetching ATIS information..."
FOOTER_TEXT = "UniATIS Generator"
EMBED_COLOR = 0xFFFFFF


class MessageTemplates:
    """
    Message template formatter for Telegram replies.

    All templates use MarkdownV2 format which requires escaping special characters.
    """

    @classmethod
    def escape_markdown(cls, text: str) -> str:
        """
        Escape special characters for MarkdownV2.

        Args:
            text: Raw text to escape

        Returns:
            Escaped text safe for MarkdownV2
        """
        if not text:
            return ""
        return re.sub(r'([_*\[\]()~`>#+=|{}.!\\-])', r'\\\1', str(text))

    @classmethod
    def format_atis_response(
        cls,
        airport: str,
        atis_code: str,
        arr_rwy: str,
        dep_rwy: str,
        atis_text: str,
        timezone: pytz.timezone = pytz.UTC,
        now: Optional[datetime] = None
    ) -> DisplayPayload:
        """
        Build the reply payload for a generated ATIS.

        The ATIS text is wrapped in a code block as received; backticks
        inside it are not escaped.

        Args:
            airport: ICAO code
            atis_code: Information letter
            arr_rwy: Arrival runway
            dep_rwy: Departure runway
            atis_text: Generator output
            timezone: Timezone for the timestamp
            now: Timestamp override, defaults to the current time

        Returns:
            DisplayPayload
        """
        return DisplayPayload(
            title=f"ATIS Information - {airport}",
            description=f"```{atis_text}```",
            fields=(
                EmbedField(name="ATIS Code", value=atis_code),
                EmbedField(name="Arrival Runway", value=arr_rwy),
                EmbedField(name="Departure Runway", value=dep_rwy),
            ),
            footer=FOOTER_TEXT,
            timestamp=now or datetime.now(timezone),
            color=EMBED_COLOR,
        )

    @classmethod
    def render_payload(cls, payload: DisplayPayload) -> str:
        """
        Render a payload as a MarkdownV2 message.

        Title, field values and footer are escaped; the description is
        inserted verbatim.
        """
        lines = [
            f"*{cls.escape_markdown(payload.title)}*",
            "",
            payload.description,
            "",
        ]
        for item in payload.fields:
            lines.append(
                f"*{cls.escape_markdown(item.name)}:* {cls.escape_markdown(item.value)}"
            )

        stamp = payload.timestamp.strftime("%H:%M %d.%m.%Y %Z").strip()
        lines.append("")
        lines.append(
            f"_{cls.escape_markdown(payload.footer)} • {cls.escape_markdown(stamp)}_"
        )
        return "\n".join(lines)

    @staticmethod
    def format_help_message() -> str:
        """Plain-text usage help."""
        return (
            "Usage: /atis <airport> <arr_rwy> <dep_rwy> <atis_code>\n"
            "Example: /atis EDDF 25C 25C A\n\n"
            "airport - ICAO code of the airport (e.g. EDDF)\n"
            "arr_rwy - Arrival Runway (e.g. 25C)\n"
            "dep_rwy - Departure Runway (e.g. 25C)\n"
            "atis_code - ATIS Code Letter (e.g. A)"
        )
