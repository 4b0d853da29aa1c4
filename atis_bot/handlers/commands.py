"""
Telegram bot command handlers.
Handles the /atis command and the help commands around it.
"""

import logging

from telegram import Update
from telegram.ext import ContextTypes
from telegram.constants import ParseMode

from ..config import Config
from ..models import AtisRequest, DisplayPayload
from ..templates import MessageTemplates, ERROR_MESSAGE, PLACEHOLDER_MESSAGE
from ..weather import MetarClient, UniAtisClient

logger = logging.getLogger(__name__)


class CommandHandlers:
    """
    Handles all Telegram bot commands.

    /atis replies in two phases: a placeholder message is sent right away
    and later edited exactly once, either with the ATIS or with
    ERROR_MESSAGE.
    """

    def __init__(
        self,
        config: Config,
        metar: MetarClient,
        uniatis: UniAtisClient
    ):
        """
        Initialize command handlers.

        Args:
            config: Startup configuration
            metar: METAR client
            uniatis: ATIS generator client
        """
        self.config = config
        self.metar = metar
        self.uniatis = uniatis
        self.timezone = config.get_timezone()

    async def atis_command(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """
        Handle /atis command.
        Usage: /atis <airport> <arr_rwy> <dep_rwy> <atis_code>
        """
        try:
            request = AtisRequest.from_args(context.args or [])
        except ValueError:
            await update.effective_message.reply_text(MessageTemplates.format_help_message())
            return

        placeholder = await update.effective_message.reply_text(PLACEHOLDER_MESSAGE)

        try:
            payload = await self.build_atis_payload(request)
            await placeholder.edit_text(
                MessageTemplates.render_payload(payload),
                parse_mode=ParseMode.MARKDOWN_V2
            )
        except Exception as e:
            logger.error(f"Error fetching ATIS for {request.airport}: {e}")
            try:
                await placeholder.edit_text(ERROR_MESSAGE)
            except Exception as edit_error:
                logger.error(f"Could not send error reply: {edit_error}")
        else:
            logger.info(f"ATIS {request.atis_code} sent for {request.airport}")

    async def build_atis_payload(self, request: AtisRequest) -> DisplayPayload:
        """
        Fetch METAR, generate ATIS and format the reply payload.

        Raises:
            Exception: Whatever the ATIS generator request raises
        """
        metar = await self.metar.fetch_metar(request.airport)
        atis_text = await self.uniatis.fetch_atis(
            request.airport,
            request.arr_rwy,
            request.dep_rwy,
            request.atis_code,
            metar
        )
        return MessageTemplates.format_atis_response(
            request.airport,
            request.atis_code,
            request.arr_rwy,
            request.dep_rwy,
            atis_text,
            timezone=self.timezone
        )

    async def help_command(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /start and /help commands."""
        await update.effective_message.reply_text(MessageTemplates.format_help_message())

    async def unknown_command(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle unknown commands."""
        await update.effective_message.reply_text(
            "Unknown command. Use /help for usage."
        )
