"""
Main entry point for the Telegram ATIS Bot.
Initializes all components and starts the bot.
"""

import asyncio
import logging
import signal
from typing import Optional

from telegram import BotCommand, BotCommandScopeDefault, Update
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters
)

from .config import Config
from .weather import MetarClient, UniAtisClient
from .handlers import CommandHandlers

logger = logging.getLogger(__name__)

BOT_COMMANDS = [
    BotCommand(
        "atis",
        "Retrieves ATIS information: <airport> <arr_rwy> <dep_rwy> <atis_code>"
    ),
]


class AtisBot:
    """
    Main bot class that coordinates all components.
    """

    def __init__(self, config: Config):
        """Initialize the bot."""
        self.config = config
        self.metar: Optional[MetarClient] = None
        self.uniatis: Optional[UniAtisClient] = None
        self.application: Optional[Application] = None
        self._running = False

    def initialize(self) -> None:
        """
        Initialize all bot components.
        Raises ValueError when the configuration is invalid.
        """
        logger.debug("Initializing ATIS Bot...")

        errors = self.config.validate()
        if errors:
            for error in errors:
                logger.error(f"Config error: {error}")
            raise ValueError("Invalid configuration. Check environment or .env.")

        self.metar = MetarClient(self.config.metar_base_url)
        self.uniatis = UniAtisClient(self.config.atis_base_url)

        # Each update runs as its own task
        self.application = (
            Application.builder()
            .token(self.config.bot_token)
            .concurrent_updates(True)
            .build()
        )

        self._setup_handlers()

        logger.debug("ATIS Bot initialized successfully")

    def _setup_handlers(self) -> None:
        """
        Setup Telegram command handlers.
        Edited messages are ignored so an edit does not trigger a second reply.
        """
        cmd_handlers = CommandHandlers(self.config, self.metar, self.uniatis)

        self.application.add_handler(
            CommandHandler(
                "atis", cmd_handlers.atis_command, filters=filters.UpdateType.MESSAGE
            )
        )
        self.application.add_handler(
            CommandHandler(
                ["start", "help"],
                cmd_handlers.help_command,
                filters=filters.UpdateType.MESSAGE
            )
        )

        # Handle unknown commands
        self.application.add_handler(
            MessageHandler(
                filters.COMMAND & filters.UpdateType.MESSAGE,
                cmd_handlers.unknown_command
            )
        )

        self.application.add_error_handler(self._on_error)

        logger.debug("Command handlers registered")

    async def _on_error(
        self,
        update: object,
        context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Log errors raised by handlers."""
        logger.error(
            f"Unhandled error while processing update: {context.error}",
            exc_info=context.error
        )

    async def register_commands(self) -> None:
        """
        Replace the bot's command list with BOT_COMMANDS.
        Failures are logged and not retried.
        """
        bot = self.application.bot
        try:
            me = await bot.get_me()
            logger.info(f"Bot is logged in as @{me.username}")
            if self.config.client_id and self.config.client_id != str(me.id):
                logger.warning(
                    f"CLIENT_ID {self.config.client_id} does not match bot id {me.id}"
                )

            await bot.set_my_commands(BOT_COMMANDS, scope=BotCommandScopeDefault())
            logger.info(f"Registered {len(BOT_COMMANDS)} command(s)")
        except TelegramError as e:
            logger.error(f"Error registering commands: {e}")

    async def start(self) -> None:
        """Start the bot."""
        if self._running:
            logger.warning("Bot is already running")
            return

        self._running = True
        logger.debug("Starting ATIS Bot...")

        await self.application.initialize()
        await self.register_commands()
        await self.application.start()
        await self.application.updater.start_polling(
            allowed_updates=Update.ALL_TYPES
        )

        logger.debug("ATIS Bot is running")

        # Keep running until stopped
        while self._running:
            await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the bot gracefully."""
        logger.debug("Stopping ATIS Bot...")
        self._running = False

        # Stop bot (updater may already be stopped)
        if self.application:
            try:
                if self.application.updater:
                    await self.application.updater.stop()
            except RuntimeError:
                pass
            if self.application.running:
                await self.application.stop()
            await self.application.shutdown()

        # Close API clients
        if self.metar:
            await self.metar.close()
        if self.uniatis:
            await self.uniatis.close()

        logger.debug("ATIS Bot stopped")


async def main() -> None:
    """Main entry point."""
    config = Config.from_env()
    config.setup_logging()

    bot = AtisBot(config)

    # Setup signal handlers for graceful shutdown
    loop = asyncio.get_running_loop()

    def signal_handler():
        logger.debug("Received shutdown signal")
        asyncio.create_task(bot.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    try:
        bot.initialize()
        await bot.start()
    except KeyboardInterrupt:
        logger.debug("Interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        raise
    finally:
        await bot.stop()


def run() -> None:
    """Run the bot (blocking)."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
