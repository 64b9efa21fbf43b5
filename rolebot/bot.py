"""
Reaction Role Bot

Posts a role message on request and keeps members' roles in sync with the
reactions on it. Configuration comes from environment variables, see
``rolebot.config``.
"""

import discord
from discord.ext import commands
import logging
import asyncio

from .config import Settings
from .registry import RoleRegistry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

COGS = (
    ("Reaction Roles", "rolebot.cogs.reaction_role_cog"),
    ("Operator Commands", "rolebot.cogs.operator_cog"),
)


class RoleBot(commands.Bot):
    """Discord bot that assigns roles from reactions on a single message."""

    def __init__(self, settings: Settings, registry: RoleRegistry) -> None:
        """Initialize the bot with required intents."""
        intents = discord.Intents.default()
        intents.message_content = True
        intents.reactions = True
        intents.members = True

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None
        )

        self.settings = settings
        self.registry = registry

    async def setup_hook(self):
        """Setup hook called when the bot is starting up."""
        logger.info("Setting up reaction role bot...")
        await self._load_cogs()

    async def _load_cogs(self):
        """Load the reaction role and operator cogs."""
        loaded_cogs = []

        for name, extension in COGS:
            try:
                await self.load_extension(extension)
                loaded_cogs.append(name)
                logger.info(f"✅ {name} cog loaded")
            except commands.ExtensionError as e:
                logger.error(f"❌ Failed to load {name} cog: {e}")

        logger.info(f"📦 Loaded cogs: {', '.join(loaded_cogs) if loaded_cogs else 'None'}")

    async def on_ready(self) -> None:
        """Called when the client is done preparing the data received from Discord."""
        logger.info(f"🤖 Logged in as {self.user}")
        logger.info(f"🌐 Connected to {len(self.guilds)} guilds")

        for guild in self.guilds:
            logger.info(f"   📍 {guild.name} (ID: {guild.id})")

        logger.info(f"📌 Role message: {self.settings.target_message_id}")
        for binding in self.registry:
            logger.info(f"   {binding.emoji} => {binding.role_name}")

        logger.info("🚀 Bot is ready!")

    async def on_command_error(self, context: commands.Context, exception: commands.CommandError, /) -> None:
        # Operator commands are handled by listeners, so unknown "!" commands are expected
        if isinstance(exception, commands.CommandNotFound):
            return
        logger.error(f"Error in command {context.command}: {exception}")


def setup_logging(settings: Settings) -> None:
    """Send log records from the bot and discord.py to the console."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)


async def main() -> None:
    """Main function to run the bot."""
    settings = Settings.from_env()
    setup_logging(settings)

    registry = RoleRegistry(settings.bindings)
    bot = RoleBot(settings, registry)

    if not settings.token:
        logger.error("❌ DISCORD_TOKEN not set in environment variables")
        return

    async with bot:
        await bot.start(settings.token)


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("⏹️ Bot stopped by user")


if __name__ == "__main__":
    run()
