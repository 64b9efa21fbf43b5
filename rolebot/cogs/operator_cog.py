"""
Operator Cog

Text commands for the bot operator: a ping check and posting the message
users react to. Messages from anyone else are silently ignored.
"""

import discord
from discord.ext import commands
import logging

from ..registry import render_instructions
from ..texts import PING_COMMAND, PING_RESPONSE, REACTION_MESSAGE_COMMAND

logger = logging.getLogger(__name__)


class OperatorCog(commands.Cog):
    """Cog for the operator's text commands."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.settings = bot.settings
        self.registry = bot.registry

        if not self.settings.operator_id:
            logger.warning("Operator commands disabled - OPERATOR_ID not configured")
            return

        logger.info(f"Operator cog initialized for user {self.settings.operator_id}")

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Handle the operator's commands."""
        if message.author.id != self.settings.operator_id:
            return

        if message.content == PING_COMMAND:
            await self._send(message.channel, PING_RESPONSE)
        elif message.content == REACTION_MESSAGE_COMMAND:
            text = render_instructions(self.registry, self.settings.role_display_order)
            await self._send(message.channel, text)

    async def _send(self, channel: discord.abc.Messageable, text: str) -> None:
        try:
            await channel.send(text)
        except discord.HTTPException as e:
            logger.error(f"Failed to send message to channel {getattr(channel, 'id', None)}: {e}")


async def setup(bot: commands.Bot):
    """Setup function for the cog."""
    await bot.add_cog(OperatorCog(bot))
