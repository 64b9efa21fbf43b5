"""
Reaction Role Cog

This cog grants a role when a member reacts to the role message with a bound
emoji, and revokes it again when the reaction is removed.
"""

import discord
from discord.ext import commands
import logging
from typing import Optional, Union

from ..registry import emoji_identity
from ..texts import (
    LOG_USER_NOT_SPECIFIED,
    LOG_UNKNOWN_EMOJI,
    LOG_NO_GUILD,
    LOG_ROLE_NOT_FOUND,
    LOG_ROLE_ASSIGNED,
    LOG_ROLE_REMOVED,
    LOG_ROLE_UPDATE_FAILED,
)

logger = logging.getLogger(__name__)
added_logger = logger.getChild("ReactionAdded")
removed_logger = logger.getChild("ReactionRemoved")


class ReactionRoleCog(commands.Cog):
    """Cog for assigning roles from reactions on the role message."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot
        self.settings = bot.settings
        self.registry = bot.registry

        if not self.settings.target_message_id:
            logger.warning("Reaction roles disabled - TARGET_MESSAGE_ID not configured")
            return

        logger.info(
            f"Reaction role cog initialized for message {self.settings.target_message_id} "
            f"with {len(self.registry)} role bindings"
        )

    @commands.Cog.listener()
    async def on_raw_reaction_add(self, payload: discord.RawReactionActionEvent) -> None:
        """Give the reacting member the role bound to the emoji."""
        await self._handle_reaction(payload, grant=True)

    @commands.Cog.listener()
    async def on_raw_reaction_remove(self, payload: discord.RawReactionActionEvent) -> None:
        """Take the role bound to the emoji away from the member."""
        await self._handle_reaction(payload, grant=False)

    async def _resolve_user(
        self, payload: discord.RawReactionActionEvent
    ) -> Optional[Union[discord.Member, discord.User, discord.Object]]:
        # Only reaction adds in a guild carry the member
        if payload.member is not None:
            return payload.member

        if payload.guild_id is None:
            return self.bot.get_user(payload.user_id)

        guild = self.bot.get_guild(payload.guild_id)
        if guild is None:
            # The guild check reports this once the emoji is known
            return self.bot.get_user(payload.user_id) or discord.Object(id=payload.user_id)

        member = guild.get_member(payload.user_id)
        if member is not None:
            return member

        # Not in the member cache, ask the API; a failed lookup is reported as an unspecified user
        try:
            return await guild.fetch_member(payload.user_id)
        except discord.HTTPException:
            return None

    async def _handle_reaction(self, payload: discord.RawReactionActionEvent, grant: bool) -> None:
        log = added_logger if grant else removed_logger

        if payload.message_id != self.settings.target_message_id:
            return

        user = await self._resolve_user(payload)
        if user is None:
            log.critical(LOG_USER_NOT_SPECIFIED)
            return

        binding = self.registry.lookup_by_emoji(emoji_identity(payload.emoji))
        if binding is None:
            log.warning(LOG_UNKNOWN_EMOJI)
            return

        guild = self.bot.get_guild(payload.guild_id) if payload.guild_id is not None else None
        if guild is None:
            log.critical(LOG_NO_GUILD)
            return

        role = discord.utils.get(guild.roles, name=binding.role_name)
        if role is None:
            log.debug(LOG_ROLE_NOT_FOUND.format(role=binding.role_name))
            return

        try:
            if grant:
                await user.add_roles(role)
                log.debug(LOG_ROLE_ASSIGNED.format(role=binding.role_name, user_id=user.id))
            else:
                await user.remove_roles(role)
                log.debug(LOG_ROLE_REMOVED.format(role=binding.role_name, user_id=user.id))
        except discord.HTTPException as e:
            log.error(LOG_ROLE_UPDATE_FAILED.format(role=binding.role_name, user_id=user.id, error=e))


async def setup(bot: commands.Bot):
    """Setup function for the cog."""
    await bot.add_cog(ReactionRoleCog(bot))
