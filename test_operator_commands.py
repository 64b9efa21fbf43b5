"""
Tests for the operator's text commands.
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from rolebot.config import Settings
from rolebot.registry import DEFAULT_BINDINGS, RoleRegistry
from rolebot.cogs.operator_cog import OperatorCog

OPERATOR_ID = 57912695378149376


def make_message(content: str, author_id: int = OPERATOR_ID) -> MagicMock:
    message = MagicMock()
    message.author.id = author_id
    message.content = content
    message.channel.send = AsyncMock()
    return message


def make_cog(display_order=()) -> OperatorCog:
    bot = MagicMock()
    bot.settings = Settings(operator_id=OPERATOR_ID, target_message_id=1, display_order=display_order)
    bot.registry = RoleRegistry(DEFAULT_BINDINGS)
    return OperatorCog(bot)


@pytest.mark.asyncio
async def test_ping() -> None:
    message = make_message("!ping")

    await make_cog().on_message(message)

    message.channel.send.assert_awaited_once_with("Pong!")


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["!ping", "!reaction-message", "hello"])
async def test_other_authors_are_ignored(content: str) -> None:
    message = make_message(content, author_id=OPERATOR_ID + 1)

    await make_cog().on_message(message)

    message.channel.send.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["!ping now", "!PING", "ping", "!reaction-message please", ""])
async def test_only_exact_commands_respond(content: str) -> None:
    message = make_message(content)

    await make_cog().on_message(message)

    message.channel.send.assert_not_called()


@pytest.mark.asyncio
async def test_reaction_message_lists_every_role_once() -> None:
    message = make_message("!reaction-message")

    await make_cog().on_message(message)

    message.channel.send.assert_awaited_once()
    text = message.channel.send.await_args.args[0]
    assert text.startswith("React to this message to auto-assign a role to yourself")
    for binding in DEFAULT_BINDINGS:
        assert text.count(binding.role_name) == 1
        assert f"{binding.emoji} => {binding.role_name}" in text

    positions = [text.index(binding.role_name) for binding in DEFAULT_BINDINGS]
    assert positions == sorted(positions)


@pytest.mark.asyncio
async def test_reaction_message_follows_display_order() -> None:
    order = ("JavaScript", "Unity", "C#", "Unreal", "GameMaker", "MonoGame")
    message = make_message("!reaction-message")

    await make_cog(display_order=order).on_message(message)

    text = message.channel.send.await_args.args[0]
    positions = [text.index(f"=> {name}") for name in order]
    assert positions == sorted(positions)


@pytest.mark.asyncio
async def test_send_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    message = make_message("!ping")
    message.channel.send.side_effect = discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Access")

    await make_cog().on_message(message)

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "Failed to send message" in errors[0].getMessage()
