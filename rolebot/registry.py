"""
Role/emoji registry for the reaction role message.

Holds the fixed list of role bindings and answers lookups by emoji
(reaction events) and by role name (the instructions message).
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

import discord

from .texts import REACTION_MESSAGE_HEADER, REACTION_MESSAGE_LINE


def emoji_identity(emoji: Union[discord.PartialEmoji, str]) -> str:
    """Return the key that identifies an emoji on the gateway.

    Unicode emoji are identified by the emoji itself, custom emoji by their id.
    Accepts either a ``PartialEmoji`` from a reaction payload or a configured
    string such as ``"😀"`` or ``"<:blob:123456789012345678>"``.
    """
    if isinstance(emoji, str):
        emoji = discord.PartialEmoji.from_str(emoji)
    if emoji.is_unicode_emoji():
        return emoji.name or ""
    return str(emoji.id)


@dataclass(frozen=True)
class RoleBinding:
    """A server role granted by reacting with one emoji."""

    role_name: str
    emoji: str

    @property
    def emoji_identity(self) -> str:
        return emoji_identity(self.emoji)


DEFAULT_BINDINGS: Tuple[RoleBinding, ...] = (
    RoleBinding("Unity", "\N{GRINNING FACE}"),
    RoleBinding("MonoGame", "\N{COOKIE}"),
    RoleBinding("GameMaker", "\N{COOKING}"),
    RoleBinding("Unreal", "\N{DRAGON}"),
    RoleBinding("C#", "\N{OK HAND SIGN}"),
    RoleBinding("JavaScript", "\N{THUMBS DOWN SIGN}"),
)


class DuplicateBindingError(ValueError):
    """Two bindings share an emoji or a role name."""


class RoleRegistry:
    """Read-only, ordered collection of role bindings."""

    def __init__(self, bindings: Iterable[RoleBinding]) -> None:
        self._bindings: Tuple[RoleBinding, ...] = tuple(bindings)
        self._validate()

    def _validate(self) -> None:
        seen_emoji = set()
        seen_roles = set()
        for binding in self._bindings:
            identity = binding.emoji_identity
            if identity in seen_emoji:
                raise DuplicateBindingError(
                    f"Emoji {binding.emoji} is bound to more than one role"
                )
            if binding.role_name in seen_roles:
                raise DuplicateBindingError(
                    f"Role {binding.role_name} is bound to more than one emoji"
                )
            seen_emoji.add(identity)
            seen_roles.add(binding.role_name)

    def __iter__(self) -> Iterator[RoleBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    @property
    def role_names(self) -> Tuple[str, ...]:
        return tuple(binding.role_name for binding in self._bindings)

    def lookup_by_emoji(self, identity: str) -> Optional[RoleBinding]:
        """Find the binding for an emoji identity, or None if it isn't bound."""
        for binding in self._bindings:
            if binding.emoji_identity == identity:
                return binding
        return None

    def lookup_by_role(self, name: str) -> Optional[RoleBinding]:
        """Find the binding for a role name, or None if it isn't bound."""
        for binding in self._bindings:
            if binding.role_name == name:
                return binding
        return None


def render_instructions(registry: RoleRegistry, display_order: Sequence[str]) -> str:
    """Build the message users react to, one line per role in display order."""
    lines = []
    for role_name in display_order:
        binding = registry.lookup_by_role(role_name)
        if binding is None:
            continue
        lines.append(REACTION_MESSAGE_LINE.format(emoji=binding.emoji, role=binding.role_name))
    return REACTION_MESSAGE_HEADER + "\n\n".join(lines)
