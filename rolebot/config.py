"""
Environment-driven configuration for the reaction role bot.

Values are read from the process environment, with a ``.env`` file loaded
first if present. Example ``.env``::

    DISCORD_TOKEN=...
    TARGET_MESSAGE_ID=533410190641463307
    OPERATOR_ID=57912695378149376
    ROLE_BINDINGS=Unity=😀,MonoGame=🍪,Blobs=<:blob:123456789012345678>
    ROLE_DISPLAY_ORDER=MonoGame,Unity,Blobs
    LOG_LEVEL=DEBUG
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

from .registry import DEFAULT_BINDINGS, RoleBinding


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


def parse_bindings(text: str) -> Tuple[RoleBinding, ...]:
    """Parse ``Role=emoji`` pairs separated by commas."""
    bindings = []
    for pair in text.split(","):
        if not pair.strip():
            continue
        role_name, sep, emoji = pair.partition("=")
        role_name = role_name.strip()
        emoji = emoji.strip()
        if not sep or not role_name or not emoji:
            raise ConfigError(f"Invalid role binding format: {pair.strip()!r} (expected Role=emoji)")
        bindings.append(RoleBinding(role_name, emoji))
    return tuple(bindings)


def _parse_id(environ: Mapping[str, str], key: str) -> int:
    value = environ.get(key, "0").strip() or "0"
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be a numeric Discord ID, got {value!r}") from None


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown LOG_LEVEL: {value!r}")
    return level


@dataclass(frozen=True)
class Settings:
    """Startup configuration. Never mutated after loading."""

    token: Optional[str] = field(default=None, repr=False)
    target_message_id: int = 0
    operator_id: int = 0
    bindings: Tuple[RoleBinding, ...] = DEFAULT_BINDINGS
    display_order: Tuple[str, ...] = ()
    log_level: int = logging.INFO

    @property
    def role_display_order(self) -> Tuple[str, ...]:
        """Role names in the order the instructions message lists them."""
        if self.display_order:
            return self.display_order
        return tuple(binding.role_name for binding in self.bindings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Load settings from ``environ``, or from ``.env`` and ``os.environ``."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        bindings_text = environ.get("ROLE_BINDINGS", "")
        bindings = parse_bindings(bindings_text) if bindings_text.strip() else DEFAULT_BINDINGS
        if not bindings:
            raise ConfigError("ROLE_BINDINGS does not contain any role bindings")

        display_order = tuple(
            name.strip()
            for name in environ.get("ROLE_DISPLAY_ORDER", "").split(",")
            if name.strip()
        )
        known_roles = {binding.role_name for binding in bindings}
        seen = set()
        for name in display_order:
            if name not in known_roles:
                raise ConfigError(f"ROLE_DISPLAY_ORDER names {name!r}, which has no role binding")
            if name in seen:
                raise ConfigError(f"ROLE_DISPLAY_ORDER lists {name!r} more than once")
            seen.add(name)
        if display_order and seen != known_roles:
            missing = ", ".join(binding.role_name for binding in bindings if binding.role_name not in seen)
            raise ConfigError(f"ROLE_DISPLAY_ORDER must list every bound role, missing: {missing}")

        return cls(
            token=environ.get("DISCORD_TOKEN") or None,
            target_message_id=_parse_id(environ, "TARGET_MESSAGE_ID"),
            operator_id=_parse_id(environ, "OPERATOR_ID"),
            bindings=bindings,
            display_order=display_order,
            log_level=_parse_log_level(environ.get("LOG_LEVEL", "INFO")),
        )
