from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol, Any
from dataclasses import dataclass

from .enums import ApplicationCommandType
from .models import ApplicationCommand
from .types import Snowflake

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pydantic import BaseModel

    from .models import (
        ApplicationCommandInteraction,
        AutocompleteInteraction,
        AutocompleteResult
    )
    from .client import Client


__all__ = (
    'GLOBAL',
    'AutocompleteCallback',
    'CommandBundle',
    'CommandCallback',
    'CommandKey',
    'CommandRegistry',
    'CommandScope',
)


class CommandCallback(Protocol):
    async def __call__(
        self,
        client: Client,
        interaction: ApplicationCommandInteraction
    ) -> None:
        ...


class AutocompleteCallback(Protocol):
    async def __call__(
        self,
        interaction: AutocompleteInteraction
    ) -> AutocompleteResult | BaseModel | dict[str, Any] | None:
        ...


@dataclass(frozen=True, slots=True)
class CommandScope:
    guild_id: Snowflake | None = None

    @classmethod
    def guild(cls, guild_id: int) -> CommandScope:
        return cls(Snowflake(guild_id))

    @classmethod
    def of(cls, guild_id: int | None) -> CommandScope:
        return GLOBAL if guild_id is None else cls.guild(guild_id)

    @property
    def is_global(self) -> bool:
        return self.guild_id is None

    def __str__(self) -> str:
        return 'global' if self.guild_id is None else f'guild {self.guild_id}'


GLOBAL = CommandScope()


class CommandKey(NamedTuple):
    scope: CommandScope
    type: ApplicationCommandType
    name: str


@dataclass(slots=True)
class CommandBundle:
    command: ApplicationCommand
    callback: CommandCallback | None = None
    autocomplete: AutocompleteCallback | None = None

    @property
    def type(self) -> ApplicationCommandType:
        return self.command.type

    @property
    def name(self) -> str:
        return self.command.name


class CommandRegistry:
    """
    commands keyed by (scope, type, name)

    built before serving and only read while handling requests; a guild
    scope only resolves against that guild unless `guild_fallback` is set,
    in which case a guild miss falls back to the global command
    """

    def __init__(self, guild_fallback: bool = False) -> None:
        self.guild_fallback = guild_fallback
        self._commands: dict[CommandKey, CommandBundle] = {}

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, key: object) -> bool:
        return key in self._commands

    def __iter__(self) -> Iterator[CommandKey]:
        return iter(self._commands)

    def register(
        self,
        scope: CommandScope,
        bundle: CommandBundle
    ) -> CommandBundle:
        if bundle is None:
            raise TypeError('cannot register a command without a bundle')

        # ? last write wins
        self._commands[CommandKey(scope, bundle.type, bundle.name)] = bundle

        return bundle

    def lookup(
        self,
        scope: CommandScope,
        type: ApplicationCommandType,
        name: str
    ) -> CommandBundle | None:
        bundle = self._commands.get(CommandKey(scope, type, name))

        if (
            bundle is None and
            self.guild_fallback and
            not scope.is_global
        ):
            return self._commands.get(CommandKey(GLOBAL, type, name))

        return bundle

    def snapshot(self, scope: CommandScope) -> list[ApplicationCommand]:
        return [
            bundle.command.model_copy(deep=True)
            for key, bundle in self._commands.items()
            if key.scope == scope
        ]

    def scopes(self) -> list[CommandScope]:
        return list(dict.fromkeys(
            key.scope
            for key in self._commands
        ))
