from __future__ import annotations

from typing import Any

from interhook.enums import (
    ApplicationCommandOptionType,
    ApplicationIntegrationType,
    InteractionContextType,
    ApplicationCommandType,
)
from interhook.types import Snowflake

from .base import DiscordModel


__all__ = (
    'ApplicationCommand',
)


class ApplicationCommand(DiscordModel):
    class Option(DiscordModel):
        class Choice(DiscordModel):
            name: str
            name_localizations: dict[str, str] | None = None
            value: str | int | float

        type: ApplicationCommandOptionType
        """Type of option"""
        name: str
        """1-32 character name"""
        name_localizations: dict[str, str] | None = None
        """Localization dictionary for `name` field. Values follow the same restrictions as `name`"""
        description: str
        """1-100 character description"""
        description_localizations: dict[str, str] | None = None
        """Localization dictionary for `description` field. Values follow the same restrictions as `description`"""
        required: bool | None = None
        """Whether the parameter is required or optional, default `false`"""
        choices: list[ApplicationCommand.Option.Choice] | None = None
        """Choices for the user to pick from, max 25"""
        options: list[ApplicationCommand.Option] | None = None
        """If the option is a subcommand or subcommand group type, these nested options will be the parameters or subcommands respectively; up to 25"""
        min_value: int | float | None = None
        """The minimum value permitted"""
        max_value: int | float | None = None
        """The maximum value permitted"""
        min_length: int | None = None
        """The minimum allowed length (minimum of `0`, maximum of `6000`)"""
        max_length: int | None = None
        """The maximum allowed length (minimum of `1`, maximum of `6000`)"""
        autocomplete: bool | None = None
        """If autocomplete interactions are enabled for this option"""

    id: Snowflake | None = None
    """Unique ID of command, set by discord"""
    type: ApplicationCommandType = ApplicationCommandType.CHAT_INPUT
    """Type of command, defaults to `1` (ApplicationCommandType.CHAT_INPUT)"""
    application_id: Snowflake | None = None
    """ID of the parent application"""
    guild_id: Snowflake | None = None
    """Guild ID of the command, if not global"""
    name: str
    """Name of command, 1-32 characters"""
    name_localizations: dict[str, str] | None = None
    """Localization dictionary for `name` field. Values follow the same restrictions as `name`"""
    description: str = ''
    """Description for `CHAT_INPUT` commands, 1-100 characters. Empty string for `USER` and `MESSAGE` commands"""
    description_localizations: dict[str, str] | None = None
    """Localization dictionary for `description` field. Values follow the same restrictions as `description`"""
    options: list[ApplicationCommand.Option] | None = None
    """Parameters for the command, max of 25"""
    default_member_permissions: str | None = None
    """Set of permissions represented as a bit set"""
    nsfw: bool | None = None
    """Indicates whether the command is age-restricted, defaults to `false`"""
    integration_types: list[ApplicationIntegrationType] | None = None
    """Installation contexts where the command is available, only for globally-scoped commands"""
    contexts: list[InteractionContextType] | None = None
    """Interaction context(s) where the command can be used, only for globally-scoped commands"""
    version: Snowflake | None = None
    """Autoincrementing version identifier updated during substantial record changes"""

    def as_payload(self) -> dict[str, Any]:
        # ? ids and versions are assigned by discord, never send them back
        payload = self.model_dump(
            mode='json',
            exclude_none=True,
            exclude={'id', 'application_id', 'guild_id', 'version'}
        )

        if self.type != ApplicationCommandType.CHAT_INPUT:
            # ? context menu commands take no options and an empty description
            payload.pop('options', None)
            payload['description'] = ''

        return payload


ApplicationCommand.Option.model_rebuild()
ApplicationCommand.model_rebuild()
