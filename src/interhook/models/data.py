from __future__ import annotations

from typing import Annotated, Any

from pydantic import Field

from interhook.enums import (
    ApplicationCommandOptionType,
    ApplicationCommandType,
    ComponentType
)
from interhook.types import Snowflake

from .base import DiscordModel


__all__ = (
    'ApplicationCommandInteractionData',
    'MessageComponentInteractionData',
    'ModalSubmitInteractionData',
)


class ApplicationCommandInteractionData(DiscordModel):
    class Option(DiscordModel):
        name: str
        """Name of the parameter"""
        type: ApplicationCommandOptionType | int
        """Value of application command option type"""
        value: str | int | float | bool | None = None
        """Value of the option resulting from user input"""
        options: list[ApplicationCommandInteractionData.Option] | None = None
        """Present if this option is a group or subcommand"""
        focused: bool | None = None
        """`true` if this option is the currently focused option for autocomplete"""

    id: Snowflake | None = None
    """`ID` of the invoked command"""
    name: str
    """`name` of the invoked command"""
    type: Annotated[ApplicationCommandType | int, Field(union_mode='left_to_right')]
    """`type` of the invoked command, a plain int for types newer than this library"""
    resolved: dict[str, Any] | None = None
    """Converted users + roles + channels + attachments"""
    options: list[ApplicationCommandInteractionData.Option] | None = None
    """Params + values from the user"""
    guild_id: Snowflake | None = None
    """ID of the guild the command is registered to"""
    target_id: Snowflake | None = None
    """ID of the user or message targeted by a user or message command"""

    @property
    def focused_option(self) -> ApplicationCommandInteractionData.Option | None:
        options = list(self.options or [])

        while options:
            option = options.pop(0)

            if option.focused:
                return option

            options.extend(option.options or [])

        return None


class MessageComponentInteractionData(DiscordModel):
    custom_id: str
    """`custom_id` of the component"""
    component_type: ComponentType | int
    """`type` of the component"""
    values: list[str] | None = None
    """Values the user selected in a select menu component"""
    resolved: dict[str, Any] | None = None
    """Resolved entities from selected options"""


class ModalSubmitInteractionData(DiscordModel):
    class Field(DiscordModel):
        type: ComponentType | int
        custom_id: str | None = None
        value: str | None = None
        values: list[str] | None = None

    class Row(DiscordModel):
        # ? action rows carry components, labels carry a single component
        type: ComponentType | int
        components: list[ModalSubmitInteractionData.Field] | None = None
        component: ModalSubmitInteractionData.Field | None = None

    custom_id: str
    """`custom_id` of the modal"""
    components: list[ModalSubmitInteractionData.Row] = []
    """Values submitted by the user"""

    @property
    def values(self) -> dict[str, str | list[str] | None]:
        values: dict[str, str | list[str] | None] = {}

        for row in self.components:
            for field in [
                *(row.components or []),
                *([row.component] if row.component else [])
            ]:
                if field.custom_id is None:
                    continue

                values[field.custom_id] = (
                    field.value
                    if field.values is None else
                    field.values
                )

        return values


ApplicationCommandInteractionData.Option.model_rebuild()
ApplicationCommandInteractionData.model_rebuild()
ModalSubmitInteractionData.Row.model_rebuild()
ModalSubmitInteractionData.model_rebuild()
