from __future__ import annotations

from typing import Annotated, Union, Any

from typing_extensions import TypeAliasType

from pydantic import Discriminator, Tag, TypeAdapter

from interhook.enums import InteractionContextType, InteractionType
from interhook.types import Snowflake

from .data import (
    ApplicationCommandInteractionData,
    MessageComponentInteractionData,
    ModalSubmitInteractionData
)
from .user import Member, User
from .base import DiscordModel


__all__ = (
    'ApplicationCommandInteraction',
    'AutocompleteInteraction',
    'BaseInteraction',
    'ChainInteraction',
    'Interaction',
    'MessageComponentInteraction',
    'ModalSubmitInteraction',
    'PingInteraction',
    'UnknownInteraction',
    'parse_interaction',
)


class BaseInteraction(DiscordModel):
    id: Snowflake
    """ID of the interaction"""
    application_id: Snowflake | None = None
    """ID of the application this interaction is for"""
    type: InteractionType
    """Type of interaction"""
    token: str
    """Continuation token for responding to the interaction"""
    version: int = 1
    """Read-only property, always `1`"""
    guild_id: Snowflake | None = None
    """Guild that the interaction was sent from"""
    channel_id: Snowflake | None = None
    """Channel that the interaction was sent from"""
    member: Member | None = None
    """Guild member data for the invoking user, including permissions"""
    user: User | None = None
    """User object for the invoking user, if invoked in a DM"""
    app_permissions: str | None = None
    """Bitwise set of permissions the app has in the source location of the interaction"""
    locale: str | None = None
    """Selected language of the invoking user"""
    guild_locale: str | None = None
    """Guild's preferred locale, if invoked in a guild"""
    authorizing_integration_owners: dict[str, Snowflake] | None = None
    """Mapping of installation contexts that the interaction was authorized for to related user or guild IDs"""
    context: InteractionContextType | None = None
    """Context where the interaction was triggered from"""

    @property
    def author(self) -> User | None:
        if self.member is not None and self.member.user is not None:
            return self.member.user

        return self.user

    @property
    def author_id(self) -> Snowflake | None:
        return self.author.id if self.author is not None else None


class PingInteraction(BaseInteraction):
    ...


class ApplicationCommandInteraction(BaseInteraction):
    data: ApplicationCommandInteractionData


class AutocompleteInteraction(BaseInteraction):
    data: ApplicationCommandInteractionData


class MessageComponentInteraction(BaseInteraction):
    data: MessageComponentInteractionData
    message: dict[str, Any] | None = None
    """The message the component was attached to"""


class ModalSubmitInteraction(BaseInteraction):
    data: ModalSubmitInteractionData
    message: dict[str, Any] | None = None
    """For modals triggered from a component, the message the component was attached to"""


class UnknownInteraction(BaseInteraction):
    type: int  # type: ignore[assignment]
    data: dict[str, Any] | None = None


def _interaction_tag(value: Any) -> str | None:  # noqa: ANN401
    raw = (
        value.get('type')
        if isinstance(value, dict) else
        getattr(value, 'type', None)
    )

    if isinstance(raw, InteractionType):
        return raw.name

    if isinstance(raw, bool) or not isinstance(raw, int):
        # ? no tag, validation fails with union_tag_not_found
        return None

    try:
        return InteractionType(raw).name
    except ValueError:
        return 'UNKNOWN'


Interaction = Annotated[
    Union[
        Annotated[PingInteraction, Tag(InteractionType.PING.name)],
        Annotated[ApplicationCommandInteraction, Tag(InteractionType.APPLICATION_COMMAND.name)],
        Annotated[MessageComponentInteraction, Tag(InteractionType.MESSAGE_COMPONENT.name)],
        Annotated[AutocompleteInteraction, Tag(InteractionType.APPLICATION_COMMAND_AUTOCOMPLETE.name)],
        Annotated[ModalSubmitInteraction, Tag(InteractionType.MODAL_SUBMIT.name)],
        Annotated[UnknownInteraction, Tag('UNKNOWN')]
    ],
    Discriminator(_interaction_tag)
]

ChainInteraction = TypeAliasType('ChainInteraction', (
    ApplicationCommandInteraction |
    MessageComponentInteraction |
    ModalSubmitInteraction
))

INTERACTION_ADAPTER: TypeAdapter[Interaction] = TypeAdapter(Interaction)


def parse_interaction(body: bytes | str) -> Interaction:
    """
    validate a raw request body into exactly one interaction variant

    raises pydantic_core.ValidationError for malformed json or payloads
    """
    return INTERACTION_ADAPTER.validate_json(body)
