from .base import DiscordModel
from .user import User, Member
from .command import ApplicationCommand
from .data import (
    ApplicationCommandInteractionData,
    MessageComponentInteractionData,
    ModalSubmitInteractionData,
)
from .interaction import (
    ApplicationCommandInteraction,
    MessageComponentInteraction,
    AutocompleteInteraction,
    ModalSubmitInteraction,
    UnknownInteraction,
    ChainInteraction,
    BaseInteraction,
    PingInteraction,
    Interaction,
    parse_interaction,
)
from .response import (
    InteractionCallback,
    AutocompleteResult,
    with_flags,
    as_json,
)


__all__ = (  # noqa: RUF022
    # Base
    'DiscordModel',
    # User
    'Member',
    'User',
    # Command
    'ApplicationCommand',
    # Interaction Data
    'ApplicationCommandInteractionData',
    'MessageComponentInteractionData',
    'ModalSubmitInteractionData',
    # Interaction
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
    # Response
    'AutocompleteResult',
    'InteractionCallback',
    'as_json',
    'with_flags',
)
