from __future__ import annotations

from enum import Enum, Flag


class InteractionType(Enum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class ApplicationCommandType(Enum):
    CHAT_INPUT = 1
    """Slash commands; a text-based command that shows up when a user types `/`"""
    USER = 2
    """A UI-based command that shows up when you right click or tap on a user"""
    MESSAGE = 3
    """A UI-based command that shows up when you right click or tap on a message"""
    PRIMARY_ENTRY_POINT = 4
    """A UI-based command that represents the primary way to invoke an app's Activity"""

    def __str__(self) -> str:
        match self:
            case ApplicationCommandType.CHAT_INPUT:
                return '/'
            case ApplicationCommandType.USER:
                return 'USER '
            case ApplicationCommandType.MESSAGE:
                return 'MESSAGE '
            case _:
                return super().__str__()


class ApplicationCommandOptionType(Enum):
    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    """Any integer between -2^53 and 2^53"""
    BOOLEAN = 5
    USER = 6
    CHANNEL = 7
    """Includes all channel types + categories"""
    ROLE = 8
    MENTIONABLE = 9
    """Includes users and roles"""
    NUMBER = 10
    """Any double between -2^53 and 2^53"""
    ATTACHMENT = 11


class ApplicationIntegrationType(Enum):
    GUILD_INSTALL = 0
    """App is installable to servers"""
    USER_INSTALL = 1
    """App is installable to users"""


class InteractionContextType(Enum):
    GUILD = 0
    """Interaction can be used within servers"""
    BOT_DM = 1
    """Interaction can be used within DMs with the app's bot user"""
    PRIVATE_CHANNEL = 2
    """Interaction can be used within Group DMs and DMs other than the app's bot user"""


class InteractionCallbackType(Enum):
    PONG = 1
    """ACK a `Ping`"""
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    """Respond to an interaction with a message"""
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    """ACK an interaction and edit a response later, the user sees a loading state"""
    DEFERRED_UPDATE_MESSAGE = 6
    """For components, ACK an interaction and edit the original message later; the user does not see a loading state\n
    Only valid for component-based interactions"""
    UPDATE_MESSAGE = 7
    """For components, edit the message the component was attached to\n
    Only valid for component-based interactions"""
    APPLICATION_COMMAND_AUTOCOMPLETE_RESULT = 8
    """Respond to an autocomplete interaction with suggested choices"""
    MODAL = 9
    """Respond to an interaction with a popup modal\n
    Not available for `MODAL_SUBMIT` and `PING` interactions."""


class ComponentType(Enum):
    ACTION_ROW = 1
    BUTTON = 2
    STRING_SELECT = 3
    TEXT_INPUT = 4
    USER_SELECT = 5
    ROLE_SELECT = 6
    MENTIONABLE_SELECT = 7
    CHANNEL_SELECT = 8


class MessageFlag(Flag):
    NONE = 0
    """no flags set"""
    SUPPRESS_EMBEDS = 1 << 2
    """do not include any embeds when serializing this message"""
    EPHEMERAL = 1 << 6
    """this message is only visible to the user who invoked the Interaction"""
    LOADING = 1 << 7
    """this message is an Interaction Response and the bot is "thinking\""""
    SUPPRESS_NOTIFICATIONS = 1 << 12
    """this message will not trigger push and desktop notifications"""
