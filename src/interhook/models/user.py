from __future__ import annotations

from interhook.types import Snowflake

from .base import DiscordModel


__all__ = (
    'Member',
    'User',
)


class User(DiscordModel):
    id: Snowflake
    """The user's id"""
    username: str
    """The user's username, not unique across the platform"""
    global_name: str | None = None
    """The user's display name, if it is set. For bots, this is the application name"""
    avatar: str | None = None
    """The user's avatar hash"""
    bot: bool | None = None
    """Whether the user belongs to an OAuth2 application"""

    @property
    def display_name(self) -> str:
        return self.global_name or self.username


class Member(DiscordModel):
    user: User | None = None
    """The user this guild member represents"""
    nick: str | None = None
    """This user's guild nickname"""
    roles: list[Snowflake] = []
    """Array of role object ids"""
    permissions: str | None = None
    """Total permissions of the member in the channel, including overwrites, returned when in the interaction object"""
