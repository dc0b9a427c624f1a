from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from interhook.enums import InteractionCallbackType, MessageFlag

from .command import ApplicationCommand
from .base import DiscordModel


__all__ = (
    'AutocompleteResult',
    'InteractionCallback',
    'as_json',
    'with_flags',
)


class AutocompleteResult(DiscordModel):
    choices: list[ApplicationCommand.Option.Choice]
    """Autocomplete choices, max 25"""


class InteractionCallback(DiscordModel):
    type: InteractionCallbackType
    """Type of response"""
    data: dict[str, Any] | None = None
    """An optional response message"""

    def as_payload(self) -> dict[str, Any]:
        # ? data is sent exactly as the handler built it
        payload: dict[str, Any] = {'type': self.type.value}

        if self.data is not None:
            payload['data'] = self.data

        return payload

    @classmethod
    def pong(cls) -> InteractionCallback:
        return cls(type=InteractionCallbackType.PONG)

    @classmethod
    def autocomplete(
        cls,
        data: dict[str, Any] | BaseModel
    ) -> InteractionCallback:
        return cls(
            type=InteractionCallbackType.APPLICATION_COMMAND_AUTOCOMPLETE_RESULT,
            data=as_json(data)
        )


def as_json(payload: dict[str, Any] | BaseModel) -> dict[str, Any]:
    if isinstance(payload, DiscordModel):
        return payload.as_payload()

    if isinstance(payload, BaseModel):
        return payload.model_dump(mode='json', exclude_none=True)

    return payload


def with_flags(
    payload: dict[str, Any] | BaseModel,
    flags: MessageFlag
) -> dict[str, Any]:
    json = dict(as_json(payload))

    if flags:
        json['flags'] = int(json.get('flags') or 0) | flags.value

    return json
