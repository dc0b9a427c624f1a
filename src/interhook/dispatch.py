from __future__ import annotations

from typing import TYPE_CHECKING, Any
from dataclasses import dataclass
from functools import partial

from fastapi.responses import Response, JSONResponse

from .models import (
    ApplicationCommandInteraction,
    MessageComponentInteraction,
    AutocompleteInteraction,
    ModalSubmitInteraction,
    InteractionCallback,
    PingInteraction,
)
from .registry import CommandScope
from .otel import span, cx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .models import Interaction, ChainInteraction
    from .client import Client


__all__ = (
    'InteractionReply',
    'dispatch',
)


@dataclass(slots=True)
class InteractionReply:
    status_code: int
    body: dict[str, Any] | None = None
    pending: Callable[[], Awaitable[Any]] | None = None
    """handler work to run after (or before, when not acking first) the reply"""

    @classmethod
    def pong(cls) -> InteractionReply:
        return cls(200, InteractionCallback.pong().as_payload())

    @classmethod
    def ack(cls, pending: Callable[[], Awaitable[Any]]) -> InteractionReply:
        return cls(202, pending=pending)

    @classmethod
    def no_changes(cls) -> InteractionReply:
        return cls(204)

    def as_response(self) -> Response:
        if self.body is None:
            return Response(status_code=self.status_code)

        return JSONResponse(self.body, status_code=self.status_code)


async def dispatch(
    client: Client,
    interaction: Interaction
) -> InteractionReply | None:
    """
    classify an authenticated interaction and route it

    returns exactly one reply per interaction, or `None` for interaction
    types this version does not know about
    """
    match interaction:
        case PingInteraction():
            return InteractionReply.pong()
        case ApplicationCommandInteraction():
            return InteractionReply.ack(
                partial(_on_application_command, client, interaction)
            )
        case MessageComponentInteraction() | ModalSubmitInteraction():
            return InteractionReply.ack(
                partial(_on_chain, client, interaction)
            )
        case AutocompleteInteraction():
            return await _on_autocomplete(client, interaction)
        case _:
            cx().set_attribute('interaction.unknown_type', interaction.type)
            return None


def _scope(interaction: ApplicationCommandInteraction | AutocompleteInteraction) -> CommandScope:
    # ? the guild the interaction came from, global commands used there need guild_fallback
    return CommandScope.of(interaction.guild_id)


async def _on_application_command(
    client: Client,
    interaction: ApplicationCommandInteraction
) -> None:
    scope = _scope(interaction)

    bundle = client.registry.lookup(
        scope,
        interaction.data.type,
        interaction.data.name
    )

    if bundle is None or bundle.callback is None:
        await _on_chain(client, interaction)
        return

    with span(
        f'{interaction.data.type}{interaction.data.name}',
        attributes={
            'command.scope': str(scope),
            'user.id': str(interaction.author_id or ''),
            'guild.id': str(interaction.guild_id or 'dm')
        }
    ):
        await bundle.callback(client, interaction)


async def _on_chain(
    client: Client,
    interaction: ChainInteraction
) -> None:
    with span(
        f'{interaction.type.name} chain',
        attributes={
            'user.id': str(interaction.author_id or ''),
            'guild.id': str(interaction.guild_id or 'dm')
        }
    ) as current_span:
        current_span.set_attribute(
            'chain.matched',
            await client.chain.run(client, interaction)
        )


async def _on_autocomplete(
    client: Client,
    interaction: AutocompleteInteraction
) -> InteractionReply:
    bundle = client.registry.lookup(
        _scope(interaction),
        interaction.data.type,
        interaction.data.name
    )

    callback = (
        bundle.autocomplete
        if bundle is not None and bundle.autocomplete is not None else
        client.default_autocomplete
    )

    with span(f'autocomplete {interaction.data.name}'):
        payload = await callback(interaction)

    if payload is None:
        return InteractionReply.no_changes()

    return InteractionReply(
        200,
        InteractionCallback.autocomplete(payload).as_payload()
    )
