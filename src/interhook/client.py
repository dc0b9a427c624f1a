from __future__ import annotations

from typing import TYPE_CHECKING, Any

from time import perf_counter

from pydantic import BaseModel
from typing_extensions import TypeAliasType

from .registry import (
    AutocompleteCallback,
    CommandCallback,
    CommandRegistry,
    CommandBundle,
    CommandScope,
    GLOBAL
)
from .enums import ApplicationCommandType, InteractionCallbackType, MessageFlag
from .models import ApplicationCommand, InteractionCallback, as_json, with_flags
from .chain import HandlerChain, HandlerEntry, HandlerAction
from .http import Route, request
from .otel import span

if TYPE_CHECKING:
    from collections.abc import Callable

    from .models import (
        MessageComponentInteraction,
        AutocompleteInteraction,
        BaseInteraction,
    )
    from .env import Env


__all__ = (
    'Client',
)


Payload = TypeAliasType('Payload', dict[str, Any] | BaseModel)


async def _no_autocomplete(interaction: AutocompleteInteraction) -> None:  # noqa: ARG001
    return None


class Client:
    """
    everything an interaction needs to be dispatched

    owns the command registry and the handler chain, and talks to the
    discord api on behalf of handlers
    """

    def __init__(
        self,
        application_id: int,
        public_key: str,
        token: str,
        *,
        default_handler: HandlerAction | None = None,
        default_autocomplete: AutocompleteCallback | None = None,
        guild_fallback: bool = False
    ) -> None:
        self.application_id = application_id
        self.public_key = public_key
        self.token = token
        self.registry = CommandRegistry(guild_fallback)
        self.chain = HandlerChain(default_handler)
        self.default_autocomplete = default_autocomplete or _no_autocomplete

    @classmethod
    def from_env(cls, env: Env, **kwargs) -> Client:  # noqa: ANN003
        return cls(
            env.application_id,
            env.public_key,
            env.bot_token,
            guild_fallback=env.guild_fallback,
            **kwargs
        )

    # ? registration
    def add_command(
        self,
        *bundles: CommandBundle,
        scope: CommandScope = GLOBAL
    ) -> None:
        for bundle in bundles:
            self.registry.register(scope, bundle)

    def add_handler(self, *entries: HandlerEntry) -> None:
        self.chain.append(*entries)

    def _command(
        self,
        type: ApplicationCommandType,
        name: str,
        scope: CommandScope,
        **kwargs  # noqa: ANN003
    ) -> Callable[[CommandCallback], CommandBundle]:
        def decorator(func: CommandCallback) -> CommandBundle:
            return self.registry.register(
                scope,
                CommandBundle(
                    ApplicationCommand(type=type, name=name, **kwargs),
                    callback=func
                )
            )

        return decorator

    def slash_command(
        self,
        name: str,
        description: str,
        options: list[ApplicationCommand.Option] | None = None,
        scope: CommandScope = GLOBAL,
        **kwargs  # noqa: ANN003
    ) -> Callable[[CommandCallback], CommandBundle]:
        return self._command(
            ApplicationCommandType.CHAT_INPUT,
            name,
            scope,
            description=description,
            options=options,
            **kwargs
        )

    def user_command(
        self,
        name: str,
        scope: CommandScope = GLOBAL,
        **kwargs  # noqa: ANN003
    ) -> Callable[[CommandCallback], CommandBundle]:
        return self._command(
            ApplicationCommandType.USER,
            name,
            scope,
            **kwargs
        )

    def message_command(
        self,
        name: str,
        scope: CommandScope = GLOBAL,
        **kwargs  # noqa: ANN003
    ) -> Callable[[CommandCallback], CommandBundle]:
        return self._command(
            ApplicationCommandType.MESSAGE,
            name,
            scope,
            **kwargs
        )

    def autocomplete(
        self,
        name: str,
        scope: CommandScope = GLOBAL
    ) -> Callable[[AutocompleteCallback], AutocompleteCallback]:
        def decorator(func: AutocompleteCallback) -> AutocompleteCallback:
            bundle = self.registry.lookup(
                scope,
                ApplicationCommandType.CHAT_INPUT,
                name
            )

            if bundle is None:
                raise ValueError(
                    f'no chat input command `{name}` registered in {scope} scope'
                )

            bundle.autocomplete = func

            return func

        return decorator

    # ? application commands
    def _commands_route(
        self,
        method: str,
        scope: CommandScope,
        command_id: int | None = None
    ) -> Route:
        path = (
            '/applications/{application_id}/commands'
            if scope.is_global else
            '/applications/{application_id}/guilds/{guild_id}/commands'
        )

        if command_id is not None:
            path += '/{command_id}'

        return Route(
            method,
            path,
            application_id=self.application_id,
            guild_id=scope.guild_id,
            command_id=command_id
        )

    async def ping(self) -> int:
        """round trip to the discord api in milliseconds"""
        start = perf_counter()

        await request(Route('GET', '/gateway'))

        return round((perf_counter() - start) * 1000)

    async def fetch_commands(
        self,
        scope: CommandScope = GLOBAL,
        with_localizations: bool | None = None
    ) -> list[ApplicationCommand]:
        params = (
            {'with_localizations': 'true' if with_localizations else 'false'}
            if with_localizations is not None else
            None
        )

        return [
            ApplicationCommand.model_validate(command)
            for command in await request(
                self._commands_route('GET', scope),
                params=params,
                token=self.token
            )
        ]

    async def fetch_command(
        self,
        command_id: int,
        scope: CommandScope = GLOBAL
    ) -> ApplicationCommand:
        return ApplicationCommand.model_validate(await request(
            self._commands_route('GET', scope, command_id),
            token=self.token
        ))

    async def register_command(
        self,
        command: ApplicationCommand,
        scope: CommandScope = GLOBAL
    ) -> ApplicationCommand:
        return ApplicationCommand.model_validate(await request(
            self._commands_route('POST', scope),
            json=command.as_payload(),
            token=self.token
        ))

    async def edit_command(
        self,
        command_id: int,
        command: Payload,
        scope: CommandScope = GLOBAL
    ) -> ApplicationCommand:
        return ApplicationCommand.model_validate(await request(
            self._commands_route('PATCH', scope, command_id),
            json=as_json(command),
            token=self.token
        ))

    async def delete_command(
        self,
        command_id: int,
        scope: CommandScope = GLOBAL
    ) -> None:
        await request(
            self._commands_route('DELETE', scope, command_id),
            token=self.token
        )

    async def update_commands(
        self,
        commands: list[ApplicationCommand],
        scope: CommandScope = GLOBAL
    ) -> list[ApplicationCommand]:
        return [
            ApplicationCommand.model_validate(command)
            for command in await request(
                self._commands_route('PUT', scope),
                json=[command.as_payload() for command in commands],
                token=self.token
            )
        ]

    async def sync_commands(
        self,
        scope: CommandScope = GLOBAL
    ) -> list[ApplicationCommand]:
        """overwrite the live commands of `scope` with the registered ones"""
        commands = self.registry.snapshot(scope)

        with span(
            f'sync_commands with {self.application_id}',
            attributes={
                'command.scope': str(scope),
                'commands': [command.name for command in commands]
            }
        ):
            return await self.update_commands(commands, scope)

    # ? interaction responses
    async def _send_callback(
        self,
        interaction: BaseInteraction,
        callback: InteractionCallback
    ) -> None:
        await request(
            Route(
                'POST',
                '/interactions/{interaction_id}/{interaction_token}/callback',
                interaction_id=interaction.id,
                interaction_token=interaction.token),
            json=callback.as_payload()
        )

    async def send_reply(
        self,
        interaction: BaseInteraction,
        message: Payload,
        ephemeral: bool = False
    ) -> None:
        await self._send_callback(interaction, InteractionCallback(
            type=InteractionCallbackType.CHANNEL_MESSAGE_WITH_SOURCE,
            data=with_flags(
                message,
                MessageFlag.EPHEMERAL if ephemeral else MessageFlag.NONE)
        ))

    async def defer_reply(
        self,
        interaction: BaseInteraction,
        ephemeral: bool = False
    ) -> None:
        await self._send_callback(interaction, InteractionCallback(
            type=InteractionCallbackType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE,
            data=(
                {'flags': MessageFlag.EPHEMERAL.value}
                if ephemeral else {})
        ))

    async def defer_update(
        self,
        interaction: MessageComponentInteraction
    ) -> None:
        await self._send_callback(interaction, InteractionCallback(
            type=InteractionCallbackType.DEFERRED_UPDATE_MESSAGE
        ))

    async def send_update(
        self,
        interaction: MessageComponentInteraction,
        message: Payload
    ) -> None:
        await self._send_callback(interaction, InteractionCallback(
            type=InteractionCallbackType.UPDATE_MESSAGE,
            data=as_json(message)
        ))

    async def send_modal(
        self,
        interaction: BaseInteraction,
        modal: Payload
    ) -> None:
        await self._send_callback(interaction, InteractionCallback(
            type=InteractionCallbackType.MODAL,
            data=as_json(modal)
        ))

    # ? webhook messages
    def _message_route(
        self,
        method: str,
        interaction: BaseInteraction,
        message_id: int | None = None
    ) -> Route:
        return Route(
            method,
            '/webhooks/{application_id}/{interaction_token}/messages/' + (
                '@original' if message_id is None else '{message_id}'),
            application_id=self.application_id,
            interaction_token=interaction.token,
            message_id=message_id
        )

    async def fetch_reply(
        self,
        interaction: BaseInteraction
    ) -> dict[str, Any]:
        return await request(self._message_route('GET', interaction))

    async def edit_reply(
        self,
        interaction: BaseInteraction,
        message: Payload
    ) -> dict[str, Any]:
        return await request(
            self._message_route('PATCH', interaction),
            json=as_json(message)
        )

    async def delete_reply(
        self,
        interaction: BaseInteraction
    ) -> None:
        await request(self._message_route('DELETE', interaction))

    async def send_followup(
        self,
        interaction: BaseInteraction,
        message: Payload,
        ephemeral: bool = False
    ) -> dict[str, Any]:
        return await request(
            Route(
                'POST',
                '/webhooks/{application_id}/{interaction_token}',
                application_id=self.application_id,
                interaction_token=interaction.token),
            json=with_flags(
                message,
                MessageFlag.EPHEMERAL if ephemeral else MessageFlag.NONE),
            params={'wait': 'true'}
        )

    async def fetch_followup(
        self,
        interaction: BaseInteraction,
        message_id: int
    ) -> dict[str, Any]:
        return await request(
            self._message_route('GET', interaction, message_id)
        )

    async def edit_followup(
        self,
        interaction: BaseInteraction,
        message_id: int,
        message: Payload
    ) -> dict[str, Any]:
        return await request(
            self._message_route('PATCH', interaction, message_id),
            json=as_json(message)
        )

    async def delete_followup(
        self,
        interaction: BaseInteraction,
        message_id: int
    ) -> None:
        await request(
            self._message_route('DELETE', interaction, message_id)
        )
