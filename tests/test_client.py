# tests/test_client.py
"""Tests for client registration and discord api calls."""
from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from orjson import dumps

from interhook import GLOBAL, Client, CommandScope, Env
from interhook.enums import ApplicationCommandType
from interhook.http import BASE_URL
from interhook.models import parse_interaction


APPLICATION_ID = 1234567890
GUILD = CommandScope.guild(6000)


@pytest.fixture
def interaction(payload, command_data):
    return parse_interaction(dumps(payload(2, command_data())))


def _route(mock: AsyncMock):
    return mock.call_args.args[0]


# ============================================================================
# Registration
# ============================================================================

class TestRegistration:

    def test_slash_command(self, client):
        async def ping(client, interaction) -> None:
            ...

        bundle = client.slash_command('ping', 'check latency')(ping)

        assert bundle.callback is ping
        assert bundle.command.description == 'check latency'
        assert client.registry.lookup(GLOBAL, ApplicationCommandType.CHAT_INPUT, 'ping') is bundle

    def test_context_menu_commands(self, client):
        user = client.user_command('info', scope=GUILD)(AsyncMock())
        message = client.message_command('info', scope=GUILD)(AsyncMock())

        assert client.registry.lookup(GUILD, ApplicationCommandType.USER, 'info') is user
        assert client.registry.lookup(GUILD, ApplicationCommandType.MESSAGE, 'info') is message
        assert client.registry.lookup(GLOBAL, ApplicationCommandType.USER, 'info') is None

    def test_autocomplete_attaches_to_command(self, client):
        bundle = client.slash_command('member', 'edit a member')(AsyncMock())
        callback = AsyncMock()

        assert client.autocomplete('member')(callback) is callback
        assert bundle.autocomplete is callback

    def test_autocomplete_requires_command(self, client):
        with pytest.raises(ValueError, match='member'):
            client.autocomplete('member')(AsyncMock())

    def test_from_env(self, public_key):
        client = Client.from_env(Env(
            application_id=APPLICATION_ID,
            public_key=public_key,
            bot_token='bot-token',
            guild_fallback=True,
        ))

        assert client.application_id == APPLICATION_ID
        assert client.token == 'bot-token'
        assert client.registry.guild_fallback is True


# ============================================================================
# Application commands
# ============================================================================

class TestCommandRequests:

    @pytest.mark.asyncio
    async def test_fetch_global_commands(self, client):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            request.return_value = [{'id': '1', 'name': 'ping', 'description': 'pong'}]

            commands = await client.fetch_commands()

        route = _route(request)
        assert route.method == 'GET'
        assert route.url == f'{BASE_URL}/applications/{APPLICATION_ID}/commands'
        assert request.call_args.kwargs['token'] == 'bot-token'
        assert commands[0].name == 'ping'

    @pytest.mark.asyncio
    async def test_fetch_guild_commands_with_localizations(self, client):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            request.return_value = []

            await client.fetch_commands(GUILD, with_localizations=True)

        assert _route(request).url == (
            f'{BASE_URL}/applications/{APPLICATION_ID}/guilds/6000/commands'
        )
        assert request.call_args.kwargs['params'] == {'with_localizations': 'true'}

    @pytest.mark.asyncio
    async def test_delete_command(self, client):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            request.return_value = None

            await client.delete_command(42, GUILD)

        route = _route(request)
        assert route.method == 'DELETE'
        assert route.url == (
            f'{BASE_URL}/applications/{APPLICATION_ID}/guilds/6000/commands/42'
        )

    @pytest.mark.asyncio
    async def test_sync_commands(self, client):
        client.slash_command('ping', 'pong')(AsyncMock())
        client.user_command('info')(AsyncMock())
        client.slash_command('guild', 'only', scope=GUILD)(AsyncMock())

        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            request.return_value = [
                {'id': '1', 'name': 'ping', 'description': 'pong'},
                {'id': '2', 'name': 'info', 'type': 2},
            ]

            commands = await client.sync_commands()

        route = _route(request)
        assert route.method == 'PUT'
        assert route.url == f'{BASE_URL}/applications/{APPLICATION_ID}/commands'
        assert request.call_args.kwargs['json'] == [
            {'type': 1, 'name': 'ping', 'description': 'pong'},
            {'type': 2, 'name': 'info', 'description': ''},
        ]
        assert [command.id for command in commands] == [1, 2]

    @pytest.mark.asyncio
    async def test_ping(self, client):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            request.return_value = {'url': 'wss://gateway.discord.gg'}

            latency = await client.ping()

        assert _route(request).url == f'{BASE_URL}/gateway'
        assert isinstance(latency, int)


# ============================================================================
# Interaction responses
# ============================================================================

class TestInteractionResponses:

    @pytest.mark.asyncio
    async def test_send_reply(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.send_reply(interaction, {'content': 'hi'})

        route = _route(request)
        assert route.method == 'POST'
        assert route.url == f'{BASE_URL}/interactions/1000/interaction-token/callback'
        assert request.call_args.kwargs['json'] == {'type': 4, 'data': {'content': 'hi'}}
        # ? interaction callbacks are authorized by the token in the url
        assert 'token' not in request.call_args.kwargs

    @pytest.mark.asyncio
    async def test_send_ephemeral_reply(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.send_reply(interaction, {'content': 'hi'}, ephemeral=True)

        assert request.call_args.kwargs['json'] == {
            'type': 4, 'data': {'content': 'hi', 'flags': 64}
        }

    @pytest.mark.asyncio
    async def test_defer_reply(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.defer_reply(interaction, ephemeral=True)

        assert request.call_args.kwargs['json'] == {'type': 5, 'data': {'flags': 64}}

    @pytest.mark.asyncio
    async def test_defer_update(self, client, payload):
        interaction = parse_interaction(dumps(payload(3, {'custom_id': 'b', 'component_type': 2})))

        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.defer_update(interaction)

        assert request.call_args.kwargs['json'] == {'type': 6}

    @pytest.mark.asyncio
    async def test_send_modal(self, client, interaction):
        modal = {'custom_id': 'feedback', 'title': 'Feedback', 'components': []}

        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.send_modal(interaction, modal)

        assert request.call_args.kwargs['json'] == {'type': 9, 'data': modal}

    @pytest.mark.asyncio
    async def test_edit_reply(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.edit_reply(interaction, {'content': 'edited'})

        route = _route(request)
        assert route.method == 'PATCH'
        assert route.url == (
            f'{BASE_URL}/webhooks/{APPLICATION_ID}/interaction-token/messages/@original'
        )
        assert request.call_args.kwargs['json'] == {'content': 'edited'}

    @pytest.mark.asyncio
    async def test_send_ephemeral_followup(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.send_followup(interaction, {'content': 'later'}, ephemeral=True)

        route = _route(request)
        assert route.url == f'{BASE_URL}/webhooks/{APPLICATION_ID}/interaction-token'
        assert request.call_args.kwargs['json'] == {'content': 'later', 'flags': 64}

    @pytest.mark.asyncio
    async def test_delete_followup(self, client, interaction):
        with patch('interhook.client.request', new_callable=AsyncMock) as request:
            await client.delete_followup(interaction, 55)

        route = _route(request)
        assert route.method == 'DELETE'
        assert route.url == (
            f'{BASE_URL}/webhooks/{APPLICATION_ID}/interaction-token/messages/55'
        )
