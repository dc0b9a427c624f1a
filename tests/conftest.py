# tests/conftest.py
"""Pytest configuration and fixtures"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from nacl.signing import SigningKey

from interhook import Client


APPLICATION_ID = 1234567890
GUILD_ID = 6000


@pytest.fixture
def signing_key() -> SigningKey:
    """Fresh ed25519 keypair for each test"""
    return SigningKey.generate()


@pytest.fixture
def public_key(signing_key: SigningKey) -> str:
    return signing_key.verify_key.encode().hex()


@pytest.fixture
def client(public_key: str) -> Client:
    """Client with an empty registry and chain"""
    return Client(APPLICATION_ID, public_key, 'bot-token')


@pytest.fixture
def sign(signing_key: SigningKey) -> Callable[..., dict[str, str]]:
    """Build the signature headers discord would send with `body`"""
    def _sign(body: bytes, timestamp: str = '1700000000') -> dict[str, str]:
        signature = signing_key.sign(timestamp.encode() + body).signature

        return {
            'X-Signature-Ed25519': signature.hex(),
            'X-Signature-Timestamp': timestamp,
        }

    return _sign


@pytest.fixture
def payload() -> Callable[..., dict[str, Any]]:
    """Build a raw interaction payload"""
    def _payload(
        type: int,
        data: dict[str, Any] | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        raw: dict[str, Any] = {
            'id': '1000',
            'application_id': str(APPLICATION_ID),
            'type': type,
            'token': 'interaction-token',
            'version': 1,
            'channel_id': '3000',
            'user': {'id': '4000', 'username': 'user'},
        }

        if data is not None:
            raw['data'] = data

        raw.update(extra)

        return raw

    return _payload


@pytest.fixture
def command_data() -> Callable[..., dict[str, Any]]:
    """Build application command interaction data"""
    def _command_data(
        name: str = 'ping',
        type: int = 1,
        guild_id: int | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {'id': '5000', 'name': name, 'type': type}

        if guild_id is not None:
            data['guild_id'] = str(guild_id)

        data.update(extra)

        return data

    return _command_data
