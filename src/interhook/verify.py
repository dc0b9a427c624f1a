from __future__ import annotations

from typing import Annotated
from functools import lru_cache

from fastapi import HTTPException, Request, Header
from nacl.exceptions import CryptoError
from pydantic_core import ValidationError
from starlette.requests import ClientDisconnect
from nacl.signing import VerifyKey

from .models import Interaction, parse_interaction
from .errors import AuthenticationFailure
from .otel import cx


__all__ = (
    'interaction_validator',
    'read_body',
    'verify_signature',
)


@lru_cache(maxsize=16)
def _verify_key(public_key: str) -> VerifyKey:
    return VerifyKey(bytes.fromhex(public_key))


def verify_signature(
    public_key: str,
    timestamp: str | None,
    signature: str | None,
    body: bytes
) -> bool:
    """
    check that `body` was signed by the holder of `public_key`

    the signed message is the timestamp header followed by the exact body
    bytes received; any failure, including malformed hex, is `False`
    """
    if timestamp is None or signature is None:
        return False

    try:
        _verify_key(public_key).verify(
            timestamp.encode() + body,
            bytes.fromhex(signature)
        )
    except (CryptoError, ValueError, TypeError):
        return False

    return True


async def read_body(request: Request) -> bytes:
    # ? starlette buffers the stream to completion and caches it on the request
    try:
        return await request.body()
    except (ClientDisconnect, RuntimeError) as e:
        raise AuthenticationFailure('request body could not be read') from e


def _reject(reason: str) -> HTTPException:
    cx().set_attribute('interaction.rejected', reason)

    return HTTPException(401, reason)


async def interaction_validator(
    request: Request,
    x_signature_ed25519: Annotated[str | None, Header()] = None,
    x_signature_timestamp: Annotated[str | None, Header()] = None,
) -> Interaction:
    if x_signature_ed25519 is None or x_signature_timestamp is None:
        # ? reject before touching the body
        raise _reject('Missing request signature')

    try:
        body = await read_body(request)
    except AuthenticationFailure as e:
        raise _reject('Invalid request body') from e

    if not verify_signature(
        request.app.state.client.public_key,
        x_signature_timestamp,
        x_signature_ed25519,
        body
    ):
        raise _reject('Invalid request signature')

    try:
        return parse_interaction(body)
    except ValidationError as e:
        raise _reject('Invalid interaction') from e
