from __future__ import annotations

from typing import Any
from urllib.parse import quote
from sys import version_info

from aiohttp import __version__ as aiohttp_version, ClientSession, ClientResponse
from orjson import dumps, loads

from .errors import HTTPException, BadRequest, Unauthorized, Forbidden, NotFound, ServerError
from .version import VERSION


__all__ = (
    'BASE_URL',
    'Route',
    'close_session',
    'request',
)


BASE_URL = 'https://discord.com/api/v10'
USER_AGENT = ' '.join([
    f'DiscordBot (https://github.com/interhook/interhook, {VERSION})',
    f'Python/{".".join([str(i) for i in version_info[:3]])}',
    f'aiohttp/{aiohttp_version}'
])

_session: ClientSession | None = None


class Route:
    def __init__(
        self,
        method: str,
        path: str,
        **params  # noqa: ANN003
    ) -> None:
        self.method = method
        self.path = path

        url = BASE_URL + path

        self.url = url.format(**{
            k: quote(v, safe='') if isinstance(v, str) else v
            for k, v in params.items()
        }) if params else url

    def __repr__(self) -> str:
        return f'<Route {self.method} {self.path}>'


def get_session() -> ClientSession:
    global _session

    # ? created lazily so it binds to the running event loop
    if _session is None or _session.closed:
        _session = ClientSession()

    return _session


async def close_session() -> None:
    global _session

    if _session is not None and not _session.closed:
        await _session.close()

    _session = None


async def json_or_text(response: ClientResponse) -> dict[str, Any] | list[Any] | str:
    text = await response.text(encoding='utf-8')

    if response.headers.get('content-type', '').startswith('application/json'):
        return loads(text)

    return text


async def request(
    route: Route,
    *,
    json: dict[str, Any] | list[Any] | None = None,
    params: dict[str, str] | None = None,
    token: str | None = None,
) -> Any:  # noqa: ANN401
    headers: dict[str, str] = {
        'User-Agent': USER_AGENT
    }

    if token:
        headers['Authorization'] = f'Bot {token}'

    data = None

    if json is not None:
        headers['Content-Type'] = 'application/json'
        data = dumps(json)

    async with get_session().request(
        route.method,
        route.url,
        data=data,
        params=params,
        headers=headers
    ) as response:
        resp_data = await json_or_text(response)

        if 300 > response.status >= 200:
            return resp_data if response.status != 204 else None

        match response.status:
            case 400:
                raise BadRequest(resp_data)
            case 401:
                raise Unauthorized(resp_data)
            case 403:
                raise Forbidden(resp_data)
            case 404:
                raise NotFound(resp_data)
            case _ if response.status >= 500:
                raise ServerError(resp_data)
            case _:
                raise HTTPException(resp_data)
