from __future__ import annotations

from logging import Filter, LogRecord, getLogger
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Annotated
from asyncio import set_event_loop_policy

from fastapi import APIRouter, FastAPI, Depends, Request, Response
from uvloop import EventLoopPolicy
from uvicorn import run

from .utils import create_strong_task, wait_for_running, RUNNING
from .otel import span, cx, get_counter
from .verify import interaction_validator
from .models import Interaction
from .http import close_session
from .dispatch import dispatch
from .version import VERSION

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable
    from typing import Any

    from .client import Client


__all__ = (
    'create_app',
    'serve',
)


logger = getLogger(__name__)


class LocalHealthcheckFilter(Filter):
    def filter(self, record: LogRecord) -> bool:
        return not bool(
            isinstance(record.args, tuple) and
            len(record.args) == 5 and
            record.args[1] == 'GET' and
            record.args[2] == '/healthcheck' and
            record.args[4] == 204
        )


getLogger('uvicorn.access').addFilter(LocalHealthcheckFilter())


async def _run_pending(
    pending: Callable[[], Awaitable[Any]],
    name: str
) -> None:
    # ? the reply has already been sent, errors can only be recorded
    with span(f'deferred {name}') as current_span:
        try:
            await pending()
        except Exception as e:
            current_span.record_exception(e)
            logger.exception('unhandled error in deferred %s', name)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:  # noqa: ARG001
    yield

    if RUNNING:
        logger.info('waiting for %d tasks to finish...', len(RUNNING))

    await wait_for_running()
    await close_session()


def create_app(
    client: Client,
    path: str = '/interaction',
    ack_first: bool = True
) -> FastAPI:
    """
    build the webhook application for `client`

    with `ack_first`, command and component work runs after the 202 is
    sent; otherwise it is awaited first and a failure becomes a 500
    """
    app = FastAPI(
        title='interhook',
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        version=VERSION
    )

    app.state.client = client

    interactions = get_counter('interactions')
    router = APIRouter(include_in_schema=False)

    @router.post(path)
    async def post__interaction(
        interaction: Annotated[Interaction, Depends(interaction_validator)]
    ) -> Response:
        interactions.add(1, {'interaction.type': str(interaction.type)})

        reply = await dispatch(client, interaction)

        if reply is None:
            return Response(status_code=204)

        if reply.pending is not None:
            if ack_first:
                create_strong_task(_run_pending(
                    reply.pending,
                    interaction.type.name
                ))
            else:
                await reply.pending()

        return reply.as_response()

    @router.get('/healthcheck')
    async def get__healthcheck() -> Response:
        return Response(status_code=204)

    app.include_router(router)

    @app.exception_handler(Exception)
    async def handle_exception(
        request: Request,
        exc: Exception
    ) -> Response:
        cx().record_exception(exc)
        logger.error(
            'unhandled error on %s %s',
            request.method,
            request.url.path,
            exc_info=exc
        )

        return Response(status_code=500)

    return app


def serve(
    client: Client,
    path: str = '/interaction',
    port: int = 8080,
    host: str = '0.0.0.0',  # noqa: S104
    ack_first: bool = True
) -> None:
    set_event_loop_policy(EventLoopPolicy())

    run(
        create_app(client, path, ack_first),
        host=host,
        port=port,
        forwarded_allow_ips='*'
    )
