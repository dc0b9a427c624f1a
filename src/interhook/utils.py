from __future__ import annotations

from typing import TYPE_CHECKING
from asyncio import create_task, gather

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from asyncio import Task


__all__ = (
    'RUNNING',
    'create_strong_task',
    'wait_for_running',
)


RUNNING: set[Task] = set()


def create_strong_task(coroutine: Coroutine) -> Task:
    """
    create a task that will not be garbage collected before it finishes
    """
    task = create_task(coroutine)

    RUNNING.add(task)

    task.add_done_callback(RUNNING.discard)

    return task


async def wait_for_running() -> None:
    if RUNNING:
        await gather(*RUNNING, return_exceptions=True)
