from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from dataclasses import dataclass

from .otel import span

if TYPE_CHECKING:
    from .models import ChainInteraction
    from .client import Client


__all__ = (
    'HandlerAction',
    'HandlerChain',
    'HandlerEntry',
    'HandlerPredicate',
)


class HandlerPredicate(Protocol):
    async def __call__(self, interaction: ChainInteraction) -> bool:
        ...


class HandlerAction(Protocol):
    async def __call__(
        self,
        client: Client,
        interaction: ChainInteraction
    ) -> None:
        ...


async def _noop(client: Client, interaction: ChainInteraction) -> None:  # noqa: ARG001
    return None


@dataclass(frozen=True, slots=True)
class HandlerEntry:
    predicate: HandlerPredicate
    action: HandlerAction
    exec_next: bool = False
    """keep evaluating the chain after this entry runs"""


class HandlerChain:
    def __init__(self, default: HandlerAction | None = None) -> None:
        self.default = default or _noop
        self._entries: tuple[HandlerEntry, ...] = ()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[HandlerEntry, ...]:
        return self._entries

    def append(self, *entries: HandlerEntry) -> None:
        self._entries = (*self._entries, *entries)

    async def run(
        self,
        client: Client,
        interaction: ChainInteraction
    ) -> bool:
        """
        run the first matching entry, and any following ones when it is
        marked `exec_next`; the default handler runs when nothing stopped
        the chain. errors propagate to the caller unchanged
        """
        matched = False

        # ? snapshot, entries appended mid-run apply to the next interaction
        for index, entry in enumerate(self._entries):
            if not await entry.predicate(interaction):
                continue

            matched = True

            with span(
                f'handler {index}',
                attributes={'handler.exec_next': entry.exec_next}
            ):
                await entry.action(client, interaction)

            if not entry.exec_next:
                return True

        with span('default handler'):
            await self.default(client, interaction)

        return matched
