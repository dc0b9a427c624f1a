# tests/test_chain.py
"""Tests for ordered handler chain evaluation."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from interhook.chain import HandlerChain, HandlerEntry


def _entry(matches: bool, exec_next: bool = False, calls: list | None = None, name: str = '') -> HandlerEntry:
    async def predicate(interaction) -> bool:
        return matches

    async def action(client, interaction) -> None:
        if calls is not None:
            calls.append(name)

    return HandlerEntry(predicate, action, exec_next)


class TestHandlerChain:

    @pytest.mark.asyncio
    async def test_first_match_stops(self):
        calls: list[str] = []
        default = AsyncMock()
        chain = HandlerChain(default)
        chain.append(
            _entry(False, calls=calls, name='a'),
            _entry(True, calls=calls, name='b'),
            _entry(True, calls=calls, name='c'),
        )

        assert await chain.run(MagicMock(), MagicMock()) is True
        assert calls == ['b']
        default.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_exec_next_continues(self):
        calls: list[str] = []
        chain = HandlerChain()
        chain.append(
            _entry(True, exec_next=True, calls=calls, name='a'),
            _entry(False, calls=calls, name='b'),
            _entry(True, exec_next=True, calls=calls, name='c'),
            _entry(True, calls=calls, name='d'),
            _entry(True, calls=calls, name='e'),
        )

        assert await chain.run(MagicMock(), MagicMock()) is True
        assert calls == ['a', 'c', 'd']

    @pytest.mark.asyncio
    async def test_default_runs_when_nothing_matches(self):
        client, interaction = MagicMock(), MagicMock()
        default = AsyncMock()
        chain = HandlerChain(default)
        chain.append(_entry(False), _entry(False))

        assert await chain.run(client, interaction) is False
        default.assert_awaited_once_with(client, interaction)

    @pytest.mark.asyncio
    async def test_default_runs_after_exec_next_only_matches(self):
        calls: list[str] = []
        default = AsyncMock()
        chain = HandlerChain(default)
        chain.append(_entry(True, exec_next=True, calls=calls, name='a'))

        assert await chain.run(MagicMock(), MagicMock()) is True
        assert calls == ['a']
        default.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_chain_without_default(self):
        chain = HandlerChain()

        assert len(chain) == 0
        assert await chain.run(MagicMock(), MagicMock()) is False

    @pytest.mark.asyncio
    async def test_predicate_receives_interaction(self):
        interaction = MagicMock()
        predicate = AsyncMock(return_value=False)
        chain = HandlerChain()
        chain.append(HandlerEntry(predicate, AsyncMock()))

        await chain.run(MagicMock(), interaction)

        predicate.assert_awaited_once_with(interaction)

    @pytest.mark.asyncio
    async def test_action_error_propagates(self):
        default = AsyncMock()
        later = AsyncMock()
        chain = HandlerChain(default)
        chain.append(
            HandlerEntry(
                AsyncMock(return_value=True),
                AsyncMock(side_effect=RuntimeError('boom')),
                exec_next=True),
            HandlerEntry(AsyncMock(return_value=True), later),
        )

        with pytest.raises(RuntimeError, match='boom'):
            await chain.run(MagicMock(), MagicMock())

        later.assert_not_awaited()
        default.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_predicate_error_propagates(self):
        chain = HandlerChain()
        chain.append(HandlerEntry(
            AsyncMock(side_effect=ValueError('bad predicate')),
            AsyncMock()))

        with pytest.raises(ValueError, match='bad predicate'):
            await chain.run(MagicMock(), MagicMock())

    def test_append_preserves_order(self):
        first, second, third = _entry(True), _entry(True), _entry(False)
        chain = HandlerChain()
        chain.append(first)
        chain.append(second, third)

        assert chain.entries == (first, second, third)
        assert len(chain) == 3
