"""
Unit tests for the Expired Session Sweeper
"""

import asyncio
from contextlib import asynccontextmanager

import pytest
from unittest.mock import AsyncMock

from src.app.services.cleanup_sweeper import ExpiredSessionSweeper
from src.domain.errors import StorageError


@pytest.fixture
def uow_scope(mock_uow):
    @asynccontextmanager
    async def scope():
        yield mock_uow

    return scope


@pytest.mark.asyncio
async def test_sweep_once_deletes_expired(uow_scope, mock_uow, fixed_now):
    mock_uow.session_records.delete_expired = AsyncMock(return_value=4)
    sweeper = ExpiredSessionSweeper(uow_scope, clock=lambda: fixed_now)

    assert await sweeper.sweep_once() == 4

    mock_uow.session_records.delete_expired.assert_called_once_with(fixed_now)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_sweep_once_with_nothing_to_delete(uow_scope, mock_uow):
    mock_uow.session_records.delete_expired = AsyncMock(return_value=0)
    sweeper = ExpiredSessionSweeper(uow_scope)

    assert await sweeper.sweep_once() == 0


@pytest.mark.asyncio
async def test_run_keeps_going_after_failed_sweep(uow_scope):
    """A failing sweep is logged and the loop continues until cancelled"""
    sweeper = ExpiredSessionSweeper(uow_scope, interval_seconds=0, initial_delay_seconds=0)
    sweeper.sweep_once = AsyncMock(
        side_effect=[StorageError(), 2, asyncio.CancelledError()]
    )

    with pytest.raises(asyncio.CancelledError):
        await sweeper.run()

    assert sweeper.sweep_once.await_count == 3
