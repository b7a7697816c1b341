"""
Unit tests for the session route deadline wrapper
"""

import asyncio

import pytest

from config import ApplicationConfig
from src.api.error import ServerError
from src.api.routes.sessions import run_with_deadline
from src.domain.errors import StorageError, TokenCompromised


@pytest.mark.asyncio
async def test_returns_result_within_deadline():
    async def op():
        return "ok"

    assert await run_with_deadline(op()) == "ok"


@pytest.mark.asyncio
async def test_timeout_maps_to_503(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "SESSION_OPERATION_TIMEOUT_SECONDS", 0.01)

    async def slow():
        await asyncio.sleep(1)

    with pytest.raises(ServerError) as exc_info:
        await run_with_deadline(slow())

    assert exc_info.value.status_code == 503
    assert exc_info.value.base_error.code == "TIMEOUT"


@pytest.mark.asyncio
async def test_storage_error_maps_to_500():
    async def broken():
        raise StorageError()

    with pytest.raises(ServerError) as exc_info:
        await run_with_deadline(broken())

    assert exc_info.value.status_code == 500
    assert exc_info.value.base_error.code == "STORAGE_ERROR"


@pytest.mark.asyncio
async def test_lifecycle_errors_pass_through():
    async def replayed():
        raise TokenCompromised()

    with pytest.raises(TokenCompromised):
        await run_with_deadline(replayed())
