"""Tests for tying renders to the client connection."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from pdfgateway.shared.cancellation import cancel_on_disconnect
from pdfgateway.shared.errors import ClientDisconnectedError


def fake_request(*disconnected: bool) -> AsyncMock:
    request = AsyncMock()
    request.is_disconnected.side_effect = list(disconnected) + [True] * 100
    return request


class TestCancelOnDisconnect:

    @pytest.mark.asyncio
    async def test_returns_result(self) -> None:
        async def work():
            return b"%PDF"

        result = await cancel_on_disconnect(fake_request(False), work(), poll_interval=0.01)

        assert result == b"%PDF"

    @pytest.mark.asyncio
    async def test_propagates_work_errors(self) -> None:
        async def work():
            raise ValueError("render failed")

        with pytest.raises(ValueError):
            await cancel_on_disconnect(fake_request(False), work(), poll_interval=0.01)

    @pytest.mark.asyncio
    async def test_disconnect_cancels_work(self) -> None:
        cancelled = asyncio.Event()

        async def work():
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        with pytest.raises(ClientDisconnectedError) as exc_info:
            await cancel_on_disconnect(fake_request(False, False), work(), poll_interval=0.01)

        assert cancelled.is_set()
        assert exc_info.value.http_status == 499
        assert exc_info.value.code == "CLIENT_DISCONNECTED"

    @pytest.mark.asyncio
    async def test_outer_cancellation_cancels_work(self) -> None:
        cancelled = asyncio.Event()

        async def work():
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        request = AsyncMock()
        request.is_disconnected.return_value = False
        task = asyncio.create_task(cancel_on_disconnect(request, work(), poll_interval=0.01))
        await asyncio.sleep(0.05)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.sleep(0.01)

        assert cancelled.is_set()
