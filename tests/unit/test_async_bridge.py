"""
utils/async_bridge.py 單元測試
驗證 run_sync 在有 / 無 event loop 時的行為，以及例外保留原始物件。
"""

import asyncio
import threading

import pytest

from verifykit.utils.async_bridge import is_awaitable, run_sync


@pytest.mark.unit
class TestIsAwaitable:

    @pytest.mark.unit
    def test_coroutine(self):
        async def f():
            return 1

        coro = f()
        assert is_awaitable(coro)
        coro.close()

    @pytest.mark.unit
    def test_plain_value(self):
        assert not is_awaitable(1)
        assert not is_awaitable([1])


@pytest.mark.unit
class TestRunSync:
    """run_sync"""

    @pytest.mark.unit
    def test_returns_value(self):
        async def f():
            await asyncio.sleep(0)
            return "done"

        assert run_sync(f()) == "done"

    @pytest.mark.unit
    def test_preserves_exception_identity(self):
        error = ValueError("inner")

        async def f():
            raise error

        with pytest.raises(ValueError) as exc_info:
            run_sync(f())
        assert exc_info.value is error

    @pytest.mark.unit
    def test_runs_on_helper_thread_inside_loop(self):
        """已有 running loop 時改在輔助執行緒執行"""
        seen = {}

        async def inner():
            seen["thread"] = threading.current_thread().name
            return 7

        async def outer():
            return run_sync(inner())

        assert asyncio.run(outer()) == 7
        assert seen["thread"] == "verifykit-async-bridge"

    @pytest.mark.unit
    def test_no_loop_runs_on_current_thread(self):
        seen = {}

        async def inner():
            seen["thread"] = threading.current_thread()

        run_sync(inner())
        assert seen["thread"] is threading.current_thread()
