"""
同步橋接工具
把 awaitable（coroutine / Future / Task）阻塞執行到完成，回傳最終結果。

- 目前執行緒沒有 event loop：直接 asyncio.run()
- 已在 event loop 內（例如 async 測試）：在一條輔助執行緒上開新 loop 執行並等待

失敗時重新拋出原始例外物件，不包裝。

用法：
    from verifykit.utils.async_bridge import run_sync

    result = run_sync(controller.index_async())
"""

import asyncio
import inspect
import threading
from typing import Any, Awaitable, TypeVar

from verifykit.utils.logger import logger

T = TypeVar("T")


def is_awaitable(value: Any) -> bool:
    """value 是否為尚未完成的非同步計算"""
    return inspect.isawaitable(value)


async def _await(awaitable: Awaitable[T]) -> T:
    return await awaitable


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def run_sync(awaitable: Awaitable[T]) -> T:
    """
    阻塞直到 awaitable 完成。

    Args:
        awaitable: coroutine、Future 或任何實作 __await__ 的物件

    Returns:
        awaitable 的最終值

    Raises:
        awaitable 內部拋出的原始例外
    """
    if _running_loop() is None:
        logger.debug(f"[AsyncBridge] asyncio.run: {type(awaitable).__name__}")
        return asyncio.run(_await(awaitable))

    logger.debug(f"[AsyncBridge] 已在 event loop 內，改用輔助執行緒: {type(awaitable).__name__}")
    result_box: list = []
    error_box: list[BaseException] = []

    def _run():
        try:
            result_box.append(asyncio.run(_await(awaitable)))
        except BaseException as e:  # noqa: BLE001
            error_box.append(e)

    worker = threading.Thread(target=_run, name="verifykit-async-bridge")
    worker.start()
    worker.join()

    if error_box:
        raise error_box[0]
    return result_box[0]
