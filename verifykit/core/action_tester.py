"""
Action Tester — 呼叫受測物件的 action 方法並取得結果

同步與非同步 (async def / 回傳 awaitable) 的 action 一律用同一種方式測：
invoke() 會等非同步計算完成後才回傳，下游的斷言永遠拿到最終結果。

用法：
    from verifykit.core.action_tester import ActionTester

    tester = ActionTester(OrderController(repo))

    result = tester.action(lambda c: c.index).invoke()
    result = tester.action("detail", order_id=42).invoke()       # 方法名 + 參數
    result = tester.action(OrderController.list_async).invoke()  # async 方法也一樣
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Generic, TypeVar

from verifykit.core.exceptions import UsageError
from verifykit.utils.async_bridge import is_awaitable, run_sync
from verifykit.utils.logger import logger

TUnit = TypeVar("TUnit")

_NOT_INVOKED = object()


class ActionInvoker:
    """包裝一個零參數的 action，呼叫並回傳已完成的結果"""

    def __init__(self, action: Callable[[], Any], name: str = ""):
        self._action = action
        self._name = name or getattr(action, "__name__", repr(action))
        self._result: Any = _NOT_INVOKED

    @property
    def name(self) -> str:
        return self._name

    @property
    def result(self) -> Any:
        """最近一次 invoke() 的結果"""
        if self._result is _NOT_INVOKED:
            raise UsageError(f"Action '{self._name}' 尚未呼叫 invoke()")
        return self._result

    def invoke(self) -> Any:
        """
        呼叫 action；回傳 awaitable 時阻塞到完成。

        Returns:
            action 的最終結果

        Raises:
            action（或其非同步計算）拋出的原始例外
        """
        logger.debug(f"[ActionTester] 呼叫 {self._name}")
        result = self._action()

        if is_awaitable(result):
            logger.debug(f"[ActionTester] {self._name} 回傳 awaitable，等待完成")
            result = run_sync(result)

        self._result = result
        return result


class ActionTester(Generic[TUnit]):
    """受測物件 (controller / service) 的 action 測試入口"""

    def __init__(self, unit: TUnit):
        self._unit = unit

    @property
    def unit(self) -> TUnit:
        return self._unit

    def action(self, selector: str | Callable[..., Any], *args: Any, **kwargs: Any) -> ActionInvoker:
        """
        指定要測試的 action。

        Args:
            selector: 方法名稱、類別上的函式 (Controller.index)、
                      或 lambda unit: unit.index
            args / kwargs: 呼叫 action 時帶入的參數

        Returns:
            ActionInvoker

        Raises:
            UsageError: 找不到方法或不是 callable
        """
        method = self._resolve(selector)
        name = f"{type(self._unit).__name__}.{getattr(method, '__name__', 'action')}"

        if args or kwargs:
            method = functools.partial(method, *args, **kwargs)

        logger.debug(f"[ActionTester] 解析 action: {name}")
        return ActionInvoker(method, name)

    def _resolve(self, selector: str | Callable[..., Any]) -> Callable[..., Any]:
        unit_type = type(self._unit)

        if isinstance(selector, str):
            try:
                method = getattr(self._unit, selector)
            except AttributeError:
                raise UsageError(f"{unit_type.__name__} 沒有方法 '{selector}'") from None
        elif inspect.ismethod(selector):
            # 已綁定的方法 (controller.index)：直接使用
            method = selector
        elif inspect.isfunction(selector) and self._is_class_function(unit_type, selector):
            # 類別上的函式：綁定到受測物件
            method = selector.__get__(self._unit, unit_type)
        elif inspect.isfunction(selector) and getattr(unit_type, selector.__name__, None) is selector:
            # staticmethod：不綁定
            method = selector
        elif callable(selector):
            method = selector(self._unit)
        else:
            raise UsageError(f"無法解析的 action: {selector!r}")

        if not callable(method):
            raise UsageError(f"action 不是 callable: {method!r}")
        return method

    @staticmethod
    def _is_class_function(unit_type: type, func: Callable[..., Any]) -> bool:
        """func 是否為類別（含父類別）上定義的一般實例方法"""
        try:
            attr = inspect.getattr_static(unit_type, func.__name__)
        except AttributeError:
            return False
        return attr is func
