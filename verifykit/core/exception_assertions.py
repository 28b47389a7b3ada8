"""
例外斷言 — 驗證某段程式碼「在這一行」拋出預期的例外

比 pytest.raises 多兩件事：
- 可以選擇精準型別或允許子類別
- 型別不符的例外原封不動往外拋，讓測試回報真正的錯誤

用法：
    from verifykit.core.exception_assertions import AssertExceptionThrown

    (
        AssertExceptionThrown
        .of_type(ValueError)
        .with_message("Limit cannot be greater than 10.")
        .when_executing(lambda: Foo(limit=11))
    )

    # 允許子類別 + 正規表達式
    err = (
        AssertExceptionThrown
        .of_type_or_subclass(LookupError)
        .with_message_matching(r"^no such key: .+$")
        .when_executing(lambda: repo.get("x"))
    )

    # 反向：不應拋出任何例外
    AssertExceptionNotThrown.when_executing(lambda: Foo(limit=5))
"""

from __future__ import annotations

import re
from typing import Any, Callable

from verifykit.core.exceptions import (
    ExpectedExceptionNotThrownError,
    UnexpectedExceptionThrownError,
    UsageError,
    qualified_name,
)
from verifykit.utils.allure_helper import attach_failure
from verifykit.utils.async_bridge import is_awaitable, run_sync
from verifykit.utils.logger import logger
from verifykit.utils.text import normalized

# 回傳 None 代表通過，否則回傳抱怨訊息
MessageChecker = Callable[[str], "str | None"]


def _execute(func: Callable[[], Any]) -> Any:
    """呼叫 func；回傳 awaitable 時阻塞到完成"""
    result = func()
    if is_awaitable(result):
        result = run_sync(result)
    return result


class AssertExceptionThrown:
    """
    可鏈式呼叫的例外斷言

    透過 of_type() / of_type_or_subclass() 建立，
    最多呼叫一次 with_message...()，最後以 when_executing() 執行驗證。
    """

    def __init__(self, exception_type: type[BaseException], allow_subclasses: bool = False):
        if not (isinstance(exception_type, type) and issubclass(exception_type, BaseException)):
            raise UsageError(f"exception_type 必須是例外類別，實際: {exception_type!r}")
        self._expected_type = exception_type
        self._allow_subclasses = allow_subclasses
        self._check_message: MessageChecker | None = None
        self._message_description = ""

    @classmethod
    def of_type(cls, exception_type: type[BaseException]) -> "AssertExceptionThrown":
        """預期拋出的例外型別必須完全等於 exception_type"""
        return cls(exception_type, allow_subclasses=False)

    @classmethod
    def of_type_or_subclass(cls, exception_type: type[BaseException]) -> "AssertExceptionThrown":
        """預期拋出 exception_type 或其子類別"""
        return cls(exception_type, allow_subclasses=True)

    # ── 訊息檢查 ──

    def with_message(self, expected: str) -> "AssertExceptionThrown":
        """訊息必須完全相同"""
        return self._set_check_message(
            lambda actual: None
            if normalized(actual) == normalized(expected)
            else f'Expected message "{expected}"',
            f"message == {expected!r}",
        )

    def with_message_starting_with(self, expected: str) -> "AssertExceptionThrown":
        """訊息必須以 expected 開頭"""
        return self._set_check_message(
            lambda actual: None
            if normalized(actual).startswith(normalized(expected))
            else f'Expected message starting with "{expected}"',
            f"message startswith {expected!r}",
        )

    def with_message_containing(self, expected: str) -> "AssertExceptionThrown":
        """訊息必須包含 expected"""
        return self._set_check_message(
            lambda actual: None
            if expected in actual
            else f'Expected message containing "{expected}"',
            f"message contains {expected!r}",
        )

    def with_message_matching(self, pattern: str | re.Pattern) -> "AssertExceptionThrown":
        """訊息必須符合正規表達式 (re.search)"""
        source = pattern.pattern if isinstance(pattern, re.Pattern) else pattern
        return self._set_check_message(
            lambda actual: None
            if re.search(pattern, actual)
            else f'Expected message matching "{source}"',
            f"message matches /{source}/",
        )

    # ── 執行 ──

    def when_executing(self, func: Callable[[], Any]) -> BaseException:
        """
        執行 func 並驗證拋出預期的例外。

        Args:
            func: 應該拋出例外的 callable；回傳 awaitable 時會等待完成

        Returns:
            捕捉到的例外

        Raises:
            ExpectedExceptionNotThrownError: 沒有拋出例外，或訊息不符
            其他例外: 型別不符時原封不動往外拋
        """
        logger.debug(
            f"[ExpectException] 預期 {self._describe_expectation()}"
            + (f", {self._message_description}" if self._message_description else "")
        )

        try:
            _execute(func)
        except BaseException as e:
            if not self._matches(e):
                logger.debug(f"[ExpectException] 型別不符，原樣拋出 {type(e).__name__}")
                raise

            if self._check_message is not None:
                message = str(e)
                complaint = self._check_message(message)
                if complaint:
                    self._fail(
                        f'{complaint}. Actual: "{message}".\n(message from {qualified_name(type(e))}.)',
                        actual=e,
                    )

            logger.debug(f"[ExpectException] 通過: {type(e).__name__}")
            return e

        self._fail(f"Expected {qualified_name(self._expected_type)} was not thrown.")

    # ── 內部 ──

    def _matches(self, error: BaseException) -> bool:
        actual_type = type(error)
        if actual_type is self._expected_type:
            return True
        return self._allow_subclasses and issubclass(actual_type, self._expected_type)

    def _describe_expectation(self) -> str:
        name = qualified_name(self._expected_type)
        return f"{name} 或其子類別" if self._allow_subclasses else name

    def _set_check_message(self, checker: MessageChecker, description: str) -> "AssertExceptionThrown":
        if self._check_message is not None:
            raise UsageError('Only one "with_message..." call is allowed.')
        self._check_message = checker
        self._message_description = description
        return self

    def _fail(self, message: str, actual: BaseException | None = None) -> None:
        error = ExpectedExceptionNotThrownError(message, expected_type=self._expected_type, actual=actual)
        logger.info(f"[ExpectException] 失敗: {message}")
        attach_failure(error)
        raise error


class AssertExceptionNotThrown:
    """驗證某段程式碼不拋出任何例外"""

    @staticmethod
    def when_executing(func: Callable[[], Any]) -> Any:
        """
        執行 func，拋出任何例外都視為失敗。

        Returns:
            func 的回傳值（awaitable 會等待完成）

        Raises:
            UnexpectedExceptionThrownError: func 拋出例外
        """
        try:
            return _execute(func)
        except Exception as e:
            error = UnexpectedExceptionThrownError(e)
            logger.info(f"[ExpectNoException] 失敗: {error}")
            attach_failure(error)
            raise error from e
