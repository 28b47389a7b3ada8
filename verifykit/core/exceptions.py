"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 VerifyKitError)，
也可以精準 catch 子類別 (如 XmlTesterError)。

VerificationError 同時繼承 AssertionError，pytest 會把它當成一般的斷言失敗回報；
UsageError 代表呼叫端用錯 API，刻意不是 AssertionError。

Exception 樹：
    VerifyKitError
    ├── VerificationError (AssertionError)
    │   ├── ExpectedExceptionNotThrownError
    │   ├── UnexpectedExceptionThrownError
    │   └── XmlTesterError
    └── UsageError
"""


class VerifyKitError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── 驗證失敗 ──

class VerificationError(VerifyKitError, AssertionError):
    """驗證未通過（測試失敗）"""


class ExpectedExceptionNotThrownError(VerificationError):
    """預期的例外沒有拋出，或拋出了但訊息不符"""

    def __init__(self, message: str = "", expected_type: type | None = None, actual: BaseException | None = None):
        self.expected_type = expected_type
        self.actual = actual
        super().__init__(
            message,
            context={
                "expected_type": expected_type.__name__ if expected_type else "",
                "actual_type": type(actual).__name__ if actual is not None else "",
            },
        )


class UnexpectedExceptionThrownError(VerificationError):
    """預期不拋出例外，卻拋出了"""

    def __init__(self, original: BaseException):
        self.original = original
        super().__init__(
            f'Unexpected {qualified_name(type(original))} was thrown: "{original}".',
            context={"actual_type": type(original).__name__},
        )


class XmlTesterError(VerificationError):
    """XML 文件斷言失敗"""

    def __init__(self, message: str = "", path: str = "", attribute: str | None = None):
        self.path = path
        self.attribute = attribute
        super().__init__(message, context={"path": path, "attribute": attribute})


# ── 使用錯誤 ──

class UsageError(VerifyKitError):
    """API 使用方式錯誤（不是測試失敗）"""


def qualified_name(cls: type) -> str:
    """型別的完整名稱；builtins 只顯示類別名"""
    module = cls.__module__
    if module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"
