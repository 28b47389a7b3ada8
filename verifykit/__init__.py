"""
verifykit — 單元測試斷言工具

- AssertExceptionThrown: 驗證拋出預期的例外（型別 / 子類別 / 訊息）
- XmlTester: 以路徑查詢驗證 XML 文件的元素與屬性
- ActionTester: 呼叫受測物件的 action（同步或非同步）並取得結果
"""

from verifykit.core import (
    ActionInvoker,
    ActionTester,
    AssertExceptionNotThrown,
    AssertExceptionThrown,
    ExpectedExceptionNotThrownError,
    UnexpectedExceptionThrownError,
    UsageError,
    VerificationError,
    VerifyKitError,
    XmlTester,
    XmlTesterError,
)

__version__ = "0.1.0"

__all__ = [
    "AssertExceptionThrown",
    "AssertExceptionNotThrown",
    "XmlTester",
    "ActionTester",
    "ActionInvoker",
    "VerifyKitError",
    "VerificationError",
    "ExpectedExceptionNotThrownError",
    "UnexpectedExceptionThrownError",
    "XmlTesterError",
    "UsageError",
]
