"""
core — 斷言核心

統一匯出所有核心元件，方便外部 import。

用法：
    from verifykit.core import AssertExceptionThrown, XmlTester, ActionTester
    from verifykit.core import XmlTesterError, UsageError
"""

from verifykit.core.action_tester import ActionInvoker, ActionTester
from verifykit.core.exception_assertions import AssertExceptionNotThrown, AssertExceptionThrown
from verifykit.core.exceptions import (
    ExpectedExceptionNotThrownError,
    UnexpectedExceptionThrownError,
    UsageError,
    VerificationError,
    VerifyKitError,
    XmlTesterError,
)
from verifykit.core.xml_tester import XmlTester

__all__ = [
    # Assertions
    "AssertExceptionThrown",
    "AssertExceptionNotThrown",
    "XmlTester",
    "ActionTester",
    "ActionInvoker",
    # Exceptions
    "VerifyKitError",
    "VerificationError",
    "ExpectedExceptionNotThrownError",
    "UnexpectedExceptionThrownError",
    "XmlTesterError",
    "UsageError",
]
