"""
pytest 全域 fixtures

提供：
- 框架初始化：驗證 verifykit 設定
- 斷言工具 fixtures（xml_tester / assert_raises / action_tester）
"""

import pytest

from verifykit.config.config import Config
from verifykit.utils.logger import logger


# ── 框架初始化 ──

def pytest_configure(config):
    """pytest 啟動時：驗證設定並輸出警告"""
    for warning in Config.validate():
        logger.warning(f"[Config] {warning}")


# ── 斷言工具 ──

@pytest.fixture
def xml_tester():
    """XmlTester 工廠：xml_tester(xml_string, exception_prefix=None)"""
    from verifykit.core.xml_tester import XmlTester
    return XmlTester


@pytest.fixture
def assert_raises():
    """AssertExceptionThrown 類別，使用 assert_raises.of_type(...)"""
    from verifykit.core.exception_assertions import AssertExceptionThrown
    return AssertExceptionThrown


@pytest.fixture
def action_tester():
    """ActionTester 工廠：action_tester(controller).action(...).invoke()"""
    from verifykit.core.action_tester import ActionTester
    return ActionTester
