"""
Allure 報告整合輔助
驗證失敗時，把完整的失敗訊息附加到 Allure 報告。
未在 allure-pytest 執行環境中時，allure.attach 本身不做任何事。
"""

import allure

from verifykit.config.config import Config


def attach_text(text: str, name: str = "log") -> None:
    """將文字附加到 Allure 報告"""
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_failure(error: Exception, name: str | None = None) -> None:
    """將驗證失敗訊息附加到 Allure 報告（受 Config.ATTACH_FAILURES 控制）"""
    if not Config.ATTACH_FAILURES:
        return
    attach_text(str(error), name=name or type(error).__name__)
