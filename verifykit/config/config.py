"""
設定管理模組
統一管理 verifykit 的日誌、訊息前綴、報告附件等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。
"""

import logging
import os
from pathlib import Path

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class ConfigValidationError(Exception):
    """設定值驗證失敗"""

    def __init__(self, errors: list[str]):
        self.errors = errors
        msg = "verifykit 設定驗證失敗:\n" + "\n".join(f"  - {e}" for e in errors)
        super().__init__(msg)


class Config:
    """框架全域設定"""

    # 日誌
    LOG_LEVEL = os.getenv("VERIFYKIT_LOG_LEVEL", "WARNING").upper()
    LOG_DIR = Path(os.environ["VERIFYKIT_LOG_DIR"]) if os.getenv("VERIFYKIT_LOG_DIR") else None
    LOG_JSON = _env_flag("VERIFYKIT_LOG_JSON", "0")

    # XmlTester 預設的失敗訊息前綴
    XML_EXCEPTION_PREFIX = os.getenv("VERIFYKIT_XML_PREFIX", "")

    # 驗證失敗時附加訊息到 Allure 報告
    ATTACH_FAILURES = _env_flag("VERIFYKIT_ATTACH_FAILURES", "1")

    @classmethod
    def log_level(cls) -> int:
        """LOG_LEVEL 對應的 logging 等級，無效值退回 WARNING"""
        return getattr(logging, cls.LOG_LEVEL, logging.WARNING)

    @classmethod
    def validate(cls) -> list[str]:
        """
        驗證目前設定。

        Returns:
            警告訊息列表

        Raises:
            ConfigValidationError: 設定值無效時拋出
        """
        errors: list[str] = []
        warnings: list[str] = []

        if cls.LOG_LEVEL not in _VALID_LOG_LEVELS:
            errors.append(
                f"無效的 VERIFYKIT_LOG_LEVEL: {cls.LOG_LEVEL} (可用: {', '.join(_VALID_LOG_LEVELS)})"
            )

        if cls.LOG_DIR is not None and cls.LOG_DIR.exists() and not cls.LOG_DIR.is_dir():
            errors.append(f"VERIFYKIT_LOG_DIR 不是目錄: {cls.LOG_DIR}")

        if cls.LOG_JSON and cls.LOG_DIR is None:
            warnings.append("VERIFYKIT_LOG_JSON 已啟用，但未設定 VERIFYKIT_LOG_DIR，JSON 日誌不會輸出")

        if errors:
            raise ConfigValidationError(errors)

        return warnings
