"""
字串比對輔助
"""

import unicodedata


def normalized(text: str) -> str:
    """NFC 正規化，讓組合字元與預組字元比對結果一致"""
    return unicodedata.normalize("NFC", text)
