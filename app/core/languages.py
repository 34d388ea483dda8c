"""
対応言語コードと表示名の定義
"""

from typing import Dict, List

# 自動検出を表すセンチネル（APIには送信しない）
AUTO_DETECT = "auto"

# 言語コード -> 表示名
LANGUAGE_NAMES: Dict[str, str] = {
    AUTO_DETECT: "Auto Detect",
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ar": "Arabic",
    "hi": "Hindi",
    "nl": "Dutch",
    "sv": "Swedish",
    "no": "Norwegian",
    "da": "Danish",
    "fi": "Finnish",
    "pl": "Polish",
    "tr": "Turkish",
}


def get_language_name(lang_code: str) -> str:
    """
    言語コードから表示名を取得

    Args:
        lang_code: 言語コード

    Returns:
        表示名（未知の場合は言語コードそのまま）
    """
    return LANGUAGE_NAMES.get(lang_code, lang_code)


def is_language_supported(lang_code: str) -> bool:
    """言語がサポートされているかチェック（autoを含む）"""
    return lang_code in LANGUAGE_NAMES


def get_source_languages() -> List[str]:
    """翻訳元に選択できる言語コード一覧"""
    return list(LANGUAGE_NAMES.keys())


def get_target_languages() -> List[str]:
    """翻訳先に選択できる言語コード一覧（autoを除く）"""
    return [code for code in LANGUAGE_NAMES if code != AUTO_DETECT]
