"""
データモデル定義
翻訳リクエスト・翻訳結果・リモート呼び出し結果
"""

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any

from app.core.languages import AUTO_DETECT, is_language_supported


class InvalidTranslationRequest(ValueError):
    """翻訳前に拒否される不正な入力"""

    def __init__(self, message: str, error_code: str = ""):
        super().__init__(message)
        self.error_code = error_code


@dataclass
class TranslationRequest:
    """翻訳リクエストのデータクラス"""
    text: str
    source_language: str = AUTO_DETECT
    target_language: str = "es"

    @property
    def is_auto_detect(self) -> bool:
        return self.source_language == AUTO_DETECT

    def validate(self) -> None:
        """入力を検証し、不正な場合は InvalidTranslationRequest を送出"""
        if not self.text or not self.text.strip():
            raise InvalidTranslationRequest("翻訳するテキストを入力してください", "EMPTY_TEXT")

        for lang_code in (self.source_language, self.target_language):
            if not is_language_supported(lang_code):
                raise InvalidTranslationRequest(
                    f"未対応の言語コード: {lang_code}", "UNSUPPORTED_LANGUAGE"
                )

        if self.target_language == AUTO_DETECT:
            raise InvalidTranslationRequest(
                "翻訳先に自動検出は指定できません", "UNSUPPORTED_LANGUAGE"
            )

        if self.source_language == self.target_language:
            raise InvalidTranslationRequest("翻訳元と翻訳先の言語が同じです", "SAME_LANGUAGE")

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return asdict(self)


@dataclass
class TranslationResult:
    """
    翻訳結果

    success=True の場合、no_translation_needed と is_demo は高々一方のみが立つ。
    success=False の場合は error_message のみ意味を持つ。
    """
    success: bool
    translated_text: str = ""
    detected_language: Optional[str] = None
    no_translation_needed: bool = False
    is_demo: bool = False
    error_message: Optional[str] = None

    def __post_init__(self):
        if self.no_translation_needed and self.is_demo:
            raise ValueError("no_translation_needed と is_demo は同時に設定できません")

    @classmethod
    def ok(
        cls,
        translated_text: str,
        detected_language: Optional[str] = None,
        no_translation_needed: bool = False,
        is_demo: bool = False,
    ) -> 'TranslationResult':
        """成功結果を作成"""
        return cls(
            success=True,
            translated_text=translated_text,
            detected_language=detected_language,
            no_translation_needed=no_translation_needed,
            is_demo=is_demo,
        )

    @classmethod
    def failure(cls, error_message: str) -> 'TranslationResult':
        """失敗結果を作成"""
        return cls(success=False, error_message=error_message)

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return asdict(self)


@dataclass
class ServiceResult:
    """リモート翻訳サービス呼び出しの結果（Ok または ServiceError）"""
    translated_text: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.translated_text is not None

    @classmethod
    def success(cls, translated_text: str) -> 'ServiceResult':
        return cls(translated_text=translated_text)

    @classmethod
    def service_error(cls, error: Exception) -> 'ServiceResult':
        return cls(error=error)
