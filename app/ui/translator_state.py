"""
翻訳画面の表示状態
ウィジェットから切り離した純粋な状態クラス。メインウィンドウはこの状態を
読み書きして表示に反映するだけにする。
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from app.core.languages import AUTO_DETECT, get_language_name
from app.core.models import InvalidTranslationRequest, TranslationRequest, TranslationResult


class ToastType(Enum):
    """トースト種別"""
    SUCCESS = "success"
    ERROR = "error"


class CharCountLevel(Enum):
    """文字数表示レベル"""
    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"


@dataclass
class Toast:
    """トースト通知"""
    message: str
    toast_type: ToastType = ToastType.SUCCESS


STATUS_TRANSLATING = "翻訳中..."
STATUS_DEMO = "デモモードを使用中 - 翻訳APIが利用できません"
STATUS_FAILED = "翻訳に失敗しました。もう一度お試しください。"


@dataclass
class TranslatorState:
    """翻訳画面の状態"""

    source_language: str = AUTO_DETECT
    target_language: str = "es"
    input_text: str = ""
    output_text: str = ""
    status_text: str = ""
    is_busy: bool = False
    char_warning: int = 4000
    char_danger: int = 4500
    # 発行済みリクエストの最新番号（古い応答の破棄に使う）
    request_seq: int = 0
    # 実行中リクエストの (翻訳元, 翻訳先)
    pending_languages: Optional[Tuple[str, str]] = None
    toasts: List[Toast] = field(default_factory=list)

    # --- 入力状態 ---------------------------------------------------------

    @property
    def char_count(self) -> int:
        return len(self.input_text)

    def char_count_level(self) -> CharCountLevel:
        """文字数に応じた表示レベル"""
        if self.char_count > self.char_danger:
            return CharCountLevel.DANGER
        if self.char_count > self.char_warning:
            return CharCountLevel.WARNING
        return CharCountLevel.NORMAL

    def can_translate(self) -> bool:
        """翻訳ボタンを有効にできるか"""
        has_text = bool(self.input_text.strip())
        has_languages = bool(self.source_language) and bool(self.target_language)
        not_same = self.source_language != self.target_language or self.source_language == AUTO_DETECT
        return has_text and has_languages and not_same and not self.is_busy

    def set_input_text(self, text: str):
        """入力テキストを更新（出力はクリア）"""
        self.input_text = text
        self._discard_pending()
        self.clear_output()

    def set_source_language(self, lang_code: str):
        self.source_language = lang_code
        self._discard_pending()
        if self.input_text.strip():
            self.clear_output()

    def set_target_language(self, lang_code: str):
        self.target_language = lang_code
        self._discard_pending()
        if self.input_text.strip():
            self.clear_output()

    def clear_input(self):
        self.input_text = ""
        self._discard_pending()
        self.clear_output()

    def clear_output(self):
        self.output_text = ""
        self.status_text = ""

    # --- 通知 -------------------------------------------------------------

    def show_toast(self, message: str, toast_type: ToastType = ToastType.SUCCESS) -> Toast:
        toast = Toast(message, toast_type)
        self.toasts.append(toast)
        return toast

    def pop_toasts(self) -> List[Toast]:
        """未表示のトーストを取り出す"""
        toasts, self.toasts = self.toasts, []
        return toasts

    # --- 翻訳サイクル -------------------------------------------------------

    def begin_translation(self) -> Optional[int]:
        """
        翻訳を開始できるか検証し、リクエスト番号を発行

        Returns:
            リクエスト番号。入力が不正な場合はNone（エラートーストを追加）
        """
        request = TranslationRequest(self.input_text.strip(), self.source_language, self.target_language)
        try:
            request.validate()
        except InvalidTranslationRequest as e:
            logging.info(f"翻訳リクエストを拒否: {e.error_code}")
            self.show_toast(str(e), ToastType.ERROR)
            return None

        self.request_seq += 1
        self.is_busy = True
        self.pending_languages = (self.source_language, self.target_language)
        self.output_text = ""
        self.status_text = STATUS_TRANSLATING
        return self.request_seq

    def is_current(self, seq: int) -> bool:
        return seq == self.request_seq

    def _discard_pending(self):
        """実行中のリクエストがあれば、その結果を破棄対象にする"""
        if not self.is_busy:
            return
        logging.debug(f"入力変更のため実行中の翻訳を破棄: seq={self.request_seq}")
        self.request_seq += 1
        self.is_busy = False
        self.pending_languages = None
        self.status_text = ""

    def apply_result(self, seq: int, result: TranslationResult) -> bool:
        """
        翻訳結果を反映

        Returns:
            反映した場合True。古いリクエストの結果は破棄してFalse
        """
        if not self.is_current(seq):
            logging.debug(f"古い翻訳結果を破棄: seq={seq} (最新={self.request_seq})")
            return False

        self.is_busy = False
        source, target = self.pending_languages or (self.source_language, self.target_language)
        self.pending_languages = None

        if not result.success:
            self._apply_failure(result.error_message)
            return True

        self.output_text = result.translated_text
        target_name = get_language_name(target)

        if result.no_translation_needed:
            self.status_text = f"テキストはすでに{target_name}です - 翻訳は不要です"
            self.show_toast("翻訳は不要です！")
        elif result.is_demo:
            self.status_text = STATUS_DEMO
            self.show_toast("デモ翻訳が完了しました！")
        elif result.detected_language:
            self.status_text = (
                f"{get_language_name(result.detected_language)}から{target_name}に翻訳しました"
            )
            self.show_toast("翻訳が完了しました！")
        else:
            self.status_text = (
                f"{get_language_name(source)}から{target_name}に翻訳しました"
            )
            self.show_toast("翻訳が完了しました！")

        return True

    def apply_error(self, seq: int, error_message: str) -> bool:
        """翻訳処理中の例外を反映"""
        if not self.is_current(seq):
            return False

        self.is_busy = False
        self.pending_languages = None
        self._apply_failure(error_message)
        return True

    def _apply_failure(self, error_message: Optional[str]):
        logging.error(f"翻訳エラー: {error_message}")
        self.output_text = ""
        self.status_text = STATUS_FAILED
        self.show_toast(STATUS_FAILED, ToastType.ERROR)

    # --- 入れ替え・コピー -----------------------------------------------------

    def swap_languages(self) -> bool:
        """
        言語と入出力テキストを入れ替え

        Returns:
            入れ替えた場合True。翻訳元が自動検出の場合は何もせずFalse
        """
        if self.source_language == AUTO_DETECT:
            self.show_toast("自動検出の言語とは入れ替えできません", ToastType.ERROR)
            return False

        self._discard_pending()
        old_source, old_target = self.source_language, self.target_language

        self.source_language, self.target_language = old_target, old_source
        self.input_text, self.output_text = self.output_text, self.input_text

        if self.input_text.strip():
            self.status_text = (
                f"{get_language_name(old_target)} ↔ {get_language_name(old_source)} を入れ替えました"
            )
        return True

    def text_to_copy(self) -> Optional[str]:
        """コピー対象の翻訳文（空の場合はエラートーストを追加してNone）"""
        text = self.output_text.strip()
        if not text:
            self.show_toast("コピーする翻訳がありません", ToastType.ERROR)
            return None
        return text
