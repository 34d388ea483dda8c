"""
翻訳バックグラウンドワーカー
1回の翻訳リクエストをUIスレッド外で実行する
"""

import logging

from PySide6.QtCore import QThread, Signal

from app.core.models import InvalidTranslationRequest, TranslationResult
from app.core.translate import TranslationOrchestrator


class TranslationWorker(QThread):
    """翻訳バックグラウンドワーカー"""

    translation_completed = Signal(int, object)  # seq, TranslationResult
    translation_error = Signal(int, str)  # seq, error_message

    def __init__(self, orchestrator: TranslationOrchestrator, seq: int,
                 text: str, source_language: str, target_language: str):
        super().__init__()
        self.orchestrator = orchestrator
        self.seq = seq
        self.text = text
        self.source_language = source_language
        self.target_language = target_language

    def run(self):
        """翻訳実行"""
        try:
            result = self.orchestrator.translate(self.text, self.source_language, self.target_language)
            self.translation_completed.emit(self.seq, result)

        except InvalidTranslationRequest as e:
            self.translation_completed.emit(self.seq, TranslationResult.failure(str(e)))

        except Exception as e:
            logging.exception(f"翻訳ワーカーで予期しないエラー: {e}")
            self.translation_error.emit(self.seq, f"予期しないエラーが発生しました: {str(e)}")
