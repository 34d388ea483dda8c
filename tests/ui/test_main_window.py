"""
翻訳ウィンドウのUIテスト
"""

import threading
from unittest.mock import Mock

import pytest
from PySide6.QtCore import Qt
from PySide6.QtTest import QTest
from PySide6.QtWidgets import QApplication

from app.core.models import TranslationResult
from app.ui.main_window import COPIED_LABEL, COPY_LABEL, TranslatorWindow
from app.ui.translator_state import STATUS_DEMO, ToastType


def wait_for_workers(window, qapp):
    """実行中のワーカーを待機して結果のシグナルを処理"""
    for worker in list(window.workers):
        worker.wait()
    qapp.processEvents()
    qapp.processEvents()


class TestTranslatorWindow:
    """TranslatorWindowクラスのUIテスト"""

    @pytest.fixture
    def orchestrator(self):
        orchestrator = Mock()
        orchestrator.translate.return_value = TranslationResult.ok("Hola", detected_language="en")
        return orchestrator

    @pytest.fixture
    def window(self, qapp, orchestrator, app_settings):
        """翻訳ウィンドウのフィクスチャ"""
        window = TranslatorWindow(orchestrator=orchestrator, settings=app_settings)
        window.show()
        yield window
        window.close()

    def test_window_creation(self, window):
        """ウィンドウ作成のテスト"""
        assert window.windowTitle() == "テキスト翻訳ツール v1.0"
        assert window.source_combo.currentData() == "auto"
        assert window.target_combo.currentData() == "es"
        assert window.source_combo.count() == 20
        assert window.target_combo.count() == 19
        assert window.output_edit.isReadOnly()

    def test_translate_button_follows_input(self, window):
        assert not window.translate_btn.isEnabled()

        window.input_edit.setPlainText("Hello")
        assert window.translate_btn.isEnabled()
        assert window.state.input_text == "Hello"

        window.input_edit.setPlainText("   ")
        assert not window.translate_btn.isEnabled()

    def test_char_count_label(self, window):
        window.input_edit.setPlainText("a" * 4001)

        assert window.char_count_label.text() == "4001"
        assert "#ffc107" in window.char_count_label.styleSheet()

        window.input_edit.setPlainText("a" * 4501)
        assert "#dc3545" in window.char_count_label.styleSheet()

    def test_translation_round_trip(self, qapp, window, orchestrator):
        """翻訳ボタンから結果表示まで"""
        window.input_edit.setPlainText("  Hello  ")

        QTest.mouseClick(window.translate_btn, Qt.LeftButton)
        assert window.state.is_busy
        assert window.translate_btn.text() == "翻訳中..."

        wait_for_workers(window, qapp)

        orchestrator.translate.assert_called_once_with("Hello", "auto", "es")
        assert window.output_edit.toPlainText() == "Hola"
        assert window.status_label.text() == "EnglishからSpanishに翻訳しました"
        assert window.translate_btn.text() == "翻訳"
        assert window.toast_label.text() == "翻訳が完了しました！"
        assert window.workers == []

    def test_demo_result_status(self, qapp, window, orchestrator):
        orchestrator.translate.return_value = TranslationResult.ok(
            '[DEMO] Mock translation of: "Hello"', is_demo=True)
        window.input_edit.setPlainText("Hello")

        window.start_translation()
        wait_for_workers(window, qapp)

        assert window.status_label.text() == STATUS_DEMO
        assert "Hello" in window.output_edit.toPlainText()

    def test_unexpected_error_shows_failure(self, qapp, window, orchestrator):
        orchestrator.translate.side_effect = RuntimeError("boom")
        window.input_edit.setPlainText("Hello")

        window.start_translation()
        wait_for_workers(window, qapp)

        assert window.status_label.text() == "翻訳に失敗しました。もう一度お試しください。"
        assert window.toast_label.toast_type == ToastType.ERROR
        assert window.translate_btn.isEnabled()

    def test_stale_result_is_ignored(self, window):
        window.input_edit.setPlainText("Hello")
        old_seq = window.state.begin_translation()
        new_seq = window.state.begin_translation()

        window.on_translation_completed(old_seq, TranslationResult.ok("old"))
        assert window.output_edit.toPlainText() == ""

        window.on_translation_completed(new_seq, TranslationResult.ok("new"))
        assert window.output_edit.toPlainText() == "new"

    def test_target_change_during_translation_discards_result(self, qapp, window, orchestrator):
        """翻訳中に翻訳先を変えると、元の翻訳結果は表示されない"""
        release = threading.Event()

        def slow_translate(text, source, target):
            release.wait(5)
            return TranslationResult.ok("Hola", detected_language="en")

        orchestrator.translate.side_effect = slow_translate
        window.input_edit.setPlainText("Hello")
        window.start_translation()
        assert window.state.is_busy

        window.target_combo.setCurrentIndex(window.target_combo.findData("fr"))
        assert window.translate_btn.isEnabled()

        release.set()
        wait_for_workers(window, qapp)

        assert window.output_edit.toPlainText() == ""
        assert window.status_label.text() == ""
        assert window.state.target_language == "fr"

    def test_swap_from_auto_shows_error_toast(self, window):
        window.input_edit.setPlainText("Hello")

        QTest.mouseClick(window.swap_btn, Qt.LeftButton)

        assert window.source_combo.currentData() == "auto"
        assert window.toast_label.text() == "自動検出の言語とは入れ替えできません"
        assert window.toast_label.toast_type == ToastType.ERROR

    def test_swap_languages(self, window):
        window.source_combo.setCurrentIndex(window.source_combo.findData("en"))
        window.input_edit.setPlainText("Hello")
        window.on_translation_completed(window.state.begin_translation(), TranslationResult.ok("Hola"))

        window.swap_languages()

        assert window.source_combo.currentData() == "es"
        assert window.target_combo.currentData() == "en"
        assert window.input_edit.toPlainText() == "Hola"
        assert window.output_edit.toPlainText() == "Hello"

    def test_language_change_clears_output(self, window):
        window.input_edit.setPlainText("Hello")
        window.on_translation_completed(window.state.begin_translation(), TranslationResult.ok("Hola"))

        window.target_combo.setCurrentIndex(window.target_combo.findData("fr"))

        assert window.state.target_language == "fr"
        assert window.output_edit.toPlainText() == ""

    def test_copy_to_clipboard(self, window):
        window.input_edit.setPlainText("Hello")
        window.on_translation_completed(window.state.begin_translation(), TranslationResult.ok("Hola"))

        window.copy_to_clipboard()

        assert QApplication.clipboard().text() == "Hola"
        assert window.copy_btn.text() == COPIED_LABEL
        assert window.toast_label.text() == "翻訳をクリップボードにコピーしました！"

        window._copy_feedback_timer.timeout.emit()
        assert window.copy_btn.text() == COPY_LABEL

    def test_copy_without_output(self, window):
        window.copy_to_clipboard()

        assert window.copy_btn.text() == COPY_LABEL
        assert window.toast_label.text() == "コピーする翻訳がありません"

    def test_clear_input(self, window):
        window.input_edit.setPlainText("Hello")
        window.on_translation_completed(window.state.begin_translation(), TranslationResult.ok("Hola"))

        QTest.mouseClick(window.clear_btn, Qt.LeftButton)

        assert window.input_edit.toPlainText() == ""
        assert window.output_edit.toPlainText() == ""
        assert not window.translate_btn.isEnabled()

    def test_toast_dismiss(self, window):
        window.copy_to_clipboard()
        assert window.toast_label.isVisible()

        window.toast_label.dismiss()
        assert not window.toast_label.isVisible()
