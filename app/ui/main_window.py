"""
メインウィンドウの実装
翻訳元/翻訳先の選択、入力・出力テキスト、ステータスとトースト通知
"""

import sys
import logging
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QApplication, QWidget, QHBoxLayout, QVBoxLayout,
    QPushButton, QComboBox, QLabel, QPlainTextEdit, QMessageBox
)
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QKeySequence, QShortcut

from app.core.languages import get_language_name, get_source_languages, get_target_languages
from app.core.models import TranslationResult
from app.core.settings_manager import AppSettings, get_settings_manager
from app.core.translate import TranslationOrchestrator
from .translation_worker import TranslationWorker
from .translator_state import CharCountLevel, Toast, ToastType, TranslatorState

CHAR_COUNT_COLORS = {
    CharCountLevel.NORMAL: "#999",
    CharCountLevel.WARNING: "#ffc107",
    CharCountLevel.DANGER: "#dc3545",
}

TOAST_STYLES = {
    ToastType.SUCCESS: "background-color: #28a745; color: white; padding: 8px; border-radius: 4px;",
    ToastType.ERROR: "background-color: #dc3545; color: white; padding: 8px; border-radius: 4px;",
}

TRANSLATE_LABEL = "翻訳"
TRANSLATING_LABEL = "翻訳中..."
COPY_LABEL = "コピー"
COPIED_LABEL = "✓"


class ToastLabel(QLabel):
    """一定時間で自動的に消えるトースト通知"""

    def __init__(self, parent: Optional[QWidget] = None, duration_ms: int = 3000):
        super().__init__(parent)
        self.duration_ms = duration_ms
        self.toast_type: Optional[ToastType] = None
        self.setAlignment(Qt.AlignCenter)
        self.setVisible(False)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.dismiss)

    def show_toast(self, toast: Toast):
        """トーストを表示（表示中なら置き換えてタイマーを再開）"""
        self.toast_type = toast.toast_type
        self.setText(toast.message)
        self.setStyleSheet(TOAST_STYLES[toast.toast_type])
        self.setVisible(True)
        self._hide_timer.start(self.duration_ms)

    def dismiss(self):
        self.setVisible(False)
        self.toast_type = None


class TranslatorWindow(QMainWindow):
    """メインウィンドウクラス"""

    def __init__(self, orchestrator: Optional[TranslationOrchestrator] = None,
                 settings: Optional[AppSettings] = None):
        super().__init__()
        self.settings = settings or get_settings_manager().load_settings()
        self.orchestrator = orchestrator or TranslationOrchestrator.from_settings(self.settings)

        ui = self.settings.ui
        self.state = TranslatorState(
            source_language=ui.default_source,
            target_language=ui.default_target,
            char_warning=ui.char_warning,
            char_danger=ui.char_danger,
        )

        # 実行中のワーカー（完了まで参照を保持）
        self.workers: List[TranslationWorker] = []

        self.init_ui()
        self.connect_signals()
        self.setup_shortcuts()
        self.refresh_view()

    def init_ui(self):
        """UIの初期化"""
        self.setWindowTitle("テキスト翻訳ツール v1.0")
        self.resize(900, 560)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        # 言語選択
        lang_layout = QHBoxLayout()
        self.source_combo = QComboBox()
        for code in get_source_languages():
            self.source_combo.addItem(get_language_name(code), code)
        lang_layout.addWidget(self.source_combo)

        self.swap_btn = QPushButton("⇄")
        self.swap_btn.setToolTip("言語を入れ替え (Ctrl+Shift+S)")
        lang_layout.addWidget(self.swap_btn)

        self.target_combo = QComboBox()
        for code in get_target_languages():
            self.target_combo.addItem(get_language_name(code), code)
        lang_layout.addWidget(self.target_combo)
        layout.addLayout(lang_layout)

        # 入力・出力
        text_layout = QHBoxLayout()

        input_layout = QVBoxLayout()
        self.input_edit = QPlainTextEdit()
        self.input_edit.setPlaceholderText("翻訳するテキストを入力...")
        input_layout.addWidget(self.input_edit)

        input_footer = QHBoxLayout()
        self.char_count_label = QLabel("0")
        input_footer.addWidget(self.char_count_label)
        input_footer.addStretch()
        self.clear_btn = QPushButton("クリア")
        self.clear_btn.setToolTip("入力をクリア (Ctrl+Shift+X)")
        input_footer.addWidget(self.clear_btn)
        input_layout.addLayout(input_footer)
        text_layout.addLayout(input_layout)

        output_layout = QVBoxLayout()
        self.output_edit = QPlainTextEdit()
        self.output_edit.setReadOnly(True)
        self.output_edit.setPlaceholderText("翻訳結果")
        output_layout.addWidget(self.output_edit)

        output_footer = QHBoxLayout()
        output_footer.addStretch()
        self.copy_btn = QPushButton(COPY_LABEL)
        self.copy_btn.setToolTip("翻訳をコピー (Ctrl+Shift+C)")
        output_footer.addWidget(self.copy_btn)
        output_layout.addLayout(output_footer)
        text_layout.addLayout(output_layout)

        layout.addLayout(text_layout)

        # 実行ボタン
        self.translate_btn = QPushButton(TRANSLATE_LABEL)
        self.translate_btn.setToolTip("翻訳 (Ctrl+Enter)")
        layout.addWidget(self.translate_btn)

        # ステータス・トースト
        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        self.toast_label = ToastLabel(self, self.settings.ui.toast_duration_ms)
        layout.addWidget(self.toast_label)

        self._copy_feedback_timer = QTimer(self)
        self._copy_feedback_timer.setSingleShot(True)
        self._copy_feedback_timer.timeout.connect(lambda: self.copy_btn.setText(COPY_LABEL))

    def connect_signals(self):
        """シグナルの接続"""
        self.input_edit.textChanged.connect(self.on_input_changed)
        self.source_combo.currentIndexChanged.connect(self.on_source_changed)
        self.target_combo.currentIndexChanged.connect(self.on_target_changed)
        self.translate_btn.clicked.connect(self.start_translation)
        self.swap_btn.clicked.connect(self.swap_languages)
        self.clear_btn.clicked.connect(self.clear_input)
        self.copy_btn.clicked.connect(self.copy_to_clipboard)

    def setup_shortcuts(self):
        """ショートカットキーの設定"""
        # Ctrl+Enter: 翻訳
        self.translate_shortcut = QShortcut(QKeySequence("Ctrl+Return"), self)
        self.translate_shortcut.activated.connect(self.start_translation)

        # Ctrl+K: 入力欄にフォーカス
        self.focus_shortcut = QShortcut(QKeySequence("Ctrl+K"), self)
        self.focus_shortcut.activated.connect(self.input_edit.setFocus)

        # Ctrl+Shift+C: コピー
        self.copy_shortcut = QShortcut(QKeySequence("Ctrl+Shift+C"), self)
        self.copy_shortcut.activated.connect(self.copy_to_clipboard)

        # Ctrl+Shift+X: クリア
        self.clear_shortcut = QShortcut(QKeySequence("Ctrl+Shift+X"), self)
        self.clear_shortcut.activated.connect(self.clear_input)

        # Ctrl+Shift+S: 言語入れ替え
        self.swap_shortcut = QShortcut(QKeySequence("Ctrl+Shift+S"), self)
        self.swap_shortcut.activated.connect(self.swap_languages)

    def refresh_view(self):
        """状態をウィジェットに反映"""
        state = self.state

        for widget in (self.source_combo, self.target_combo, self.input_edit):
            widget.blockSignals(True)
        try:
            self.source_combo.setCurrentIndex(self.source_combo.findData(state.source_language))
            self.target_combo.setCurrentIndex(self.target_combo.findData(state.target_language))
            if self.input_edit.toPlainText() != state.input_text:
                self.input_edit.setPlainText(state.input_text)
        finally:
            for widget in (self.source_combo, self.target_combo, self.input_edit):
                widget.blockSignals(False)
        self.output_edit.setPlainText(state.output_text)
        self.status_label.setText(state.status_text)

        self.char_count_label.setText(str(state.char_count))
        self.char_count_label.setStyleSheet(f"color: {CHAR_COUNT_COLORS[state.char_count_level()]};")

        self.translate_btn.setEnabled(state.can_translate())
        self.translate_btn.setText(TRANSLATING_LABEL if state.is_busy else TRANSLATE_LABEL)

        for toast in state.pop_toasts():
            self.toast_label.show_toast(toast)

    def on_input_changed(self):
        self.state.set_input_text(self.input_edit.toPlainText())
        self.refresh_view()

    def on_source_changed(self, index: int):
        self.state.set_source_language(self.source_combo.itemData(index))
        self.refresh_view()

    def on_target_changed(self, index: int):
        self.state.set_target_language(self.target_combo.itemData(index))
        self.refresh_view()

    def start_translation(self):
        """翻訳を開始"""
        if self.state.is_busy:
            return

        seq = self.state.begin_translation()
        self.refresh_view()
        if seq is None:
            return

        worker = TranslationWorker(
            self.orchestrator,
            seq,
            self.state.input_text.strip(),
            self.state.source_language,
            self.state.target_language,
        )
        worker.translation_completed.connect(self.on_translation_completed)
        worker.translation_error.connect(self.on_translation_error)
        worker.finished.connect(self._release_worker)
        self.workers.append(worker)
        worker.start()

    def _release_worker(self):
        worker = self.sender()
        if worker in self.workers:
            self.workers.remove(worker)
        worker.deleteLater()

    def on_translation_completed(self, seq: int, result: TranslationResult):
        """翻訳完了"""
        if self.state.apply_result(seq, result):
            self.refresh_view()

    def on_translation_error(self, seq: int, error_message: str):
        """翻訳エラー処理"""
        if self.state.apply_error(seq, error_message):
            self.refresh_view()

    def swap_languages(self):
        self.state.swap_languages()
        self.refresh_view()

    def clear_input(self):
        self.state.clear_input()
        self.refresh_view()
        self.input_edit.setFocus()

    def copy_to_clipboard(self):
        """翻訳結果をクリップボードにコピー"""
        text = self.state.text_to_copy()
        if text is not None:
            QApplication.clipboard().setText(text)
            self.state.show_toast("翻訳をクリップボードにコピーしました！")
            self.copy_btn.setText(COPIED_LABEL)
            self._copy_feedback_timer.start(self.settings.ui.copy_feedback_ms)
        self.refresh_view()

    def closeEvent(self, event):
        """終了時に実行中のワーカーを待機"""
        for worker in list(self.workers):
            worker.wait()
        super().closeEvent(event)


def main():
    """メイン関数"""
    try:
        # ロギング設定
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Qt のメッセージハンドラ設定
        from PySide6.QtCore import qInstallMessageHandler, QtMsgType

        def qt_message_handler(mode, context, message):
            if mode == QtMsgType.QtCriticalMsg or mode == QtMsgType.QtFatalMsg:
                logging.error(f"Qt Error: {message}")
            elif mode == QtMsgType.QtWarningMsg:
                logging.warning(f"Qt Warning: {message}")
            else:
                logging.info(f"Qt Info: {message}")

        qInstallMessageHandler(qt_message_handler)

        app = QApplication(sys.argv)
        app.setApplicationName("テキスト翻訳ツール")
        app.setApplicationVersion("1.0.0")

        settings_manager = get_settings_manager()
        settings = settings_manager.load_settings()
        for error in settings_manager.validate_settings(settings):
            logging.warning(f"設定値の警告: {error}")

        window = TranslatorWindow(settings=settings)
        window.show()

        sys.exit(app.exec())

    except Exception as e:
        import traceback
        error_msg = f"アプリケーション起動エラー: {str(e)}\n\n{traceback.format_exc()}"
        logging.critical(error_msg)

        if QApplication.instance() is not None:
            QMessageBox.critical(None, "起動エラー", error_msg)
        else:
            print(error_msg, file=sys.stderr)

        sys.exit(1)
