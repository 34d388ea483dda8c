#!/usr/bin/env python3
"""
テキスト翻訳ツール メインエントリーポイント
"""

import argparse
import sys
import logging
import traceback
from pathlib import Path

APP_VERSION = "1.0.0"
LOG_FILE_NAME = "translator-debug.log"


def parse_args(argv=None) -> argparse.Namespace:
    """起動オプションの解析"""
    parser = argparse.ArgumentParser(prog="text-translator", description="テキスト翻訳ツール")
    parser.add_argument("--log-dir", type=Path, default=None,
                        help=f"{LOG_FILE_NAME} の出力先（既定: カレントディレクトリ）")
    parser.add_argument("--reset-settings", action="store_true",
                        help="起動前に設定をデフォルトに戻す")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    # Qt 側の引数（-style など）はそのまま残す
    args, _ = parser.parse_known_args(argv)
    return args


def setup_logging(log_dir: Path = None) -> logging.Logger:
    """
    デバッグ用ロギング設定
    """
    log_dir = log_dir or Path.cwd()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    logging.basicConfig(
        level=logging.DEBUG,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file, encoding='utf-8')]
    )
    # 通信ライブラリの詳細ログは抑制
    logging.getLogger("urllib3").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info(f"=== テキスト翻訳ツール v{APP_VERSION} ログ開始 ===")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Platform: {sys.platform}")
    logger.info(f"Log file: {log_file}")

    return logger


def main(argv=None):
    """メインエントリーポイント"""
    args = parse_args(argv)
    logger = setup_logging(args.log_dir)

    try:
        from app.core.settings_manager import get_settings_manager
        from app.ui.main_window import main as app_main

        if args.reset_settings:
            get_settings_manager().reset_to_defaults()

        logger.info("翻訳ウィンドウを起動します")
        app_main()

    except ImportError as e:
        logger.error(f"ImportError: {e}")
        logger.error(traceback.format_exc())
        show_package_error(e)
        sys.exit(1)


def show_package_error(error):
    """依存パッケージ不足のエラー表示"""
    print("❌ エラー: PySide6 または requests が見つかりません", file=sys.stderr)
    print("🔧 依存関係をインストールしてから再起動してください:", file=sys.stderr)
    print("   pip install -e .", file=sys.stderr)
    print(f"🐛 元のエラー: {error}", file=sys.stderr)


if __name__ == "__main__":
    main()
