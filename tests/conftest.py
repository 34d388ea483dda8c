"""
テスト設定ファイル
"""

import os
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# ディスプレイのない環境でもQtウィジェットを生成できるようにする
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication

# プロジェクトルートをPythonパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session")
def qapp():
    """QApplicationインスタンスを提供"""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def make_response(status_code=200, json_data=None, json_error=None):
    """requests.Response 相当のモックを作成"""
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def mymemory_payload(translated_text, status=200, details=None):
    """MyMemory APIの応答JSON"""
    payload = {
        "responseStatus": status,
        "responseData": {"translatedText": translated_text},
    }
    if details is not None:
        payload["responseDetails"] = details
    return payload


@pytest.fixture
def app_settings():
    """デフォルトのアプリケーション設定"""
    from app.core.settings_manager import ApiSettings, AppSettings, DetectionSettings, UISettings

    return AppSettings(api=ApiSettings(), detection=DetectionSettings(), ui=UISettings())


@pytest.fixture
def response_factory():
    """応答モック生成関数"""
    return make_response


@pytest.fixture
def payload_factory():
    """応答JSON生成関数"""
    return mymemory_payload
