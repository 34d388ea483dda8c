"""
MyMemory Translation API プロバイダの実装
APIキー不要の GET /get?q=...&langpair=src|tgt を1回だけ呼び出す
"""

import logging
import requests
from typing import Optional
from dataclasses import dataclass

from app.core.languages import AUTO_DETECT
from app.core.models import ServiceResult

DEFAULT_ENDPOINT = "https://api.mymemory.translated.net/get"


@dataclass
class MyMemorySettings:
    """MyMemory設定"""
    endpoint: str = DEFAULT_ENDPOINT
    timeout_sec: Optional[float] = None  # None=トランスポートの既定値に従う
    user_agent: str = "text-translator/1.0"


class MyMemoryError(Exception):
    """MyMemory関連エラー"""

    def __init__(self, message: str, error_code: str = "", status_code: int = 0, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.error_code = error_code
        self.status_code = status_code
        self.original_error = original_error


class MyMemoryProvider:
    """MyMemory APIプロバイダ"""

    def __init__(self, settings: Optional[MyMemorySettings] = None):
        self.settings = settings or MyMemorySettings()

        # セッション
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json"
        })

    def request_translation(self, text: str, source_language: str, target_language: str) -> ServiceResult:
        """
        翻訳を1回リクエストし、結果を ServiceResult で返す

        例外は送出せず、失敗はすべて ServiceResult.service_error に変換する。
        """
        try:
            translated_text = self.translate(text, source_language, target_language)
            logging.info(f"MyMemory 翻訳完了: {len(text)}文字 {source_language} -> {target_language}")
            return ServiceResult.success(translated_text)
        except MyMemoryError as e:
            logging.debug(f"MyMemory APIエラー [{e.error_code}] status={e.status_code}: {e}")
            return ServiceResult.service_error(e)

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """単一テキストの翻訳リクエスト"""
        if AUTO_DETECT in (source_language, target_language):
            raise MyMemoryError(
                "自動検出はAPIに送信できません。言語コードを解決してから呼び出してください。",
                "INVALID_PARAMS"
            )

        params = {
            "q": text,
            "langpair": f"{source_language}|{target_language}"
        }

        try:
            response = self.session.get(
                self.settings.endpoint,
                params=params,
                timeout=self.settings.timeout_sec
            )
        except requests.exceptions.ConnectionError as e:
            raise MyMemoryError(
                "インターネット接続を確認してください。MyMemory APIサーバーに接続できません。",
                "NETWORK_ERROR",
                original_error=e
            )
        except requests.exceptions.Timeout as e:
            raise MyMemoryError(
                "MyMemory APIのリクエストがタイムアウトしました。しばらく時間をおいて再試行してください。",
                "TIMEOUT",
                original_error=e
            )
        except requests.exceptions.RequestException as e:
            raise MyMemoryError(
                f"翻訳リクエストに失敗しました: {str(e)}",
                "REQUEST_FAILED",
                original_error=e
            )

        if response.status_code == 429:
            raise MyMemoryError(
                "MyMemory APIのレート制限に達しました。しばらく時間をおいて再試行してください。",
                "RATE_LIMITED",
                429
            )
        elif not response.ok:
            raise MyMemoryError(
                f"MyMemory API翻訳エラー: HTTP {response.status_code}",
                "HTTP_ERROR",
                response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MyMemoryError(
                "MyMemory APIの応答がJSONではありません",
                "INVALID_RESPONSE",
                response.status_code,
                original_error=e
            )

        return self._parse_response(data, response.status_code)

    def _parse_response(self, data, status_code: int) -> str:
        """応答JSONから翻訳文を取り出す"""
        if not isinstance(data, dict):
            raise MyMemoryError("MyMemory APIの応答形式が不正です", "INVALID_RESPONSE", status_code)

        response_data = data.get("responseData")
        translated_text = response_data.get("translatedText") if isinstance(response_data, dict) else None

        if translated_text is not None and not isinstance(translated_text, str):
            raise MyMemoryError(
                f"MyMemory APIの翻訳文が文字列ではありません: {type(translated_text).__name__}",
                "INVALID_RESPONSE",
                status_code
            )

        if data.get("responseStatus") == 200 and translated_text and translated_text.strip():
            return translated_text

        details = data.get("responseDetails") or "Translation service error"
        raise MyMemoryError(
            f"MyMemory APIがエラーを返しました: {details}",
            "SERVICE_ERROR",
            status_code
        )

    def get_error_guidance(self, error: MyMemoryError) -> str:
        """エラー種別に応じたユーザ向けガイダンス"""
        guidance_map = {
            "NETWORK_ERROR": (
                "ネットワーク接続エラーが発生しました。\n\n"
                "解決方法：\n"
                "1. インターネット接続を確認\n"
                "2. ファイアウォールやプロキシ設定を確認"
            ),
            "TIMEOUT": (
                "MyMemory APIのリクエストがタイムアウトしました。\n\n"
                "解決方法：\n"
                "1. しばらく時間をおいて再試行\n"
                "2. 設定のタイムアウト秒数を見直す"
            ),
            "RATE_LIMITED": (
                "MyMemory APIの利用上限に達しました。\n\n"
                "解決方法：\n"
                "1. 時間をおいてから再試行\n"
                "2. 翻訳テキストを短くする"
            ),
            "HTTP_ERROR": (
                "MyMemory APIがエラーステータスを返しました。\n\n"
                "解決方法：\n"
                "1. しばらく時間をおいて再試行\n"
                "2. 設定のエンドポイントURLを確認"
            ),
            "INVALID_RESPONSE": (
                "MyMemory APIから想定外の応答が返されました。\n\n"
                "解決方法：\n"
                "1. 設定のエンドポイントURLを確認\n"
                "2. しばらく時間をおいて再試行"
            ),
            "SERVICE_ERROR": (
                "翻訳サービスがリクエストを処理できませんでした。\n\n"
                "解決方法：\n"
                "1. 言語の組み合わせを確認\n"
                "2. 特殊文字や制御文字を除去してから再試行"
            ),
        }

        return guidance_map.get(error.error_code, f"予期しないエラーが発生しました：{str(error)}")
