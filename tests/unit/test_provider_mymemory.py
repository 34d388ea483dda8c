"""
MyMemoryプロバイダのテスト
"""

import logging
from unittest.mock import patch

import pytest
import requests

from app.core.translate.provider_mymemory import (
    DEFAULT_ENDPOINT,
    MyMemoryError,
    MyMemoryProvider,
    MyMemorySettings,
)


@pytest.fixture
def provider():
    return MyMemoryProvider()


class TestTranslateRequest:
    """リクエスト内容と成功応答"""

    def test_success(self, provider, response_factory, payload_factory):
        response = response_factory(200, payload_factory("Hola"))

        with patch.object(provider.session, "get", return_value=response) as mock_get:
            result = provider.request_translation("Hello", "en", "es")

        assert result.ok
        assert result.translated_text == "Hola"
        assert result.error is None

        mock_get.assert_called_once_with(
            DEFAULT_ENDPOINT,
            params={"q": "Hello", "langpair": "en|es"},
            timeout=None
        )

    def test_custom_endpoint_and_timeout(self, response_factory, payload_factory):
        provider = MyMemoryProvider(MyMemorySettings(endpoint="http://localhost:8080/get", timeout_sec=5.0))
        response = response_factory(200, payload_factory("Bonjour"))

        with patch.object(provider.session, "get", return_value=response) as mock_get:
            assert provider.translate("Hello", "en", "fr") == "Bonjour"

        args, kwargs = mock_get.call_args
        assert args[0] == "http://localhost:8080/get"
        assert kwargs["timeout"] == 5.0

    def test_auto_is_never_sent(self, provider):
        with patch.object(provider.session, "get") as mock_get:
            with pytest.raises(MyMemoryError) as exc_info:
                provider.translate("Hello", "auto", "es")

        assert exc_info.value.error_code == "INVALID_PARAMS"
        mock_get.assert_not_called()

    def test_user_agent_header(self, provider):
        assert provider.session.headers["User-Agent"] == "text-translator/1.0"


class TestServiceErrors:
    """失敗はすべて ServiceResult.service_error になる"""

    def _request(self, provider, **patch_kwargs):
        with patch.object(provider.session, "get", **patch_kwargs):
            return provider.request_translation("Hello", "en", "es")

    def test_http_500(self, provider, response_factory):
        result = self._request(provider, return_value=response_factory(500, {}))

        assert not result.ok
        assert isinstance(result.error, MyMemoryError)
        assert result.error.error_code == "HTTP_ERROR"
        assert result.error.status_code == 500

    def test_http_429(self, provider, response_factory):
        result = self._request(provider, return_value=response_factory(429, {}))
        assert result.error.error_code == "RATE_LIMITED"

    def test_malformed_json(self, provider, response_factory):
        response = response_factory(200, json_error=ValueError("Expecting value"))
        result = self._request(provider, return_value=response)

        assert result.error.error_code == "INVALID_RESPONSE"
        assert isinstance(result.error.original_error, ValueError)

    def test_non_object_json(self, provider, response_factory):
        result = self._request(provider, return_value=response_factory(200, ["unexpected"]))
        assert result.error.error_code == "INVALID_RESPONSE"

    def test_response_status_not_200(self, provider, response_factory, payload_factory):
        payload = payload_factory("", status=403, details="INVALID LANGUAGE PAIR")
        result = self._request(provider, return_value=response_factory(200, payload))

        assert result.error.error_code == "SERVICE_ERROR"
        assert "INVALID LANGUAGE PAIR" in str(result.error)

    def test_missing_translated_text(self, provider, response_factory):
        payload = {"responseStatus": 200, "responseData": {}}
        result = self._request(provider, return_value=response_factory(200, payload))
        assert result.error.error_code == "SERVICE_ERROR"

    def test_missing_response_data(self, provider, response_factory):
        result = self._request(provider, return_value=response_factory(200, {"responseStatus": 200}))
        assert result.error.error_code == "SERVICE_ERROR"

    def test_non_string_translated_text(self, provider, response_factory):
        payload = {"responseStatus": 200, "responseData": {"translatedText": 12345}}
        result = self._request(provider, return_value=response_factory(200, payload))

        assert not result.ok
        assert result.error.error_code == "INVALID_RESPONSE"

    def test_blank_translated_text(self, provider, response_factory, payload_factory):
        result = self._request(provider, return_value=response_factory(200, payload_factory("   ")))
        assert result.error.error_code == "SERVICE_ERROR"

    def test_connection_error(self, provider):
        result = self._request(provider, side_effect=requests.exceptions.ConnectionError("refused"))

        assert result.error.error_code == "NETWORK_ERROR"
        assert isinstance(result.error.original_error, requests.exceptions.ConnectionError)

    def test_timeout(self, provider):
        result = self._request(provider, side_effect=requests.exceptions.Timeout("slow"))
        assert result.error.error_code == "TIMEOUT"

    def test_other_request_exception(self, provider):
        result = self._request(provider, side_effect=requests.exceptions.TooManyRedirects("loop"))
        assert result.error.error_code == "REQUEST_FAILED"

    def test_translate_raises(self, provider, response_factory):
        with patch.object(provider.session, "get", return_value=response_factory(503, {})):
            with pytest.raises(MyMemoryError):
                provider.translate("Hello", "en", "es")


class TestErrorGuidance:
    """ユーザ向けガイダンス"""

    def test_known_error_code(self, provider):
        guidance = provider.get_error_guidance(MyMemoryError("x", "NETWORK_ERROR"))
        assert "ネットワーク" in guidance

    def test_unknown_error_code(self, provider):
        guidance = provider.get_error_guidance(MyMemoryError("謎のエラー", "UNKNOWN"))
        assert "謎のエラー" in guidance


class TestLogging:
    """ログ出力"""

    def test_error_code_is_logged(self, provider, response_factory, caplog):
        with caplog.at_level(logging.DEBUG):
            with patch.object(provider.session, "get", return_value=response_factory(500, {})):
                provider.request_translation("Hello", "en", "es")

        assert "HTTP_ERROR" in caplog.text

    def test_success_is_logged(self, provider, response_factory, payload_factory, caplog):
        with caplog.at_level(logging.INFO):
            with patch.object(provider.session, "get",
                              return_value=response_factory(200, payload_factory("Hola"))):
                provider.request_translation("Hello", "en", "es")

        assert "en -> es" in caplog.text
