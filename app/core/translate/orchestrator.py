"""
翻訳オーケストレーター
言語検出 → リモート翻訳 → 結果の正規化 を1回のリクエストサイクルにまとめる
"""

import logging
from dataclasses import dataclass
from typing import Optional

from app.core.languages import AUTO_DETECT
from app.core.models import (
    ServiceResult,
    TranslationRequest,
    TranslationResult,
)
from .language_detector import LanguageDetector
from .provider_demo import DemoTranslateProvider
from .provider_mymemory import MyMemoryProvider, MyMemorySettings
from .similarity import calculate_similarity


@dataclass
class OrchestratorSettings:
    """オーケストレーター設定"""
    default_language: str = "en"  # 検出に失敗した場合の翻訳元
    probe_enabled: bool = True  # 検出失敗時にAPIで英語かどうかを確認する
    probe_chars: int = 100
    probe_target: str = "es"
    similarity_threshold: float = 0.8


class TranslationOrchestrator:
    """翻訳オーケストレーター"""

    def __init__(
        self,
        provider: Optional[MyMemoryProvider] = None,
        detector: Optional[LanguageDetector] = None,
        demo_provider: Optional[DemoTranslateProvider] = None,
        settings: Optional[OrchestratorSettings] = None,
    ):
        self.provider = provider or MyMemoryProvider()
        self.detector = detector or LanguageDetector()
        self.demo_provider = demo_provider or DemoTranslateProvider()
        self.settings = settings or OrchestratorSettings()

    @classmethod
    def from_settings(cls, app_settings) -> 'TranslationOrchestrator':
        """AppSettings からオーケストレーターを構築"""
        api = app_settings.api
        detection = app_settings.detection
        return cls(
            provider=MyMemoryProvider(MyMemorySettings(
                endpoint=api.endpoint,
                timeout_sec=api.timeout_sec,
                user_agent=api.user_agent,
            )),
            detector=LanguageDetector(detection.confidence_threshold),
            settings=OrchestratorSettings(
                default_language=detection.default_language,
                probe_enabled=detection.probe_enabled,
                probe_chars=detection.probe_chars,
                probe_target=detection.probe_target,
                similarity_threshold=detection.similarity_threshold,
            ),
        )

    def translate(self, text: str, source_language: str, target_language: str) -> TranslationResult:
        """
        翻訳実行

        Args:
            text: 翻訳対象テキスト
            source_language: 翻訳元言語コード（"auto" で自動検出）
            target_language: 翻訳先言語コード

        Returns:
            翻訳結果（通常・翻訳不要・デモのいずれかの成功結果）

        Raises:
            InvalidTranslationRequest: テキストが空、または同一言語ペアの場合
        """
        request = TranslationRequest(text.strip() if text else "", source_language, target_language)
        request.validate()

        source = self.resolve_source_language(request.text, source_language)
        detected = source if request.is_auto_detect else None

        if source == target_language:
            logging.info(f"翻訳元と翻訳先が同一のため翻訳をスキップ: {source}")
            return TranslationResult.ok(
                request.text,
                detected_language=source,
                no_translation_needed=True
            )

        service_result = self.provider.request_translation(request.text, source, target_language)
        return self._normalize(service_result, request, source, detected)

    def resolve_source_language(self, text: str, source_language: str) -> str:
        """翻訳元言語を確定（自動検出 → 類似度プローブ → 既定値）"""
        if source_language != AUTO_DETECT:
            return source_language

        detected = self.detector.detect(text)
        if detected:
            return detected

        if self.settings.probe_enabled and self._probe_is_default_language(text):
            logging.info(f"プローブ翻訳の結果から既定言語と判定: {self.settings.default_language}")
            return self.settings.default_language

        logging.info(f"言語を検出できなかったため既定値を使用: {self.settings.default_language}")
        return self.settings.default_language

    def _probe_is_default_language(self, text: str) -> bool:
        """翻訳結果が原文とほぼ同じなら既定言語（英語）とみなす"""
        probe_text = text[:self.settings.probe_chars]
        result = self.provider.request_translation(
            probe_text,
            self.settings.default_language,
            self.settings.probe_target
        )

        if not result.ok:
            logging.warning(f"言語判定プローブに失敗: {result.error}")
            return False

        similarity = calculate_similarity(text.lower(), result.translated_text.lower())
        logging.debug(f"言語判定プローブ類似度: {similarity:.2f}")
        return similarity > self.settings.similarity_threshold

    def _normalize(
        self,
        service_result: ServiceResult,
        request: TranslationRequest,
        source: str,
        detected: Optional[str],
    ) -> TranslationResult:
        """
        サービス結果を翻訳結果に変換（失敗時はデモ結果にフォールバック）

        デモ結果の detected_language は固定の "en" ではなく、自動検出で確定した
        翻訳元言語（自動検出でない場合はNone）を返す。
        """
        if service_result.ok:
            return TranslationResult.ok(service_result.translated_text, detected_language=detected)

        # サービス障害はエラーにせずデモ結果として返す
        logging.warning(f"翻訳APIエラーのためデモ翻訳にフォールバック: {service_result.error}")
        demo_text = self.demo_provider.translate(request.text, source, request.target_language)
        return TranslationResult.ok(demo_text, detected_language=detected, is_demo=True)
