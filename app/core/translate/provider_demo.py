"""
デモ翻訳プロバイダの実装
リモートAPIが使えない場合の代替結果を生成する（ネットワーク不要）
"""

import logging
from dataclasses import dataclass


@dataclass
class DemoTranslateSettings:
    """デモ翻訳設定"""
    template: str = '[DEMO] Mock translation of: "{text}"'


class DemoTranslateProvider:
    """デモ翻訳プロバイダ（認証・通信不要）"""

    def __init__(self, settings: DemoTranslateSettings = None):
        self.settings = settings or DemoTranslateSettings()

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """デモ用の翻訳文を生成"""
        logging.info(f"デモ翻訳を生成: {source_language} -> {target_language}")
        return self.settings.template.format(text=text)
