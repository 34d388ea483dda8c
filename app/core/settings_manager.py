"""
設定ファイル管理クラス
ユーザー設定の永続化を行う
"""

import json
import logging
import os
import platform
import shutil
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from app.core.languages import AUTO_DETECT, is_language_supported
from app.core.translate.provider_mymemory import DEFAULT_ENDPOINT


@dataclass
class ApiSettings:
    """翻訳API設定"""

    endpoint: str = DEFAULT_ENDPOINT
    timeout_sec: Optional[float] = None  # None=トランスポートの既定値
    user_agent: str = "text-translator/1.0"


@dataclass
class DetectionSettings:
    """言語検出設定"""

    confidence_threshold: int = 2  # 一致数がこの値を超えたら確定
    probe_enabled: bool = True
    probe_chars: int = 100
    probe_target: str = "es"
    similarity_threshold: float = 0.8
    default_language: str = "en"


@dataclass
class UISettings:
    """UI設定"""

    default_source: str = AUTO_DETECT
    default_target: str = "es"
    toast_duration_ms: int = 3000
    copy_feedback_ms: int = 2000
    char_warning: int = 4000
    char_danger: int = 4500


@dataclass
class AppSettings:
    """アプリケーション設定"""

    api: ApiSettings
    detection: DetectionSettings
    ui: UISettings
    version: str = "1.0.0"


SECTION_TYPES = {
    "api": ApiSettings,
    "detection": DetectionSettings,
    "ui": UISettings,
}


class SettingsManager:
    """設定管理クラス"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._settings_path = self._get_settings_path()
        self._settings: Optional[AppSettings] = None

    def _get_settings_path(self) -> Path:
        """設定ファイルのパスを取得"""
        # プラットフォーム別の設定フォルダ
        if platform.system() == "Windows":
            config_dir = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        elif platform.system() == "Darwin":  # macOS
            config_dir = Path.home() / "Library" / "Application Support"
        else:  # Linux
            config_dir = Path.home() / ".config"

        app_config_dir = config_dir / "text-translator"
        app_config_dir.mkdir(parents=True, exist_ok=True)

        return app_config_dir / "settings.json"

    def load_settings(self) -> AppSettings:
        """設定を読み込み"""
        if self._settings is not None:
            return self._settings

        try:
            if self._settings_path.exists():
                self.logger.info(f"設定ファイル読み込み: {self._settings_path}")
                with open(self._settings_path, "r", encoding="utf-8") as f:
                    settings_dict = json.load(f)

                file_version = settings_dict.get("version", "1.0.0")
                if file_version != "1.0.0":
                    self.logger.warning(f"設定ファイルのバージョンが異なります: {file_version}")

                self._settings = self._dict_to_settings(settings_dict)
                self.logger.info("設定読み込み完了")
            else:
                self.logger.info("設定ファイルが見つかりません。デフォルト設定を使用")
                self._settings = self._create_default_settings()

        except (OSError, ValueError) as e:
            self.logger.error(f"設定読み込みエラー: {e}")
            self.logger.info("デフォルト設定を使用")
            self._settings = self._create_default_settings()

        return self._settings

    def save_settings(self, settings: AppSettings) -> bool:
        """設定を保存"""
        try:
            self._settings = settings
            settings_dict = self._settings_to_dict(settings)

            self._create_backup()

            self.logger.info(f"設定ファイル保存: {self._settings_path}")
            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(settings_dict, f, indent=2, ensure_ascii=False)

            self.logger.info("設定保存完了")
            return True

        except OSError as e:
            self.logger.error(f"設定保存エラー: {e}")
            return False

    def _create_default_settings(self) -> AppSettings:
        """デフォルト設定を作成"""
        return AppSettings(
            api=ApiSettings(),
            detection=DetectionSettings(),
            ui=UISettings(),
        )

    def _settings_to_dict(self, settings: AppSettings) -> Dict[str, Any]:
        """設定オブジェクトを辞書に変換"""
        return {
            "version": settings.version,
            "api": asdict(settings.api),
            "detection": asdict(settings.detection),
            "ui": asdict(settings.ui),
        }

    def _dict_to_settings(self, settings_dict: Dict[str, Any]) -> AppSettings:
        """辞書を設定オブジェクトに変換（未知のキーは無視）"""
        default_settings = self._create_default_settings()

        if not isinstance(settings_dict, dict):
            self.logger.error(f"設定変換エラー: 不正な形式 {type(settings_dict).__name__}")
            return default_settings

        for section, section_type in SECTION_TYPES.items():
            section_dict = settings_dict.get(section)
            if not isinstance(section_dict, dict):
                continue
            try:
                setattr(default_settings, section, section_type(
                    **{
                        k: v
                        for k, v in section_dict.items()
                        if k in section_type.__dataclass_fields__
                    }
                ))
            except TypeError as e:
                self.logger.error(f"設定変換エラー ({section}): {e}")

        if "version" in settings_dict:
            default_settings.version = settings_dict["version"]

        return default_settings

    def _create_backup(self):
        """設定ファイルのバックアップを作成"""
        if self._settings_path.exists():
            backup_path = self._settings_path.with_suffix(".json.backup")
            try:
                shutil.copy2(self._settings_path, backup_path)
                self.logger.debug(f"バックアップ作成: {backup_path}")
            except OSError as e:
                self.logger.warning(f"バックアップ作成失敗: {e}")

    def reset_to_defaults(self) -> AppSettings:
        """設定をデフォルトに戻す"""
        self.logger.info("設定をデフォルトに戻します")
        default_settings = self._create_default_settings()
        if self.save_settings(default_settings):
            return default_settings
        return self.load_settings()

    def validate_settings(self, settings: AppSettings) -> List[str]:
        """設定の妥当性を確認"""
        errors = []

        if not settings.api.endpoint.startswith(("http://", "https://")):
            errors.append("APIエンドポイントはhttp://またはhttps://で始まる必要があります")

        if settings.api.timeout_sec is not None and settings.api.timeout_sec <= 0:
            errors.append("タイムアウト秒数は正の値で設定してください")

        if settings.detection.confidence_threshold < 0:
            errors.append("検出閾値は0以上で設定してください")

        if not 0.0 <= settings.detection.similarity_threshold <= 1.0:
            errors.append("類似度閾値は0から1の間で設定してください")

        for lang_code in (settings.detection.default_language, settings.detection.probe_target):
            if not is_language_supported(lang_code) or lang_code == AUTO_DETECT:
                errors.append(f"未対応の言語コードです: {lang_code}")

        if not is_language_supported(settings.ui.default_source):
            errors.append(f"未対応の翻訳元言語です: {settings.ui.default_source}")

        if not is_language_supported(settings.ui.default_target) or settings.ui.default_target == AUTO_DETECT:
            errors.append(f"未対応の翻訳先言語です: {settings.ui.default_target}")

        if settings.ui.toast_duration_ms <= 0:
            errors.append("トースト表示時間は正の値で設定してください")

        if settings.ui.char_warning >= settings.ui.char_danger:
            errors.append("文字数の警告閾値は危険閾値より小さく設定してください")

        return errors


# シングルトンインスタンス
_settings_manager_instance = None


def get_settings_manager() -> SettingsManager:
    """設定マネージャーのシングルトンインスタンスを取得"""
    global _settings_manager_instance
    if _settings_manager_instance is None:
        _settings_manager_instance = SettingsManager()
    return _settings_manager_instance
