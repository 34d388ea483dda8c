"""
翻訳システムの統合インターフェース
"""

from .language_detector import (
    LanguageDetectionResult,
    LanguageDetector,
)
from .orchestrator import (
    OrchestratorSettings,
    TranslationOrchestrator,
)
from .provider_demo import (
    DemoTranslateProvider,
    DemoTranslateSettings,
)
from .provider_mymemory import (
    MyMemoryError,
    MyMemoryProvider,
    MyMemorySettings,
)
from .similarity import calculate_similarity

__all__ = [
    # Orchestrator
    "TranslationOrchestrator",
    "OrchestratorSettings",
    # Providers
    "MyMemoryProvider",
    "DemoTranslateProvider",
    # Settings
    "MyMemorySettings",
    "DemoTranslateSettings",
    # Errors
    "MyMemoryError",
    # Language Detection
    "LanguageDetector",
    "LanguageDetectionResult",
    "calculate_similarity",
]
