"""
言語検出機能の実装
機能語の出現頻度と文字種（Unicodeブロック）によるヒューリスティック判定
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Pattern


@dataclass
class LanguageDetectionResult:
    """言語検出結果"""
    language: str
    match_count: int
    alternatives: List[Dict[str, Any]] = field(default_factory=list)


def _word_pattern(words: str) -> Pattern:
    return re.compile(r"\b(?:" + "|".join(words.split()) + r")\b")


class LanguageDetector:
    """言語検出器"""

    # 判定順序がそのまま同数時の優先順位になる
    PATTERNS: Dict[str, Pattern] = {
        'en': _word_pattern("the and or but in on at to for of with by"),
        'es': _word_pattern("el la los las y o pero en con de para por que es son está están"),
        'fr': _word_pattern("le la les et ou mais dans sur à pour de avec par que est sont"),
        'de': _word_pattern("der die das und oder aber in auf zu für von mit durch dass ist sind"),
        'it': _word_pattern("il la i le e o ma in su a per di con da che è sono"),
        'pt': _word_pattern("o a os as e ou mas em sobre para de com por que é são está estão"),
        'ru': re.compile(r"[\u0430-\u044f\u0451]"),
        'ar': re.compile(r"[\u0627-\u064a]"),
        'zh': re.compile(r"[\u4e00-\u9fff]"),
        'ja': re.compile(r"[\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff]"),
        'ko': re.compile(r"[\uac00-\ud7af]"),
        'hi': re.compile(r"[\u0900-\u097f]"),
    }

    def __init__(self, confidence_threshold: int = 2):
        # 一致数がこの値を超えた場合のみ確定する
        self.confidence_threshold = confidence_threshold

    def count_matches(self, text: str) -> Dict[str, int]:
        """言語ごとのパターン一致数を取得"""
        clean_text = text.lower().strip()
        return {lang: len(pattern.findall(clean_text)) for lang, pattern in self.PATTERNS.items()}

    def detect_language(self, text: str) -> Optional[LanguageDetectionResult]:
        """
        テキストの言語を検出

        Args:
            text: 検出対象のテキスト

        Returns:
            検出結果。一致数が閾値以下の場合はNone
        """
        if not text or not text.strip():
            return None

        counts = self.count_matches(text)

        max_matches = 0
        detected_lang = None
        for lang, matches in counts.items():
            if matches > max_matches and matches > self.confidence_threshold:
                max_matches = matches
                detected_lang = lang

        if detected_lang is None:
            logging.debug(f"言語を確定できませんでした: {counts}")
            return None

        alternatives = [
            {'language': lang, 'match_count': matches}
            for lang, matches in sorted(counts.items(), key=lambda item: -item[1])
            if lang != detected_lang and matches > 0
        ]

        logging.debug(f"言語検出: {detected_lang} ({max_matches}件一致)")
        return LanguageDetectionResult(
            language=detected_lang,
            match_count=max_matches,
            alternatives=alternatives
        )

    def detect(self, text: str) -> Optional[str]:
        """言語コードのみを返す簡易版"""
        result = self.detect_language(text)
        return result.language if result else None
