"""Built-in Japanese lyric optimizer.

Generators read kana far more reliably than kanji, so a handful of words that
are commonly written in hiragana in song lyrics are rewritten, and doubled
small-tsu (っっ) and long-vowel marks (ーー) are collapsed to one.
"""

import re

from .base import HiraganaSuggestion, LanguageOptimizer, PronunciationResult, TextChange

# Words usually written in hiragana in lyrics.
KANJI_TO_HIRAGANA = {
    "私": "わたし",
    "貴方": "あなた",
    "何時": "いつ",
    "何処": "どこ",
    "何故": "なぜ",
    "大丈夫": "だいじょうぶ",
    "有難う": "ありがとう",
    "御免": "ごめん",
    "沢山": "たくさん",
    "一杯": "いっぱい",
}

_REPEATED_SOKUON_RE = re.compile(r"っっ+")
_REPEATED_CHOONPU_RE = re.compile(r"ーー+")


class BasicJapaneseOptimizer(LanguageOptimizer):
    languages = frozenset({"ja"})
    basic_note = "Applied basic Japanese optimization"

    def optimize_for_pronunciation(self, text: str) -> PronunciationResult:
        changes: list[TextChange] = []
        optimized = text

        for kanji, hiragana in KANJI_TO_HIRAGANA.items():
            if kanji in optimized:
                optimized = optimized.replace(kanji, hiragana)
                changes.append(TextChange(kanji, hiragana, "Written in hiragana for clearer pronunciation"))

        for pattern, replacement, reason in (
            (_REPEATED_SOKUON_RE, "っ", "Collapsed repeated small tsu"),
            (_REPEATED_CHOONPU_RE, "ー", "Collapsed repeated long-vowel mark"),
        ):
            for match in pattern.findall(optimized):
                changes.append(TextChange(match, replacement, reason))
            optimized = pattern.sub(replacement, optimized)

        return PronunciationResult(optimized_text=optimized, changes=changes)

    def suggest_hiragana_usage(self, text: str) -> list[HiraganaSuggestion]:
        suggestions: list[HiraganaSuggestion] = []
        for kanji, hiragana in KANJI_TO_HIRAGANA.items():
            for m in re.finditer(re.escape(kanji), text):
                suggestions.append(HiraganaSuggestion(kanji, hiragana, m.start(), "strong"))
        return sorted(suggestions, key=lambda s: s.position)
