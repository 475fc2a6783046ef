"""Word matching and phrase accuracy for the rhythm-reading exercise.

WHY: In rhythm reading the child reads a known phrase to a beat. Besides
fluency, the readout shows how many of the phrase's words were heard.
Transcription of children's speech is noisy, so an exact comparison
would under-count; near matches have to be accepted.

HOW: words_match() accepts exact matches, containment with a small
length tolerance, and edit-distance similarity above 0.75.
score_phrase() compares every spoken word against every expected word
and caps the total at the phrase length.

RULES:
- Comparison is case-insensitive and ignores surrounding whitespace
- similarity = (len(longer) - levenshtein) / len(longer), 1.0 for two
  empty strings
- Every matching (spoken, expected) pair counts; the sum is capped at
  the number of expected words
- accuracy is a rounded integer percentage, 0 with no expected words
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Sequence

import Levenshtein

from fluency_analyzer.core.analyzer import round_half_up

SIMILARITY_THRESHOLD = 0.75

_NON_WORD_RE = re.compile(r"[^\w]")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class PhraseAccuracy:
    """How much of an expected phrase was spoken."""

    correct_words: int
    total_words: int
    accuracy: int

    def to_dict(self) -> dict:
        return {
            "correctWords": self.correct_words,
            "totalWords": self.total_words,
            "accuracy": self.accuracy,
        }


def similarity(first: str, second: str) -> float:
    """Normalized edit-distance similarity in [0, 1]."""
    longer, shorter = (first, second) if len(first) > len(second) else (second, first)
    if not longer:
        return 1.0
    return (len(longer) - Levenshtein.distance(longer, shorter)) / len(longer)


def words_match(spoken_word: str, expected_word: str) -> bool:
    """Return True when a spoken word is close enough to the expected one."""
    spoken = spoken_word.lower().strip()
    expected = expected_word.lower().strip()

    if spoken == expected:
        return True
    if expected in spoken and len(spoken) <= len(expected) + 2:
        return True
    if spoken in expected and len(spoken) > 2:
        return True

    return similarity(spoken, expected) > SIMILARITY_THRESHOLD


def split_phrase(sentence: str) -> List[str]:
    """Split a practice sentence into its words."""
    collapsed = _WHITESPACE_RE.sub(" ", sentence).strip()
    return collapsed.split(" ") if collapsed else []


def _clean(word: str) -> str:
    return _NON_WORD_RE.sub("", word.lower())


def score_phrase(transcript: str, expected_words: Sequence[str]) -> PhraseAccuracy:
    """Score a transcript against the words of an expected phrase."""
    total = len(expected_words)
    # Pure punctuation ("-", "...") cleans to "" and never counts as a word
    spoken = [w for w in (_clean(s) for s in (transcript or "").split()) if w]
    expected = [w for w in (_clean(e) for e in expected_words) if w]

    matched = 0
    for spoken_word in spoken:
        for expected_word in expected:
            if words_match(spoken_word, expected_word):
                matched += 1

    matched = min(matched, total)
    accuracy = int(round_half_up(matched / total * 100)) if total > 0 else 0

    return PhraseAccuracy(correct_words=matched, total_words=total, accuracy=accuracy)
