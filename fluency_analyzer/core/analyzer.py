"""Stutter detection, scoring, and fluency classification.

WHY: A child's recording comes back from the transcription service as
plain text plus (sometimes) per-word timing. The practice screens need
a single encouraging number and a rating band. This module turns the
transcript into counts of repetitions, prolongations and blocks, and
scores them.

HOW: Three pattern detectors scan the lower-cased transcript with
compiled regexes and return counts. A fourth pass walks the word
tokens and infers blocks from long pauses and from short words held
too long. The counts are added, expressed per word, and mapped to a
0–100 score and a rating band.

RULES:
- Detectors are additive: overlapping matches from different rules are
  counted once per rule, never deduplicated
- Word count is len(words) when tokens are given, else the whitespace
  split of the trimmed transcript
- Timing-inferred events (pauses and held words) are folded into blocks
- percentage = min(100, total / words * 100), one decimal, 0 with no words
- score = max(0, 100 - percentage * 2), rounded half-up
- Ratings: >= 90 excellent, >= 75 good, >= 60 fair, else developing
- Never raises on string input; malformed timing is ignored
- Cost is linear in transcript length; patterns that span a word are
  anchored at a word boundary
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from fluency_analyzer.core.models import (
    AnalysisInput,
    FluencyRating,
    StutterAnalysis,
    StutterTypes,
    WordToken,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Text patterns
# ---------------------------------------------------------------------------

_VOWELS = "aeiou"
_CONSONANTS = "bcdfghjklmnpqrstvwxyz"

# "the the"
_REPEATED_WORD_RE = re.compile(r"\b(\w+)\s+\1\b")
# "sssso", "mmmom"
_REPEATED_CHAR_RE = re.compile(r"(\w)\1{2,}")
# "I-I"
_HYPHEN_REPEAT_RE = re.compile(r"\b(\w+)-\1\b")

# A whole word of letters; run patterns are searched inside each one
_LETTER_WORD_RE = re.compile(r"\b[a-z]+\b")
_VOWEL_RUN_RE = re.compile(r"[{v}]{{3,}}".format(v=_VOWELS))
_CONSONANT_RUN_RE = re.compile(r"[{c}]{{3,}}".format(c=_CONSONANTS))
# "I---am", "so__"
_HELD_MARK_RE = re.compile(r"\b\w+[-_]{2,}")

FILLER_WORDS = ("uh", "um", "er", "ah", "eh")
_FILLER_RE = re.compile(r"\b(?:{})\b".format("|".join(FILLER_WORDS)))
_ELLIPSIS_RE = re.compile("\\.\\.\\.|…")
# Three or more 1–2 character words in a row
_SHORT_CLUSTER_RE = re.compile(r"(?:\b\w{1,2}\b\s+){2,}\b\w{1,2}\b")
_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
_TERMINAL_RUN_RE = re.compile(r"[.!?]{2,}")
_COMMA_RUN_RE = re.compile(r"(?:,\s*){2,}")

_NON_ALNUM_RE = re.compile(r"[\W_]+")

# ---------------------------------------------------------------------------
# Timing thresholds (seconds)
# ---------------------------------------------------------------------------

PAUSE_GAP_S = 0.5
PAUSE_TO_WORD_RATIO = 2.0
HELD_WORD_S = 1.0
HELD_WORD_MAX_CHARS = 4

# ---------------------------------------------------------------------------
# Rating bands: (lower bound inclusive, rating), highest first
# ---------------------------------------------------------------------------

RATING_BANDS: Tuple[Tuple[int, FluencyRating], ...] = (
    (90, FluencyRating.EXCELLENT),
    (75, FluencyRating.GOOD),
    (60, FluencyRating.FAIR),
)

WordLike = Union[WordToken, Mapping[str, Any]]


def _normalize(transcript: str) -> str:
    return (transcript or "").strip().lower()


def count_words(transcript: str, words: Sequence[WordLike] = ()) -> int:
    """Number of words the percentage is taken against."""
    if words:
        return len(words)
    return len(_normalize(transcript).split())


def detect_repetitions(text: str) -> int:
    """Count repeated words, sound repetitions, and false-start repairs.

    ``text`` must already be lower-cased.
    """
    count = len(_REPEATED_WORD_RE.findall(text))
    count += len(_REPEATED_CHAR_RE.findall(text))
    count += len(_HYPHEN_REPEAT_RE.findall(text))

    # "th- think" -> "th", "think": a truncated attempt then the full word
    tokens = [_NON_ALNUM_RE.sub("", t) for t in text.split()]
    for current, following in zip(tokens, tokens[1:]):
        if (
            len(current) >= 2
            and len(following) >= 2
            and len(current) < len(following)
            and following.startswith(current)
        ):
            count += 1

    return count


def detect_prolongations(text: str) -> int:
    """Count stretched sounds: vowel runs, consonant runs, held marks.

    Each word of letters counts at most once per run kind.
    """
    letter_words = _LETTER_WORD_RE.findall(text)
    return (
        sum(1 for w in letter_words if _VOWEL_RUN_RE.search(w))
        + sum(1 for w in letter_words if _CONSONANT_RUN_RE.search(w))
        + len(_HELD_MARK_RE.findall(text))
    )


def detect_blocks(text: str) -> int:
    """Count fillers, pauses, fragmented speech, and punctuation pauses."""
    return (
        len(_FILLER_RE.findall(text))
        + len(_ELLIPSIS_RE.findall(text))
        + len(_SHORT_CLUSTER_RE.findall(text))
        + len(_WHITESPACE_RUN_RE.findall(text))
        + len(_TERMINAL_RUN_RE.findall(text))
        + len(_COMMA_RUN_RE.findall(text))
    )


def _field(word: WordLike, *names: str) -> Any:
    if isinstance(word, WordToken):
        return getattr(word, names[0], None)
    if isinstance(word, Mapping):
        for name in names:
            if name in word:
                return word[name]
    return None


def _time(value: Any) -> Optional[float]:
    """Return a finite float timestamp or None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def _timing(word: WordLike) -> Tuple[Optional[float], Optional[float]]:
    start = _time(_field(word, "start_time", "start"))
    end = _time(_field(word, "end_time", "end"))
    if start is None or end is None or end < start:
        return None, None
    return start, end


def _text(word: WordLike) -> str:
    text = _field(word, "text")
    return text.strip() if isinstance(text, str) else ""


def detect_timing_blocks(words: Sequence[WordLike]) -> int:
    """Infer blocks from word timing.

    A pause longer than PAUSE_GAP_S and more than PAUSE_TO_WORD_RATIO
    times the preceding word's duration is one block. A word of at most
    HELD_WORD_MAX_CHARS characters lasting more than HELD_WORD_S is one
    held-word event. Tokens without usable timing contribute nothing.
    """
    if not words:
        return 0

    timings = [_timing(w) for w in words]
    count = 0

    for i, word in enumerate(words):
        start, end = timings[i]
        if start is None:
            continue
        word_duration = end - start

        if word_duration > HELD_WORD_S and len(_text(word)) <= HELD_WORD_MAX_CHARS:
            count += 1

        if i + 1 < len(words):
            next_start = timings[i + 1][0]
            if next_start is None:
                continue
            gap = next_start - end
            if gap > PAUSE_GAP_S and gap > PAUSE_TO_WORD_RATIO * word_duration:
                count += 1

    return count


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves away from zero for non-negative values."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def stutter_percentage(total: int, word_count: int) -> float:
    if word_count <= 0:
        return 0.0
    return round_half_up(min(100.0, total / word_count * 100.0), 1)


def fluency_score(percentage: float) -> int:
    return int(round_half_up(max(0.0, 100.0 - percentage * 2)))


def rate(score: int) -> FluencyRating:
    """Map a fluency score to its rating band."""
    for lower_bound, rating in RATING_BANDS:
        if score >= lower_bound:
            return rating
    return FluencyRating.DEVELOPING


def analyze(
    transcript: str,
    words: Optional[Iterable[WordLike]] = None,
    duration_seconds: float = 0.0,
) -> StutterAnalysis:
    """Analyze one finalized transcript for disfluencies.

    Args:
        transcript: The finalized transcript text.
        words: Recognized word tokens with optional timing, as WordToken
               objects or provider dicts. May be empty or None.
        duration_seconds: Recording length. Accepted for the session
                          record; it does not change the score.

    Returns:
        A StutterAnalysis with counts, percentage, score, and rating.
    """
    word_list: List[WordLike] = list(words) if words else []
    text = _normalize(transcript)

    repetitions = detect_repetitions(text)
    prolongations = detect_prolongations(text)
    blocks = detect_blocks(text)
    timing_inferred = detect_timing_blocks(word_list)

    total = repetitions + prolongations + blocks + timing_inferred
    word_count = count_words(transcript, word_list)
    percentage = stutter_percentage(total, word_count)
    score = fluency_score(percentage)

    logger.debug(
        "Analyzed %d words (%.1fs): repetitions=%d prolongations=%d "
        "blocks=%d timing=%d score=%d",
        word_count, duration_seconds or 0.0, repetitions, prolongations,
        blocks, timing_inferred, score,
    )

    return StutterAnalysis(
        stutter_count=total,
        stutter_percentage=percentage,
        fluency_score=score,
        fluency_rating=rate(score),
        stutter_types=StutterTypes(
            repetitions=repetitions,
            prolongations=prolongations,
            blocks=blocks + timing_inferred,
        ),
    )


def analyze_input(analysis_input: AnalysisInput) -> StutterAnalysis:
    """Analyze a composed AnalysisInput."""
    return analyze(
        analysis_input.transcript,
        analysis_input.words,
        analysis_input.duration_seconds,
    )
