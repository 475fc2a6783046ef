"""Session report: one analysis plus the recording metadata around it.

WHY: The app stores each practice recording as a record holding the
transcript, provider confidence, word count, duration, timestamp and
the fluency analysis. The analyzer only produces the analysis; this
module assembles the enclosing record so formatters have one object
to render.

RULES:
- timestamp is an ISO-8601 UTC string; callers may pass their own
- word_count uses the same rule as the analyzer
- phrase_accuracy is only present for phrase-reading exercises
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fluency_analyzer.core.analyzer import analyze_input, count_words
from fluency_analyzer.core.matching import PhraseAccuracy, score_phrase, split_phrase
from fluency_analyzer.core.models import AnalysisInput, StutterAnalysis


@dataclass(frozen=True)
class SessionReport:
    transcript: str
    confidence: float
    word_count: int
    duration_seconds: float
    timestamp: str
    analysis: StutterAnalysis
    phrase_accuracy: Optional[PhraseAccuracy] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "transcript": self.transcript,
            "confidence": self.confidence,
            "wordCount": self.word_count,
            "duration": self.duration_seconds,
            "timestamp": self.timestamp,
            "stutterAnalysis": self.analysis.to_dict(),
        }
        if self.phrase_accuracy is not None:
            data["phraseAccuracy"] = self.phrase_accuracy.to_dict()
        return data


def build_session_report(
    analysis_input: AnalysisInput,
    confidence: float = 0.0,
    expected_phrase: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> SessionReport:
    """Analyze the input and wrap the result in a SessionReport."""
    phrase_accuracy = None
    if expected_phrase:
        phrase_accuracy = score_phrase(analysis_input.transcript, split_phrase(expected_phrase))

    return SessionReport(
        transcript=analysis_input.transcript,
        confidence=confidence,
        word_count=count_words(analysis_input.transcript, analysis_input.words),
        duration_seconds=analysis_input.duration_seconds,
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        analysis=analyze_input(analysis_input),
        phrase_accuracy=phrase_accuracy,
    )
