"""Plain text readout of a session report.

WHY: The people reading the result are children and their parents, not
speech therapists. The readout leads with an encouraging headline and
keeps the numbers short.

HOW: Picks a headline from the fluency rating, then lists the score,
the per-category counts, a clarity line from the provider confidence,
and, for phrase reading, a word accuracy line. Lines are joined with
newlines.

RULES:
- Headline comes from the fluency rating, never from raw counts
- Clarity bands: > 0.8, > 0.6, > 0.4, otherwise
- Accuracy bands: >= 90, >= 75, >= 60, >= 40, otherwise
- Output suffix: "-fluency.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from fluency_analyzer.core.models import FluencyRating
from fluency_analyzer.core.report import SessionReport
from fluency_analyzer.formatters.base import BaseFormatter, FormatterOutput

RATING_HEADLINES: Dict[FluencyRating, str] = {
    FluencyRating.EXCELLENT: "Wonderful! Your speech flowed smoothly.",
    FluencyRating.GOOD: "Great work! You spoke clearly and steadily.",
    FluencyRating.FAIR: "Nice effort! You're getting stronger every time.",
    FluencyRating.DEVELOPING: "Keep going! Every practice builds your speaking skills.",
}

# (exclusive lower bound, label), highest first
_CLARITY_BANDS: Tuple[Tuple[float, str], ...] = (
    (0.8, "crystal clear!"),
    (0.6, "very clear!"),
    (0.4, "quite clear!"),
)

# (inclusive lower bound, label), highest first
_ACCURACY_BANDS: Tuple[Tuple[int, str], ...] = (
    (90, "perfect!"),
    (75, "excellent!"),
    (60, "great job!"),
    (40, "good effort!"),
)


def clarity_label(confidence: float) -> str:
    for bound, label in _CLARITY_BANDS:
        if confidence > bound:
            return label
    return "getting clearer!"


def accuracy_label(accuracy: int) -> str:
    for bound, label in _ACCURACY_BANDS:
        if accuracy >= bound:
            return label
    return "keep practicing!"


def _format_duration(seconds: float) -> str:
    total = int(seconds)
    return "{}:{:02d}".format(total // 60, total % 60)


class PlainTextFormatter(BaseFormatter):
    """Formatter that produces a short, encouraging text readout."""

    @property
    def name(self) -> str:
        return "Plain Text"

    def format(self, report: SessionReport) -> List[FormatterOutput]:
        analysis = report.analysis
        types = analysis.stutter_types

        lines: List[str] = [
            RATING_HEADLINES[analysis.fluency_rating],
            "",
            "Fluency score: {}/100 ({})".format(
                analysis.fluency_score, analysis.fluency_rating.value,
            ),
            "Words: {}  Time: {}".format(
                report.word_count, _format_duration(report.duration_seconds),
            ),
            "Repetitions: {}  Prolongations: {}  Pauses: {}".format(
                types.repetitions, types.prolongations, types.blocks,
            ),
            "Clarity: {}% - {}".format(
                int(round(report.confidence * 100)), clarity_label(report.confidence),
            ),
        ]

        accuracy = report.phrase_accuracy
        if accuracy is not None:
            lines.append("Word accuracy: {}/{} ({}%) - {}".format(
                accuracy.correct_words,
                accuracy.total_words,
                accuracy.accuracy,
                accuracy_label(accuracy.accuracy),
            ))

        return [
            FormatterOutput(
                suffix="-fluency.txt",
                content="\n".join(lines) + "\n",
                media_type="text/plain",
            )
        ]
