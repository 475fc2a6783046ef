"""Dataclasses for analyzer input and the fluency assessment it produces.

WHY: The transcription service hands back a transcript string and a
list of word dicts; the UI wants a small fixed-shape readout. Typed,
immutable dataclasses make both sides of the analyzer explicit and keep
each analysis a one-shot value with no identity of its own.

HOW: Five dataclasses and one enum:
  WordToken      : one recognized word with optional timing (seconds)
  AnalysisInput  : transcript + words + recording duration
  StutterTypes   : per-category event counts
  StutterAnalysis: the complete assessment of one recording
  FluencyRating  : categorical banding of the fluency score

RULES:
- All dataclasses are frozen; the analyzer never mutates its input
- Times are float seconds; None means the provider gave no timing
- to_dict() emits the camelCase output boundary consumed by the app
- stutter_types always has exactly three fields (timing-inferred
  prolongations are folded into blocks)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


class FluencyRating(str, enum.Enum):
    """Categorical band of a fluency score, inclusive at the lower bound."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    DEVELOPING = "developing"


@dataclass(frozen=True)
class WordToken:
    """A single recognized word with optional timing.

    RULES:
    - text: the word as recognized, punctuation included
    - start_time / end_time: float seconds, or None when not provided
    - confidence: provider confidence 0.0–1.0, or None
    """

    text: str
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    confidence: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], time_scale: float = 1.0) -> WordToken:
        """Parse a WordToken from a provider word dict.

        Accepts ``start``/``end`` (provider keys) or ``start_time``/
        ``end_time``. ``time_scale`` multiplies both times, e.g. 0.001
        for providers that report milliseconds. Non-numeric times are
        kept as None.
        """
        start = data.get("start", data.get("start_time"))
        end = data.get("end", data.get("end_time"))
        return cls(
            text=str(data.get("text", "")),
            start_time=_scaled(start, time_scale),
            end_time=_scaled(end, time_scale),
            confidence=data.get("confidence"),
        )


def _scaled(value: Any, scale: float) -> Optional[float]:
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value) * scale


@dataclass(frozen=True)
class AnalysisInput:
    """Everything the analyzer consumes for one recording.

    duration_seconds is the wall-clock length of the session. It does
    not feed the score; it is carried through to the session report.
    """

    transcript: str
    words: Tuple[WordToken, ...] = ()
    duration_seconds: float = 0.0


@dataclass(frozen=True)
class StutterTypes:
    """Disfluency counts by category."""

    repetitions: int = 0
    prolongations: int = 0
    blocks: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "repetitions": self.repetitions,
            "prolongations": self.prolongations,
            "blocks": self.blocks,
        }


@dataclass(frozen=True)
class StutterAnalysis:
    """The fluency assessment of one transcript.

    WHY: The app shows children a simplified, encouraging readout and
    stores the numbers with the session. This is the stable contract
    between the analyzer and everything that displays or stores it.

    RULES:
    - stutter_count: total events across all categories, >= 0
    - stutter_percentage: stutter_count per word in percent, capped at
      100, one decimal place
    - fluency_score: integer 0–100
    - stutter_types.blocks includes every timing-inferred event
    """

    stutter_count: int
    stutter_percentage: float
    fluency_score: int
    fluency_rating: FluencyRating
    stutter_types: StutterTypes = field(default_factory=StutterTypes)

    def to_dict(self) -> Dict[str, Any]:
        """Return the camelCase dict embedded into session records."""
        return {
            "stutterCount": self.stutter_count,
            "stutterPercentage": self.stutter_percentage,
            "fluencyScore": self.fluency_score,
            "stutterTypes": self.stutter_types.to_dict(),
            "fluencyRating": self.fluency_rating.value,
        }
