"""Adapter: transcription provider payload to AnalysisInput.

WHY: The transcription service returns a JSON document with the final
text, an overall confidence, and a word list whose times may be in
milliseconds. The analyzer wants a plain transcript, WordTokens in
seconds, and the recording duration. This adapter bridges the two and
is the only place that knows the provider's field names.

HOW: parse_payload() reads "text", "words", "confidence" and
"audio_duration" from an already-decoded dict. load_analysis_input()
reads a .json payload or a bare .txt transcript from disk and
delegates to parse_payload() for JSON.

RULES:
- "text" is required; null counts as an empty transcript
- "words" is optional; when present it must be a list
- Word entries that are not objects or have no string "text" are
  skipped with a warning
- time_unit "ms" divides word times by 1000; "s" keeps them
- An explicit duration wins over the payload's "audio_duration"
- Durations and confidence must be finite and non-negative
- Raises TranscriptFormatError for anything that is not a transcript
"""

from __future__ import annotations

import json
import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from fluency_analyzer.config import parse_time_unit
from fluency_analyzer.core.models import AnalysisInput, WordToken

logger = logging.getLogger(__name__)


class TranscriptFormatError(ValueError):
    """Raised when a payload or file cannot be read as a transcript.

    RULES:
    - Message names the offending field or file
    """


@dataclass(frozen=True)
class TranscriptPayload:
    """A parsed provider payload.

    analysis_input feeds the analyzer; confidence is the provider's
    overall confidence for the session record (0.0 when absent).
    """

    analysis_input: AnalysisInput
    confidence: float = 0.0


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _checked_amount(value: Optional[float], field_name: str) -> float:
    """Return value as a float, rejecting NaN, infinity and negatives."""
    if value is None:
        return 0.0
    if not math.isfinite(value) or value < 0:
        raise TranscriptFormatError(
            "Transcript '{}' must be a finite, non-negative number, got {}".format(
                field_name, value
            )
        )
    return float(value)


def parse_words(raw_words: List[Any], time_unit: str = "s") -> List[WordToken]:
    """Convert provider word dicts into WordTokens in seconds."""
    scale = parse_time_unit(time_unit)
    words: List[WordToken] = []
    for index, raw in enumerate(raw_words):
        if not isinstance(raw, dict) or not isinstance(raw.get("text"), str):
            logger.warning("Skipping malformed word entry at index %d: %r", index, raw)
            continue
        words.append(WordToken.from_dict(raw, time_scale=scale))
    return words


def parse_payload(
    payload: Dict[str, Any],
    duration_seconds: Optional[float] = None,
    time_unit: str = "s",
) -> TranscriptPayload:
    """Build a TranscriptPayload from a decoded provider response.

    Args:
        payload: Decoded JSON object from the transcription provider.
        duration_seconds: Recording length supplied by the caller. Falls
                          back to payload["audio_duration"], then 0.0.
        time_unit: Unit of the word "start"/"end" values ("s" or "ms").

    Returns:
        TranscriptPayload ready for the analyzer.
    """
    if not isinstance(payload, dict):
        raise TranscriptFormatError(
            "Transcript payload must be a JSON object, got {}".format(type(payload).__name__)
        )
    if "text" not in payload:
        raise TranscriptFormatError("Transcript payload has no 'text' field")

    text = payload["text"]
    if text is None:
        text = ""
    if not isinstance(text, str):
        raise TranscriptFormatError("Transcript 'text' must be a string")

    raw_words = payload.get("words") or []
    if not isinstance(raw_words, list):
        raise TranscriptFormatError("Transcript 'words' must be a list")

    if duration_seconds is None:
        duration_seconds = _checked_amount(
            _number(payload.get("audio_duration")), "audio_duration"
        )
    else:
        duration_seconds = _checked_amount(duration_seconds, "duration")

    confidence = _checked_amount(_number(payload.get("confidence")), "confidence")

    return TranscriptPayload(
        analysis_input=AnalysisInput(
            transcript=text,
            words=tuple(parse_words(raw_words, time_unit)),
            duration_seconds=float(duration_seconds),
        ),
        confidence=confidence,
    )


def load_analysis_input(
    path: Union[str, Path],
    duration_seconds: Optional[float] = None,
    time_unit: str = "s",
) -> TranscriptPayload:
    """Load a transcript file from disk.

    RULES:
    - .json files are provider payloads (see parse_payload)
    - .txt files are the bare transcript, UTF-8, without word timing
    - Raises FileNotFoundError if the file does not exist
    - Raises TranscriptFormatError for invalid JSON or other extensions
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".txt":
        text = path.read_text(encoding="utf-8")
        return TranscriptPayload(
            analysis_input=AnalysisInput(
                transcript=text,
                duration_seconds=_checked_amount(duration_seconds, "duration"),
            ),
        )

    if suffix != ".json":
        raise TranscriptFormatError("Unsupported transcript file: {}".format(path.name))

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise TranscriptFormatError("Invalid JSON in {}: {}".format(path.name, e)) from e

    return parse_payload(payload, duration_seconds=duration_seconds, time_unit=time_unit)
