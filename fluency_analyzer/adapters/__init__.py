"""Adapter modules for converting external payloads into analyzer input.

WHY: Transcription providers each have their own JSON layout and time
units. Adapters keep those details out of the analyzer core.

RULES:
- Each adapter lives in its own module under this package.
- Adapters never call the analyzer themselves.
"""

from fluency_analyzer.adapters.transcript_adapter import (
    TranscriptFormatError,
    TranscriptPayload,
    load_analysis_input,
    parse_payload,
)

__all__ = [
    "TranscriptFormatError",
    "TranscriptPayload",
    "load_analysis_input",
    "parse_payload",
]
