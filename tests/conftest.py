"""Shared test fixtures for the fluency_analyzer test suite.

WHY: Several test modules need the same realistic provider payload and
word tokens. Centralizing them keeps the expected numbers in one place.

HOW: Pytest fixtures provide a provider-style payload with millisecond
word times, the matching WordTokens in seconds, and the AnalysisInput
built from them.

RULES:
- SAMPLE_PAYLOAD times are milliseconds, like the provider returns them
- SAMPLE_WORDS are the same words converted to seconds
"""

from typing import Any, Dict, List

import pytest

from fluency_analyzer.core.models import AnalysisInput, WordToken

SAMPLE_PAYLOAD: Dict[str, Any] = {
    "id": "5551722-f677-48a2-9d4c-6e8cd1d0e8d4",
    "status": "completed",
    "text": "I went to the the park",
    "confidence": 0.91,
    "audio_duration": 4.0,
    "words": [
        {"text": "I",    "start": 100,  "end": 250,  "confidence": 0.98},
        {"text": "went", "start": 300,  "end": 600,  "confidence": 0.95},
        {"text": "to",   "start": 650,  "end": 750,  "confidence": 0.97},
        {"text": "the",  "start": 800,  "end": 900,  "confidence": 0.90},
        {"text": "the",  "start": 950,  "end": 1050, "confidence": 0.88},
        {"text": "park", "start": 1100, "end": 1500, "confidence": 0.93},
    ],
}

SAMPLE_WORDS: List[WordToken] = [
    WordToken(text="I",    start_time=0.10, end_time=0.25, confidence=0.98),
    WordToken(text="went", start_time=0.30, end_time=0.60, confidence=0.95),
    WordToken(text="to",   start_time=0.65, end_time=0.75, confidence=0.97),
    WordToken(text="the",  start_time=0.80, end_time=0.90, confidence=0.90),
    WordToken(text="the",  start_time=0.95, end_time=1.05, confidence=0.88),
    WordToken(text="park", start_time=1.10, end_time=1.50, confidence=0.93),
]


@pytest.fixture
def sample_payload():
    """Provider payload with millisecond word times."""
    return dict(SAMPLE_PAYLOAD, words=[dict(w) for w in SAMPLE_PAYLOAD["words"]])


@pytest.fixture
def sample_words():
    """The sample payload's words as WordTokens in seconds."""
    return list(SAMPLE_WORDS)


@pytest.fixture
def sample_input():
    return AnalysisInput(
        transcript=SAMPLE_PAYLOAD["text"],
        words=tuple(SAMPLE_WORDS),
        duration_seconds=4.0,
    )
