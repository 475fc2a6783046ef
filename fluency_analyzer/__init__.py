"""Fluency Analyzer: stutter detection and fluency scoring for speech practice.

WHY: A speech-practice app records children reading, talking and
telling stories, and shows them an encouraging readout of how fluently
they spoke. The transcription service only returns text and word
timing; this package turns that into counts of repetitions,
prolongations and blocks, a 0–100 fluency score, and a rating.

HOW: Three stages: adapt (provider payload → AnalysisInput), analyze
(pure pattern and timing heuristics → StutterAnalysis), format
(session report → JSON record or text readout). Each stage is
independently testable.

RULES:
- The analyzer core is pure and never raises on string input
- StutterAnalysis is the stable contract between analysis and display
- Adding an output format = one new formatter module, no core changes
"""

from fluency_analyzer.core.analyzer import analyze
from fluency_analyzer.core.models import (
    AnalysisInput,
    FluencyRating,
    StutterAnalysis,
    StutterTypes,
    WordToken,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisInput",
    "FluencyRating",
    "StutterAnalysis",
    "StutterTypes",
    "WordToken",
    "analyze",
]
