"""Configuration constants and .env loading.

WHY: A few defaults depend on where the analyzer is deployed, mainly
whether the transcription provider reports word times in seconds or
milliseconds. Keeping them in one place, overridable from the
environment, avoids touching code to switch providers.

HOW: python-dotenv loads the .env file on import. Defaults are read
with os.getenv and exposed as module-level constants.

RULES:
- FLUENCY_TIME_UNIT: "s" (default) or "ms"
- FLUENCY_DEFAULT_FORMATS: comma-separated formatter keys, empty = all
- FLUENCY_LOG_LEVEL: logging level name used by the CLI (default WARNING)
- SUPPORTED_INPUT_FORMATS lists accepted transcript file extensions
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Word timing units
# ---------------------------------------------------------------------------

TIME_UNIT_SCALES: dict[str, float] = {
    "s": 1.0,
    "ms": 0.001,
}
"""Multiplier converting each supported unit to seconds."""


def parse_time_unit(unit: str) -> float:
    """Return the seconds multiplier for a time unit name.

    RULES:
    - Case-insensitive, surrounding whitespace ignored
    - Raises ValueError for unknown units
    """
    key = unit.strip().lower()
    if key not in TIME_UNIT_SCALES:
        raise ValueError(
            "Unknown time unit '{}'. Expected one of: {}".format(
                unit, ", ".join(sorted(TIME_UNIT_SCALES))
            )
        )
    return TIME_UNIT_SCALES[key]


# ---------------------------------------------------------------------------
# Supported input files
# ---------------------------------------------------------------------------

SUPPORTED_INPUT_FORMATS: set[str] = {".json", ".txt"}
"""Transcript file extensions accepted by the CLI (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Environment defaults
# ---------------------------------------------------------------------------

DEFAULT_TIME_UNIT = os.getenv("FLUENCY_TIME_UNIT", "s").strip().lower()
DEFAULT_FORMATS = os.getenv("FLUENCY_DEFAULT_FORMATS", "").strip()
LOG_LEVEL = os.getenv("FLUENCY_LOG_LEVEL", "WARNING").strip().upper()
