"""JSON session report formatter.

WHY: The app stores every practice session as a JSON record next to the
transcript. The record must keep exactly the shape the journal and
progress screens read, so every document is checked against a bundled
JSON schema before it leaves the formatter.

HOW: SessionReport.to_dict() produces the camelCase document, which is
validated with jsonschema against session_report_schema.json and
serialized with two-space indentation.

RULES:
- Output is validated before it is returned
- NaN and infinity are never written; they are not valid JSON
- Keys are camelCase; stutterTypes has exactly three fields
- Output suffix: "-fluency.json"
- Media type: "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import jsonschema

from fluency_analyzer.core.report import SessionReport
from fluency_analyzer.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "session_report_schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def get_schema() -> dict:
    """Load and cache the session report JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


class JSONReportFormatter(BaseFormatter):
    """Formatter that produces a schema-validated JSON session record."""

    @property
    def name(self) -> str:
        return "JSON Report"

    def format(self, report: SessionReport) -> List[FormatterOutput]:
        """Render the report as JSON.

        Raises:
            jsonschema.ValidationError: If the document does not conform
                to the session report schema.
            ValueError: If a number in the document is NaN or infinite.
        """
        document = report.to_dict()
        jsonschema.validate(instance=document, schema=get_schema())

        return [
            FormatterOutput(
                suffix="-fluency.json",
                content=json.dumps(
                    document, indent=2, ensure_ascii=False, allow_nan=False
                ) + "\n",
                media_type="application/json",
            )
        ]
