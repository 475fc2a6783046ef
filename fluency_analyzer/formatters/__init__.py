"""Session report formats, by name.

WHY: ``--formats`` and FLUENCY_DEFAULT_FORMATS name outputs as short
keys, so the CLI needs one table from key to formatter.

HOW: FORMATTERS maps each key to a formatter class; the CLI builds one
instance per run, e.g. ``FORMATTERS["plain_text"]()``.

RULES:
- Keys are snake_case; they appear in CLI help and error messages
- Insertion order is the order outputs are written when no key is given
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fluency_analyzer.formatters.json_report import JSONReportFormatter
from fluency_analyzer.formatters.plain_text import PlainTextFormatter

if TYPE_CHECKING:
    from fluency_analyzer.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "json_report": JSONReportFormatter,
    "plain_text": PlainTextFormatter,
}
