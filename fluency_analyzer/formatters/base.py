"""Abstract base formatter and output container.

WHY: The same session is stored by the app as JSON and read by a child
or parent as a few encouraging lines. The CLI writes whichever of these
was asked for without knowing how each is built.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput bundles a file suffix with its content and MIME
type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list, usually of one item
- ``suffix`` starts with a hyphen, e.g. ``"-fluency.json"``
- The caller prepends the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from fluency_analyzer.core.report import SessionReport


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-fluency.json"`` → ``"story-fluency.json"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """A way of presenting one practice session.

    Implementations receive the finished SessionReport and never re-run
    the analysis; a new output (say, a CSV row for a therapist's
    spreadsheet) is one subclass plus one FORMATTERS entry.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'JSON Report'."""

    @abstractmethod
    def format(self, report: SessionReport) -> list[FormatterOutput]:
        """Render a session report into one or more output files."""
