"""Command-line interface for the fluency analyzer.

WHY: Therapists and developers need to run the analyzer on saved
transcripts without the mobile app: to check a session, to compare
provider output, or to batch-produce session records.

HOW: Uses argparse to accept a transcript file (.json provider payload
or .txt), the recording duration, the word time unit, an optional
expected phrase, output format selection, and an output directory.
Loads the transcript through the adapter, builds a session report, runs
the selected formatters, and saves each output next to the source (or
to --output-dir, or stdout with --stdout). Status messages go to stderr.

RULES:
- Positional argument: transcript file path
- Validates file existence, extension, output directory, formats and
  duration before any analysis
- --formats: comma-separated formatter keys (default: FLUENCY_DEFAULT_FORMATS
  or all registered)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-fluency-2.json)
- Status output goes to stderr; --stdout writes report content to stdout
- Exit code 1 on any user-facing error
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from fluency_analyzer.adapters.transcript_adapter import load_analysis_input
from fluency_analyzer.config import (
    DEFAULT_FORMATS,
    DEFAULT_TIME_UNIT,
    LOG_LEVEL,
    SUPPORTED_INPUT_FORMATS,
    TIME_UNIT_SCALES,
)
from fluency_analyzer.core.report import build_session_report
from fluency_analyzer.formatters import FORMATTERS
from fluency_analyzer.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(1)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Pick where a session report for a transcript is written.

    A therapist re-running the analyzer on the same recording keeps every
    earlier report: story.json gives story-fluency.json first, then
    story-fluency-2.json, story-fluency-3.json and so on.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    # "-fluency.json" → ("-fluency", ".json")
    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(
    output: FormatterOutput,
    stem: str,
    output_dir: Path,
) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _select_formats(formats: Optional[str]) -> List[str]:
    """Return validated formatter keys, exiting on an unknown key."""
    raw = formats if formats is not None else DEFAULT_FORMATS
    if not raw:
        return list(FORMATTERS.keys())

    keys = [f.strip() for f in raw.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            _fail("Unknown format '{}'. Available formats: {}".format(key, available))
    return keys


def run(args: argparse.Namespace) -> int:
    """Execute the analysis pipeline for parsed arguments.

    RULES:
    - All validation happens before the transcript is analyzed
    - Returns the number of outputs written
    """
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        _fail("File not found: {}".format(input_path))

    ext = input_path.suffix.lower()
    if ext not in SUPPORTED_INPUT_FORMATS:
        _fail("Unsupported file type '{}'. Supported formats: {}".format(
            ext, ", ".join(sorted(SUPPORTED_INPUT_FORMATS))
        ))

    if args.duration is not None and (not math.isfinite(args.duration) or args.duration < 0):
        _fail("Duration must be a finite, non-negative number, got {}".format(args.duration))

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not args.stdout and not output_dir.is_dir():
        _fail("Output directory does not exist: {}".format(output_dir))

    format_keys = _select_formats(args.formats)

    try:
        _status("Loading transcript {}...".format(input_path.name))
        payload = load_analysis_input(
            input_path,
            duration_seconds=args.duration,
            time_unit=args.time_unit,
        )
        analysis_input = payload.analysis_input
        _status("  {} word tokens, {:.1f}s".format(
            len(analysis_input.words), analysis_input.duration_seconds,
        ))

        report = build_session_report(
            analysis_input,
            confidence=payload.confidence,
            expected_phrase=args.expected,
        )
        _status("  Fluency score {} ({})".format(
            report.analysis.fluency_score, report.analysis.fluency_rating.value,
        ))

        written = 0
        for key in format_keys:
            formatter = FORMATTERS[key]()
            for output in formatter.format(report):
                if args.stdout:
                    sys.stdout.write(output.content)
                else:
                    saved_path = _save_output(output, input_path.stem, output_dir)
                    _status("  Saved: {}".format(saved_path.name))
                written += 1
    except jsonschema.ValidationError as e:
        logger.debug("Report failed validation for %s", input_path, exc_info=True)
        _fail("Session report is invalid: {}".format(e.message))
    except (ValueError, OSError) as e:
        # Bad payloads, unknown time units, unreadable files
        logger.debug("Analysis failed for %s", input_path, exc_info=True)
        _fail(str(e))

    return written


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="fluency_analyzer",
        description="Analyze a speech transcript for stutters and produce a "
                    "fluency score and session report.",
    )

    parser.add_argument(
        "input_file",
        help="Transcript file: a provider JSON payload or a plain .txt transcript.",
    )

    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Recording duration in seconds (default: payload audio_duration or 0).",
    )

    parser.add_argument(
        "--time-unit",
        choices=sorted(TIME_UNIT_SCALES),
        default=DEFAULT_TIME_UNIT if DEFAULT_TIME_UNIT in TIME_UNIT_SCALES else "s",
        help="Unit of word start/end times in JSON payloads (default: %(default)s).",
    )

    parser.add_argument(
        "--expected",
        default=None,
        help="Expected phrase for rhythm reading; adds word accuracy to the report.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: all.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: same as input file).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write report content to stdout instead of saving files.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m fluency_analyzer``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    run(args)


if __name__ == "__main__":
    main()
