"""Tests for the command-line interface.

WHY: The CLI is how saved transcripts are analyzed outside the app.
Bad input must fail with a clear message before anything is written,
and repeated runs must never overwrite earlier reports.

HOW: Runs cli.main() with explicit argv against files in tmp_path,
capturing stdout/stderr with capsys and checking exit codes via
SystemExit.

RULES:
- Every test writes only under tmp_path
- Formats are passed explicitly so FLUENCY_DEFAULT_FORMATS cannot leak in
"""

import json

import pytest

from fluency_analyzer import cli


def _write_payload(tmp_path, payload, name="story.json"):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestParser:

    def test_defaults(self):
        args = cli.build_parser().parse_args(["story.json"])
        assert args.input_file == "story.json"
        assert args.duration is None
        assert args.expected is None
        assert args.stdout is False

    def test_time_unit_choices(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["story.json", "--time-unit", "minutes"])


class TestRun:

    def test_writes_all_formats(self, tmp_path, sample_payload):
        path = _write_payload(tmp_path, sample_payload)

        cli.main([str(path), "--time-unit", "ms", "--formats", "json_report,plain_text"])

        document = json.loads((tmp_path / "story-fluency.json").read_text(encoding="utf-8"))
        assert document["stutterAnalysis"]["fluencyScore"] == 67
        assert document["duration"] == pytest.approx(4.0)
        assert (tmp_path / "story-fluency.txt").is_file()

    def test_conflict_gets_numeric_suffix(self, tmp_path, sample_payload):
        path = _write_payload(tmp_path, sample_payload)

        cli.main([str(path), "--formats", "json_report"])
        cli.main([str(path), "--formats", "json_report"])

        assert (tmp_path / "story-fluency.json").is_file()
        assert (tmp_path / "story-fluency-2.json").is_file()

    def test_stdout(self, tmp_path, capsys):
        path = tmp_path / "story.txt"
        path.write_text("um I think uh this is good", encoding="utf-8")

        cli.main([str(path), "--stdout", "--formats", "json_report", "--duration", "3"])

        captured = capsys.readouterr()
        document = json.loads(captured.out)
        assert document["stutterAnalysis"]["fluencyScore"] == 43
        assert document["stutterAnalysis"]["fluencyRating"] == "developing"
        assert document["duration"] == pytest.approx(3.0)
        assert "Fluency score 43" in captured.err
        assert not (tmp_path / "story-fluency.json").exists()

    def test_expected_phrase(self, tmp_path, capsys):
        path = tmp_path / "phrase.txt"
        path.write_text("she sells seashells", encoding="utf-8")

        cli.main([
            str(path), "--stdout", "--formats", "plain_text",
            "--expected", "She sells seashells by the seashore.",
        ])

        # "she" also appears inside "seashells" and counts twice
        assert "Word accuracy: 4/6 (67%) - great job!" in capsys.readouterr().out

    def test_output_dir(self, tmp_path, sample_payload):
        out_dir = tmp_path / "reports"
        out_dir.mkdir()
        path = _write_payload(tmp_path, sample_payload)

        cli.main([str(path), "--formats", "plain_text", "--output-dir", str(out_dir)])

        assert (out_dir / "story-fluency.txt").is_file()


class TestErrors:

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main([str(tmp_path / "missing.json")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_extension(self, tmp_path, capsys):
        path = tmp_path / "audio.wav"
        path.write_bytes(b"RIFF")
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path)])
        assert exc.value.code == 1
        assert "Unsupported file type" in capsys.readouterr().err

    def test_unknown_format(self, tmp_path, sample_payload, capsys):
        path = _write_payload(tmp_path, sample_payload)
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "pdf"])
        assert exc.value.code == 1
        assert "Unknown format 'pdf'" in capsys.readouterr().err

    def test_missing_output_dir(self, tmp_path, sample_payload, capsys):
        path = _write_payload(tmp_path, sample_payload)
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "json_report", "--output-dir", str(tmp_path / "nope")])
        assert exc.value.code == 1
        assert "Output directory does not exist" in capsys.readouterr().err

    def test_negative_duration(self, tmp_path, sample_payload, capsys):
        path = _write_payload(tmp_path, sample_payload)
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "json_report", "--duration", "-1"])
        assert exc.value.code == 1
        assert "Duration must be a finite, non-negative number" in capsys.readouterr().err

    def test_bad_payload(self, tmp_path, capsys):
        path = _write_payload(tmp_path, {"words": []})
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "json_report"])
        assert exc.value.code == 1
        assert "no 'text' field" in capsys.readouterr().err
        assert not (tmp_path / "story-fluency.json").exists()

    @pytest.mark.parametrize("duration", ["inf", "nan"])
    def test_non_finite_duration(self, tmp_path, sample_payload, capsys, duration):
        path = _write_payload(tmp_path, sample_payload)
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--stdout", "--formats", "json_report,plain_text",
                      "--duration", duration])
        assert exc.value.code == 1
        captured = capsys.readouterr()
        assert "Duration must be a finite, non-negative number" in captured.err
        assert captured.out == ""

    @pytest.mark.parametrize("field", ["audio_duration", "confidence"])
    def test_negative_payload_amount(self, tmp_path, capsys, field):
        path = _write_payload(tmp_path, {"text": "hello", field: -5})
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "json_report"])
        assert exc.value.code == 1
        assert "'{}' must be a finite, non-negative number".format(field) in capsys.readouterr().err
        assert not (tmp_path / "story-fluency.json").exists()

    def test_schema_rejection_is_reported(self, tmp_path, sample_payload, capsys, monkeypatch):
        from fluency_analyzer.formatters import json_report

        monkeypatch.setattr(
            json_report, "get_schema", lambda: {"type": "object", "required": ["sessionId"]}
        )
        path = _write_payload(tmp_path, sample_payload)
        with pytest.raises(SystemExit) as exc:
            cli.main([str(path), "--formats", "json_report"])
        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "Session report is invalid" in err
        assert "'sessionId' is a required property" in err
        assert "Traceback" not in err
