"""
test_parse_logs.py — pytest suite for parse_logs.py
====================================================
Covers: extract_run_id, parse_line, parse_file, and the main() end-to-end path.
"""

import csv
import sys

import pytest

from parse_logs import extract_run_id, parse_line, parse_file, main


# ─────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────

LINE_T1 = "T01 [hunt, farm]: S=6.2 P=5.4 W=5.2 E=5.0 SO=5.0 X=5.0 | NI=2.4"
LINE_T2 = "T02 [raid, raid]: S=5.8 P=6.1 W=6.7 E=5.0 SO=4.4 X=5.0 | NI=1.8  [Event: Drought]"

EXPECTED_T1 = {
    "turn": 1, "action1": "hunt", "action2": "farm", "event": "",
    "survival": 6.2, "production": 5.4, "warfare": 5.2,
    "exploration": 5.0, "social": 5.0, "expression": 5.0, "ni": 2.4,
}


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.DictReader(f))


# ─────────────────────────────────────────────────────
# extract_run_id
# ─────────────────────────────────────────────────────

class TestExtractRunId:
    def test_seeded_filename(self):
        assert extract_run_id("run_20260227_054559_seed42.txt") == "20260227_054559_seed42"

    def test_date_stamped_filename(self):
        assert extract_run_id("run_20260227_054559.txt") == "20260227_054559"

    def test_short_numeric_id(self):
        assert extract_run_id("run_042.txt") == "042"

    def test_unrecognised_filename_no_numeric_content(self):
        # Filename has no 'run_' prefix — full stem is returned
        assert extract_run_id("chronicle.txt") == "chronicle"


# ─────────────────────────────────────────────────────
# parse_line
# ─────────────────────────────────────────────────────

class TestParseLine:
    def test_plain_turn_line(self):
        row = parse_line(LINE_T1)
        assert row.keys() == EXPECTED_T1.keys()
        for key, expected in EXPECTED_T1.items():
            if isinstance(expected, float):
                assert row[key] == pytest.approx(expected), key
            else:
                assert row[key] == expected, key

    def test_event_suffix(self):
        row = parse_line(LINE_T2)
        assert row["event"] == "Drought"
        assert row["action1"] == row["action2"] == "raid"
        assert row["social"] == pytest.approx(4.4)

    def test_negative_values(self):
        line = "T120 [raid, raid]: S=5.0 P=5.0 W=5.0 E=5.0 SO=-0.3 X=5.0 | NI=0.0"
        row = parse_line(line)
        assert row["turn"] == 120
        assert row["social"] == pytest.approx(-0.3)

    def test_milestone_line_returns_none(self):
        assert parse_line("    >> MAJOR breakthrough in Warfare (>= 15)") is None

    def test_banner_returns_none(self):
        assert parse_line("== Evolvera Sim (turns=20, seed=12345) ==") is None

    def test_empty_string_returns_none(self):
        assert parse_line("") is None


# ─────────────────────────────────────────────────────
# parse_file
# ─────────────────────────────────────────────────────

_RUN_LOG = (
    "== Evolvera Sim (turns=3, seed=1) ==\n"
    f"{LINE_T1}\n"
    "    WORLD EVENT: Drought\n"
    "        [AGE] The Martial Legions  (from Warfare ≥ 15)\n"
    "        [AGE] Era of Spears (triggered by Warfare)\n"
    f"{LINE_T2}\n"
    "T03 [trade, ritual]: S=5.8 P=6.3 W=6.7 E=5.4 SO=4.8 X=5.6 | NI=2.2\n"
)


class TestParseFile:
    def test_turn_rows_and_ages(self, tmp_path):
        f = tmp_path / "run_test.txt"
        f.write_text(_RUN_LOG, encoding="utf-8")
        rows = parse_file(f)
        assert [r["turn"] for r in rows] == [1, 2, 3]
        assert rows[0]["ages"] == ""
        assert rows[1]["ages"] == "The Martial Legions | Era of Spears"
        assert rows[2]["ages"] == ""

    def test_warning_emitted_for_turn_like_unmatched_line(self, tmp_path, capsys):
        f = tmp_path / "run_warn.txt"
        f.write_text("T07 [hunt]: garbled\n", encoding="utf-8")
        assert parse_file(f) == []
        captured = capsys.readouterr()
        assert "WARNING" in captured.out
        assert "1" in captured.out

    def test_empty_result_for_non_data_lines_only(self, tmp_path):
        f = tmp_path / "run_empty.txt"
        f.write_text(
            "CIVILIZATION SUMMARY — Demo Tribe — 20 turns\n"
            "Milestones: 3 minor  |  1 major\n",
            encoding="utf-8",
        )
        assert parse_file(f) == []


# ─────────────────────────────────────────────────────
# End-to-end: main()
# ─────────────────────────────────────────────────────

_LOG_A = f"{LINE_T1}\n{LINE_T2}\n"
_LOG_B = LINE_T2.replace("T02", "T01") + "\n" + LINE_T1.replace("T01", "T02") + "\n"


def _write_logs(tmp_path):
    (tmp_path / "run_20260101_000001_seed1.txt").write_text(_LOG_A, encoding="utf-8")
    (tmp_path / "run_20260101_000002_seed2.txt").write_text(_LOG_B, encoding="utf-8")


class TestMain:
    def test_generates_valid_csv(self, tmp_path, monkeypatch):
        _write_logs(tmp_path)
        output = tmp_path / "results.csv"
        monkeypatch.setattr(sys, "argv", [
            "parse_logs.py", "--log-dir", str(tmp_path), "--output", str(output),
        ])
        main()
        rows = _read(output)
        assert len(rows) == 4
        assert list(rows[0].keys()) == [
            "run_id", "turn", "action1", "action2", "event",
            "survival", "production", "warfare", "exploration", "social", "expression",
            "ni", "ages",
        ]

    def test_correct_run_ids_in_output(self, tmp_path, monkeypatch):
        _write_logs(tmp_path)
        output = tmp_path / "results.csv"
        monkeypatch.setattr(sys, "argv", [
            "parse_logs.py", "--log-dir", str(tmp_path), "--output", str(output),
        ])
        main()
        run_ids = {r["run_id"] for r in _read(output)}
        assert run_ids == {"20260101_000001_seed1", "20260101_000002_seed2"}

    def test_rows_sorted_by_run_id_then_turn(self, tmp_path, monkeypatch):
        # Write files in reverse order to confirm sort is applied by content, not discovery
        (tmp_path / "run_20260101_000002.txt").write_text(_LOG_A, encoding="utf-8")
        (tmp_path / "run_20260101_000001.txt").write_text(_LOG_B, encoding="utf-8")
        output = tmp_path / "results.csv"
        monkeypatch.setattr(sys, "argv", [
            "parse_logs.py", "--log-dir", str(tmp_path), "--output", str(output),
        ])
        main()
        rows = _read(output)
        run_ids = [r["run_id"] for r in rows]
        assert run_ids == sorted(run_ids)
        for rid in set(run_ids):
            turns = [int(r["turn"]) for r in rows if r["run_id"] == rid]
            assert turns == sorted(turns)

    def test_exits_nonzero_on_empty_log_directory(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", [
            "parse_logs.py", "--log-dir", str(tmp_path),
        ])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code != 0

    def test_exits_nonzero_when_no_turn_rows(self, tmp_path, monkeypatch):
        (tmp_path / "run_001.txt").write_text("nothing here\n", encoding="utf-8")
        monkeypatch.setattr(sys, "argv", [
            "parse_logs.py", "--log-dir", str(tmp_path),
            "--output", str(tmp_path / "out.csv"),
        ])
        with pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code != 0
