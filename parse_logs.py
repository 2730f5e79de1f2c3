"""
parse_logs.py — Evolvera Log Parser
===================================
Scrapes per-turn lines (and Age announcements) from run_*.txt logs written
by ``python -m evolvera`` and consolidates them into a single results.csv.

Usage:
    python parse_logs.py --log-dir ./logs --output results.csv

Expected turn line format (as printed by display.turn_line):
    T07 [raid, trade]: S=6.2 P=7.9 W=6.0 E=5.4 SO=5.2 X=5.0 | NI=2.6  [Event: Flood]

Values on these lines carry one decimal only — use saves/run.csv when the
three-decimal telemetry is needed.
"""

import argparse
import csv
import glob
import os
import re
import sys
from pathlib import Path


# ---------------------------------------------------------------------------
# Pattern library
# ---------------------------------------------------------------------------
TURN_LINE = re.compile(
    r"^T(?P<turn>\d+)\s+\[(?P<actions>[^\]]*)\]:\s+"
    r"S=(?P<survival>-?[\d.]+)\s+"
    r"P=(?P<production>-?[\d.]+)\s+"
    r"W=(?P<warfare>-?[\d.]+)\s+"
    r"E=(?P<exploration>-?[\d.]+)\s+"
    r"SO=(?P<social>-?[\d.]+)\s+"
    r"X=(?P<expression>-?[\d.]+)\s+"
    r"\|\s+NI=(?P<ni>-?[\d.]+)"
    r"(?:\s+\[Event:\s+(?P<event>[^\]]+)\])?"
)
AGE_LINE = re.compile(r"\[AGE\]\s+(?P<name>.+?)\s+\((?:from|triggered by)\s+(?P<domain>\w+)")

DOMAIN_FIELDS = ["survival", "production", "warfare", "exploration", "social", "expression"]
OUTPUT_FIELDS = ["run_id", "turn", "action1", "action2", "event"] + DOMAIN_FIELDS + ["ni", "ages"]


def extract_run_id(filepath: str) -> str:
    """Derive a run identifier from the filename.

      - Seeded:        run_20260227_054559_seed42.txt → '20260227_054559_seed42'
      - Date-stamped:  run_20260227_054559.txt        → '20260227_054559'
      - Numeric:       run_042.txt                    → '042'
      - Fallback:      anything_else.txt              → stem as-is
    """
    stem = Path(filepath).stem
    m = re.match(r"run_(\d{8}_\d{6}(?:_seed-?\d+)?)$", stem)
    if m:
        return m.group(1)
    m2 = re.match(r"run_(\d+)$", stem)
    if m2:
        return m2.group(1)
    if stem.startswith("run_"):
        return stem[4:]
    return stem


def parse_line(line: str) -> dict | None:
    """Match one turn line.  Returns a dict or None."""
    m = TURN_LINE.search(line.strip())
    if not m:
        return None
    actions = [a.strip() for a in m.group("actions").split(",")]
    row = {
        "turn":    int(m.group("turn")),
        "action1": actions[0] if actions else "",
        "action2": actions[1] if len(actions) > 1 else "",
        "event":   m.group("event") or "",
    }
    for f in DOMAIN_FIELDS + ["ni"]:
        row[f] = float(m.group(f))
    return row


def parse_file(filepath) -> list[dict]:
    """Parse one log file into turn rows.

    Age lines are printed *before* the turn line they belong to, so they
    are buffered and attached (as a ' | '-joined string) to the next row.
    """
    rows = []
    pending_ages: list = []
    unmatched_count = 0
    with open(filepath, "r", encoding="utf-8", errors="replace") as fh:
        for line in fh:
            age_m = AGE_LINE.search(line)
            if age_m:
                pending_ages.append(age_m.group("name"))
                continue
            parsed = parse_line(line)
            if parsed:
                parsed["ages"] = " | ".join(pending_ages)
                pending_ages = []
                rows.append(parsed)
            elif re.match(r"^T\d+\s", line.strip()):
                unmatched_count += 1
    if unmatched_count:
        print(f"WARNING: {unmatched_count} turn-like lines in '{Path(filepath).name}' did not match.")
    return rows


def main():
    parser = argparse.ArgumentParser(
        description="Parse Evolvera run_*.txt logs into results.csv"
    )
    parser.add_argument(
        "--log-dir", default="logs", help="Directory containing run_*.txt files (default: logs)"
    )
    parser.add_argument(
        "--output", default="results.csv", help="Output CSV path (default: results.csv)"
    )
    parser.add_argument(
        "--pattern", default="run_*.txt", help="Glob pattern for log files (default: run_*.txt)"
    )
    parser.add_argument(
        "--sample", action="store_true",
        help="Print the first 5 parsed rows from each file for verification"
    )
    args = parser.parse_args()

    log_glob = os.path.join(args.log_dir, args.pattern)
    log_files = sorted(glob.glob(log_glob))

    if not log_files:
        print(f"ERROR: No files found matching '{log_glob}'")
        sys.exit(1)

    print(f"Found {len(log_files)} log file(s) in '{args.log_dir}'")

    all_rows = []
    for filepath in log_files:
        run_id = extract_run_id(filepath)
        rows = parse_file(filepath)
        print(f"  {Path(filepath).name}: {len(rows)} turns parsed")
        if args.sample and rows:
            for r in rows[:5]:
                print(f"    {r}")
        for row in rows:
            all_rows.append({"run_id": run_id, **row})

    if not all_rows:
        print("\nERROR: No turn rows were extracted. Check that the logs come from python -m evolvera.")
        sys.exit(1)

    all_rows.sort(key=lambda r: (r["run_id"], r["turn"]))

    output_path = Path(args.output)
    with open(output_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=OUTPUT_FIELDS)
        writer.writeheader()
        writer.writerows(all_rows)

    print(f"\nDone. {len(all_rows)} total rows written to '{output_path}'")


if __name__ == "__main__":
    main()
