# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
display.py — Console rendering for the Evolvera sim.

Everything here prints; the core modules never do.  Lines are shaped so
parse_logs.py can scrape them back out of a run log.
"""

from __future__ import annotations

from . import config
from .civilization import Civilization, Domain

W = 72

# Short labels used on the per-turn line
_ABBREV = {
    Domain.SURVIVAL:    'S',
    Domain.PRODUCTION:  'P',
    Domain.WARFARE:     'W',
    Domain.EXPLORATION: 'E',
    Domain.SOCIAL:      'SO',
    Domain.EXPRESSION:  'X',
}


# ══════════════════════════════════════════════════════════════════════════
# Logging: tee stdout to a run file, filter what reaches the terminal
# ══════════════════════════════════════════════════════════════════════════

class LogTee:
    """Every byte goes to the log file.  ``quiet`` keeps only notable lines on screen."""

    _SHOW = frozenset({
        '[AGE]', 'MAJOR breakthrough', 'WORLD EVENT',
        '== Evolvera', 'Saved ->', 'CIVILIZATION SUMMARY',
    })

    passthrough: bool = False   # True → show everything (final report)

    def __init__(self, log_fh, real_stdout, quiet: bool = False):
        self._log   = log_fh
        self._real  = real_stdout
        self._quiet = quiet
        self._buf   = ''

    def write(self, text: str) -> None:
        self._log.write(text)
        self._buf += text
        while '\n' in self._buf:
            line, self._buf = self._buf.split('\n', 1)
            show = (not self._quiet or self.passthrough
                    or any(kw in line for kw in self._SHOW))
            if show:
                self._real.write(line + '\n')

    def flush(self) -> None:
        self._log.flush()
        self._real.flush()

    def fileno(self) -> int:
        return self._real.fileno()


# ══════════════════════════════════════════════════════════════════════════
# Per-turn output
# ══════════════════════════════════════════════════════════════════════════

def banner(turns: int, seed: int) -> str:
    return f"== Evolvera Sim (turns={turns}, seed={seed}) =="


def turn_line(rec) -> str:
    """T01 [hunt, farm]: S=6.2 P=5.4 … | NI=2.4  [Event: Drought]"""
    vals = rec.domain_values()
    parts = ' '.join(f"{_ABBREV[d]}={vals[d]:.1f}" for d in Domain)
    line = f"T{rec.turn:02d} [{', '.join(rec.actions)}]: {parts} | NI={rec.ni:.1f}"
    if rec.event:
        line += f"  [Event: {rec.event}]"
    return line


def print_turn(rec) -> None:
    print(turn_line(rec))


def print_event(msg: str) -> None:
    """on_event callback: indent milestone lines under the turn they belong to."""
    text = msg.split(': ', 1)[-1]
    indent = '        ' if text.startswith('[AGE]') else '    '
    print(f"{indent}{text}")


# ══════════════════════════════════════════════════════════════════════════
# End-of-run report
# ══════════════════════════════════════════════════════════════════════════

def final_report(civ: Civilization, turns: int) -> None:
    sep = '═' * W
    print(f"\n{sep}")
    print(f"CIVILIZATION SUMMARY — {civ.name} — {turns} turns")
    print(sep)
    for d in Domain:
        v   = civ.domains[d]
        bar = '█' * min(30, max(0, int(v)))
        print(f"  {d.value:<12} {v:7.2f}  {bar}")
    print(f"  {'NI':<12} {civ.ni:7.2f}  (range {config.NI_MIN:g}–{config.NI_MAX:g})")

    minors = sum(1 for k in civ.capabilities if k.startswith('minor_'))
    majors = sum(1 for k in civ.capabilities if k.startswith('major_'))
    print(f"\nMilestones: {minors} minor  |  {majors} major")

    print(f"\nAges ({len(civ.age_history)}):")
    for a in civ.age_history:
        causes = ', '.join(f"{k} {w:.2f}" for k, w in a.causes.items()) or '—'
        print(f"  {a.id}  T{a.started_turn:02d}  {a.name:<32} [{causes}]")
    if not civ.age_history:
        print("  (none yet)")
