"""
config.py — Shared configuration constants for the Evolvera civilization sim.
"""

from dataclasses import dataclass

# ── Run length / seeding ─────────────────────────────────────────────────
TURNS = 20       # default number of turns per run
SEED  = 12345    # default seed for the shared random source

# ── Output locations ─────────────────────────────────────────────────────
SAVES_DIR     = 'saves'        # run.csv + demo.json land here
CSV_NAME      = 'run.csv'
SNAPSHOT_NAME = 'demo.json'
LOGS_DIR      = 'logs'         # tee'd console output, one file per run

# ── Civilization defaults ────────────────────────────────────────────────
CIV_NAME       = 'Demo Tribe'
DOMAIN_START   = 5.0
NI_START       = 5.0
NI_MIN, NI_MAX = 0.0, 10.0

# ── Domain progression (diminishing returns) ─────────────────────────────
BASE_COST = 2.0     # xp needed per point at v = 0
DECAY     = 0.05    # cost growth per domain point

# ── Action / event resolution ────────────────────────────────────────────
ACTIONS_PER_TURN = 2
EVENT_CHANCE     = 0.30

# ── Milestone thresholds ─────────────────────────────────────────────────
MINOR_STEP   = 5.0
MINOR_BONUS  = 0.1
MAJOR_STEP   = 15.0
MAJOR_BONUS  = 0.5
SIMPLE_AGE_THRESHOLD = 15.0   # legacy single-shot Age trigger

# ── Age generation ───────────────────────────────────────────────────────
SIGNAL_FLOOR     = 10.0   # domain value below which no signal is emitted
SIGNAL_SPAN      = 10.0   # points above the floor that map to weight 1.0
UNITY_NI         = 9.0    # NI at or above this adds a 'unity' signal
BIOME_HINT       = 'River'
BIOME_PREFIX_P   = 0.5
STABILITY_NUDGE  = 0.1    # Social += STABILITY_NUDGE * effects['stability']
DIPLOMACY_NUDGE  = 0.1    # Expression += DIPLOMACY_NUDGE * effects['diplomacy']


@dataclass(frozen=True)
class SimConfig:
    """Per-run settings.  CLI arguments override the module defaults above.

    ``duplicate_ages`` keeps the legacy behaviour where a domain's first
    15-point crossing produces two Age records (age-gate + simple trigger).
    Turn it off for single-firing mode.
    """
    turns:          int  = TURNS
    seed:           int  = SEED
    biome_hint:     str  = BIOME_HINT
    duplicate_ages: bool = True
    civ_name:       str  = CIV_NAME
