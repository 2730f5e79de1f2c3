# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
milestones.py — One-shot threshold unlocks and Age triggers.

Four independent families share the civilization's capability set.  A key
present in the set blocks that exact (family, domain, tier) forever.

  family       step  key                          effect
  ───────────  ────  ───────────────────────────  ──────────────────────────
  major         15   major_{Domain}_{tier}        +0.5 to the domain
  minor          5   minor_{Domain}_{tier}        +0.1 to the domain
  age_gate      15   age_gate_{Domain}_{tier}     full Age pipeline + nudges
  simple        15   age_{Domain}_15              simplified Age (once ever)

Major and minor fire on crossings (tier now > tier at start of turn).  The
age-gate fires whenever the current tier is ≥ 1 and its key is new; the
simple trigger fires the first time a domain stands at 15 or above.

Call order each turn (see sim.run_turn):
    apply_milestones(civ, prev)
    check_age_gates(rng, civ, turn, hint)
    check_simple_crossings(rng, civ, turn, hint)    # duplicate-ages mode only
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from random import Random
from typing import Dict, List, Optional

from . import config
from .ages import age_gate_signals, crossing_signals, make_age_record
from .civilization import AgeRecord, Civilization, Domain

MAJOR    = 'major'
MINOR    = 'minor'
AGE_GATE = 'age_gate'
SIMPLE   = 'simple'


@dataclass(frozen=True)
class MilestoneEvent:
    family: str
    domain: Domain
    tier:   int
    key:    str
    age:    Optional[AgeRecord] = None

    @property
    def threshold(self) -> float:
        step = config.MINOR_STEP if self.family == MINOR else config.MAJOR_STEP
        return self.tier * step


def tier(value: float, step: float) -> int:
    """floor(value / step) as an unbounded int; negative values give negative tiers."""
    return math.floor(value / step)


def milestone_key(family: str, d: Domain, t: int) -> str:
    return f"{family}_{d.value}_{t}"


def simple_key(d: Domain) -> str:
    return f"age_{d.value}_{int(config.SIMPLE_AGE_THRESHOLD)}"


# ══════════════════════════════════════════════════════════════════════════
# Minor / major crossings
# ══════════════════════════════════════════════════════════════════════════

def _crossing(civ: Civilization, d: Domain, value: float, prev: float,
              family: str, step: float, bonus: float) -> Optional[MilestoneEvent]:
    now, before = tier(value, step), tier(prev, step)
    if now <= before:
        return None
    key = milestone_key(family, d, now)
    if not civ.unlock(key):
        return None
    civ.nudge(d, bonus)
    return MilestoneEvent(family, d, now, key)


def apply_milestones(civ: Civilization, prev: Dict[Domain, float]) -> List[MilestoneEvent]:
    """Major first, then minor, per domain.

    Both tiers come from the value at the start of the check; a major bonus
    never pushes the minor tier further.
    """
    fired: List[MilestoneEvent] = []
    for d in Domain:
        value = civ.domains[d]
        for family, step, bonus in ((MAJOR, config.MAJOR_STEP, config.MAJOR_BONUS),
                                    (MINOR, config.MINOR_STEP, config.MINOR_BONUS)):
            ev = _crossing(civ, d, value, prev[d], family, step, bonus)
            if ev:
                fired.append(ev)
    return fired


# ══════════════════════════════════════════════════════════════════════════
# Age triggers
# ══════════════════════════════════════════════════════════════════════════

def check_age_gates(rng: Random, civ: Civilization, turn: int,
                    biome_hint: Optional[str] = config.BIOME_HINT) -> List[MilestoneEvent]:
    fired: List[MilestoneEvent] = []
    for d in Domain:
        t = tier(civ.domains[d], config.MAJOR_STEP)
        if t < 1:
            continue
        key = milestone_key(AGE_GATE, d, t)
        if not civ.unlock(key):
            continue
        threshold = int(t * config.MAJOR_STEP)
        record = make_age_record(rng, civ, age_gate_signals(civ), turn,
                                 biome_hint, trigger=f"{d.value}>={threshold}")
        # Immediate flavour from the generated effects
        if 'stability' in record.effects:
            civ.nudge(Domain.SOCIAL, config.STABILITY_NUDGE * record.effects['stability'])
        if 'diplomacy' in record.effects:
            civ.nudge(Domain.EXPRESSION, config.DIPLOMACY_NUDGE * record.effects['diplomacy'])
        fired.append(MilestoneEvent(AGE_GATE, d, t, key, record))
    return fired


def check_simple_crossings(rng: Random, civ: Civilization, turn: int,
                           biome_hint: Optional[str] = config.BIOME_HINT) -> List[MilestoneEvent]:
    fired: List[MilestoneEvent] = []
    for d in Domain:
        if civ.domains[d] < config.SIMPLE_AGE_THRESHOLD:
            continue
        key = simple_key(d)
        if not civ.unlock(key):
            continue
        record = make_age_record(rng, civ, crossing_signals(civ, d), turn,
                                 biome_hint, trigger=d.value)
        fired.append(MilestoneEvent(SIMPLE, d, 1, key, record))
    return fired
