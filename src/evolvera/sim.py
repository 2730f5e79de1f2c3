# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
sim.py — Turn orchestrator for the Evolvera civilization simulation.

Turn sequence
─────────────
  1 · actions     — two uniform picks from the action catalog
  2 · event       — 30% chance of one world event; xp multipliers applied
  3 · growth      — xp → domain deltas (diminishing returns)
  4 · deltas      — flat event deltas
  5 · milestones  — major / minor crossings against start-of-turn values
  6 · age gates   — full Age pipeline per new 15-point tier
  7 · simple ages — legacy single-shot trigger (duplicate-ages mode)
  8 · NI          — national identity recomputed and clamped
  9 · record      — TurnRecord emitted

The core never prints.  Human-readable lines go to ``event_log`` and, if
given, to the ``on_event`` callback; display.py decides what to show.
"""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import Callable, Dict, List, Optional

from . import config
from .civilization import Civilization, Domain, recompute_ni
from .milestones import (AGE_GATE, MAJOR, MINOR, MilestoneEvent,
                         apply_milestones, check_age_gates,
                         check_simple_crossings)
from .progression import (accumulate_xp, apply_event_deltas,
                          apply_event_multipliers, apply_growth, draw_event,
                          pick_actions)

CSV_COLUMNS = ('turn', 'action1', 'action2', 'event',
               'survival', 'production', 'warfare', 'exploration',
               'social', 'expression', 'ni')


@dataclass(frozen=True)
class TurnRecord:
    turn:        int
    action1:     str
    action2:     str
    event:       Optional[str]
    survival:    float
    production:  float
    warfare:     float
    exploration: float
    social:      float
    expression:  float
    ni:          float

    @property
    def actions(self) -> List[str]:
        return [self.action1, self.action2]

    def domain_values(self) -> Dict[Domain, float]:
        return {d: getattr(self, d.key) for d in Domain}

    def as_row(self) -> tuple:
        return tuple(getattr(self, c) for c in CSV_COLUMNS)


def describe(ev: MilestoneEvent) -> str:
    """Event-log text for a fired milestone."""
    d = ev.domain.value
    if ev.family == MAJOR:
        return f">> MAJOR breakthrough in {d} (>= {ev.threshold:g})"
    if ev.family == MINOR:
        return f"> minor perk unlocked in {d} (+5 x{ev.tier})"
    if ev.family == AGE_GATE:
        return f"[AGE] {ev.age.name}  (from {d} ≥ {ev.threshold:g})"
    return f"[AGE] {ev.age.name} (triggered by {d})"


class Simulation:
    """Owns one civilization and the shared random source for a run."""

    def __init__(self, cfg: Optional[config.SimConfig] = None,
                 civ: Optional[Civilization] = None,
                 on_event: Optional[Callable[[str], None]] = None) -> None:
        self.cfg       = cfg or config.SimConfig()
        self.rng       = Random(self.cfg.seed)
        self.civ       = civ or Civilization(name=self.cfg.civ_name)
        self.on_event  = on_event
        self.turn      = 0
        self.records:    List[TurnRecord]     = []
        self.milestones: List[MilestoneEvent] = []
        self.event_log:  List[str]            = []
        # Domain values as of the end of the previous turn
        self._prev: Dict[Domain, float] = dict(self.civ.domains)

    def _log(self, turn: int, text: str) -> None:
        msg = f"Turn {turn:03d}: {text}"
        self.event_log.append(msg)
        if self.on_event is not None:
            self.on_event(msg)

    def _fire(self, turn: int, events: List[MilestoneEvent]) -> None:
        for ev in events:
            self.milestones.append(ev)
            self._log(turn, describe(ev))

    def run_turn(self) -> TurnRecord:
        self.turn += 1
        t, civ, rng = self.turn, self.civ, self.rng

        actions = pick_actions(rng)
        xp      = accumulate_xp(actions)
        event   = draw_event(rng)
        apply_event_multipliers(xp, event)
        apply_growth(civ, xp)
        apply_event_deltas(civ, event)
        if event is not None:
            self._log(t, f"WORLD EVENT: {event.name}")

        self._fire(t, apply_milestones(civ, self._prev))
        self._fire(t, check_age_gates(rng, civ, t, self.cfg.biome_hint))
        self._prev = dict(civ.domains)
        if self.cfg.duplicate_ages:
            self._fire(t, check_simple_crossings(rng, civ, t, self.cfg.biome_hint))

        recompute_ni(civ)
        v = civ.domains
        rec = TurnRecord(
            turn        = t,
            action1     = actions[0],
            action2     = actions[1],
            event       = event.name if event else None,
            survival    = v[Domain.SURVIVAL],
            production  = v[Domain.PRODUCTION],
            warfare     = v[Domain.WARFARE],
            exploration = v[Domain.EXPLORATION],
            social      = v[Domain.SOCIAL],
            expression  = v[Domain.EXPRESSION],
            ni          = civ.ni,
        )
        self.records.append(rec)
        return rec

    def run(self, turns: Optional[int] = None,
            on_turn: Optional[Callable[[TurnRecord], None]] = None) -> Civilization:
        n = self.cfg.turns if turns is None else turns
        if n < 1:
            raise ValueError(f"turn count must be >= 1, got {n}")
        for _ in range(n):
            rec = self.run_turn()
            if on_turn is not None:
                on_turn(rec)
        return self.civ


def run(turns: int = config.TURNS, seed: int = config.SEED,
        duplicate_ages: bool = True) -> Simulation:
    """Convenience wrapper: build, run and return a finished Simulation."""
    sim = Simulation(config.SimConfig(turns=turns, seed=seed,
                                      duplicate_ages=duplicate_ages))
    sim.run()
    return sim
