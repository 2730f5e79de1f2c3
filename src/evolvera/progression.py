# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
progression.py — Action/event resolution and the diminishing-returns curve.

Call order each turn (see sim.run_turn):
    actions = pick_actions(rng)
    xp      = accumulate_xp(actions)
    event   = draw_event(rng)
    apply_event_multipliers(xp, event)      # before growth
    apply_growth(civ, xp)
    apply_event_deltas(civ, event)          # after growth

Random draws happen only in pick_actions and draw_event, in that order.
"""

from __future__ import annotations

from random import Random
from typing import Dict, Iterable, List, Optional

from . import config
from .catalog import ACTION_NAMES, EVENTS, EventDefinition, action_xp
from .civilization import Civilization, Domain, require_domain


# ══════════════════════════════════════════════════════════════════════════
# Domain progression engine
# ══════════════════════════════════════════════════════════════════════════

def grow(v: float, x: float) -> float:
    """Increment for experience *x* at current value *v*.

    delta = x / (base_cost * (1 + v * decay)).  Negative xp shrinks the
    value through the same divisor; no floor or ceiling here.
    """
    return x / (config.BASE_COST * (1.0 + v * config.DECAY))


def apply_growth(civ: Civilization, xp: Dict[Domain, float]) -> Dict[Domain, float]:
    """Convert xp into domain deltas in place.  Returns the deltas applied."""
    deltas: Dict[Domain, float] = {}
    for d, x in xp.items():
        current = civ.value(d)
        delta   = grow(current, x)
        civ.domains[d] = current + delta
        deltas[d] = delta
    return deltas


# ══════════════════════════════════════════════════════════════════════════
# Action resolver
# ══════════════════════════════════════════════════════════════════════════

def pick_actions(rng: Random, n: int = config.ACTIONS_PER_TURN) -> List[str]:
    """Uniform draws with replacement from the action catalog."""
    return [ACTION_NAMES[rng.randrange(len(ACTION_NAMES))] for _ in range(n)]


def empty_xp() -> Dict[Domain, float]:
    return {d: 0.0 for d in Domain}


def accumulate_xp(actions: Iterable[str]) -> Dict[Domain, float]:
    xp = empty_xp()
    for a in actions:
        for d, amount in action_xp(a).items():
            xp[d] += amount
    return xp


# ══════════════════════════════════════════════════════════════════════════
# Event resolver
# ══════════════════════════════════════════════════════════════════════════

def draw_event(rng: Random, chance: float = config.EVENT_CHANCE) -> Optional[EventDefinition]:
    """At most one event per turn.  The pick draw only happens on a hit."""
    if rng.random() < chance:
        return EVENTS[rng.randrange(len(EVENTS))]
    return None


def apply_event_multipliers(xp: Dict[Domain, float],
                            event: Optional[EventDefinition]) -> None:
    if event is None:
        return
    for d, mult in event.xp_multipliers.items():
        xp[require_domain(d)] *= mult


def apply_event_deltas(civ: Civilization, event: Optional[EventDefinition]) -> None:
    if event is None:
        return
    for d, delta in event.domain_deltas.items():
        civ.nudge(d, delta)
