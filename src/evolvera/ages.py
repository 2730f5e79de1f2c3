# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
ages.py — Procedural Age generation: signals → name → effects → record.

Pipeline
────────
  age_gate_signals(civ)         weighted signals from every domain above 10
  crossing_signals(civ, d)      single signal for the domain that crossed
  build_name(rng, signals, hint)
  build_effects(signals)
  make_age_record(rng, civ, signals, turn, hint, trigger)

Only build_name consumes randomness.  Its draw order is fixed: template,
adjective, noun, concept, then the biome-prefix roll (only when a hint is
given).  Reordering these draws changes every seeded run downstream.
"""

from __future__ import annotations

from random import Random
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

from . import config
from .catalog import (ADJECTIVES, DEFAULT_BIOME, EFFECT_TABLE, FALLBACK_KIND,
                      NAME_TEMPLATES, NOUNS, UNITY_CEILING, UNITY_EFFECT)
from .civilization import AgeRecord, Civilization, Domain, next_age_id


class Signal(NamedTuple):
    kind:   str
    weight: float


# ══════════════════════════════════════════════════════════════════════════
# Signal extraction
# ══════════════════════════════════════════════════════════════════════════

def _unity(civ: Civilization) -> List[Signal]:
    return [Signal('unity', 1.0)] if civ.ni >= config.UNITY_NI else []


def age_gate_signals(civ: Civilization) -> List[Signal]:
    """Every domain past the floor, normalised so +10 points ≈ weight 1.0."""
    out: List[Signal] = []
    for d in Domain:
        w = max(0.0, (civ.domains[d] - config.SIGNAL_FLOOR) / config.SIGNAL_SPAN)
        if w > 0:
            out.append(Signal(d.key, w))
    return out + _unity(civ)


def crossing_signals(civ: Civilization, d: Domain) -> List[Signal]:
    return [Signal(d.key, 1.0)] + _unity(civ)


def rank(signals: Sequence) -> List[Signal]:
    """Drop non-positive weights and sort strongest first (stable on ties)."""
    live = [Signal(k, w) for k, w in signals if w > 0]
    return sorted(live, key=lambda s: s.weight, reverse=True)


# ══════════════════════════════════════════════════════════════════════════
# Naming
# ══════════════════════════════════════════════════════════════════════════

def _pick(table: Mapping[str, tuple], head: str, tail: str, rng: Random) -> str:
    bag = list(table.get(head, ())) + list(table.get(tail, ()))
    if not bag:
        bag = list(table[FALLBACK_KIND])
    return bag[rng.randrange(len(bag))]


def build_name(rng: Random, signals: Sequence,
               biome_hint: Optional[str] = None) -> str:
    template = NAME_TEMPLATES[rng.randrange(len(NAME_TEMPLATES))]
    ranked   = rank(signals)
    head     = ranked[0].kind if ranked else FALLBACK_KIND
    tail     = ranked[1].kind if len(ranked) > 1 else head

    adj     = _pick(ADJECTIVES, head, tail, rng)
    noun    = _pick(NOUNS, head, tail, rng)
    concept = _pick(NOUNS, head, tail, rng)

    if biome_hint and rng.random() < config.BIOME_PREFIX_P:
        noun = f"{biome_hint} {noun}"

    return (template.replace('{Adj}', adj)
                    .replace('{Noun}', noun)
                    .replace('{Concept}', concept)
                    .replace('{Biome}', biome_hint or DEFAULT_BIOME))


# ══════════════════════════════════════════════════════════════════════════
# Effects
# ══════════════════════════════════════════════════════════════════════════

def build_effects(signals: Sequence) -> Dict[str, float]:
    effects: Dict[str, float] = {}
    for kind, w in rank(signals):
        if kind == 'unity':
            effects[UNITY_EFFECT] = max(effects.get(UNITY_EFFECT, 0.0), UNITY_CEILING)
            continue
        entry = EFFECT_TABLE.get(kind)
        if entry is None:
            continue
        key, coeff = entry
        effects[key] = effects.get(key, 0.0) + coeff * w
    return effects


# ══════════════════════════════════════════════════════════════════════════
# Record assembly
# ══════════════════════════════════════════════════════════════════════════

def make_age_record(rng: Random, civ: Civilization, signals: Sequence,
                    turn: int, biome_hint: Optional[str] = None,
                    trigger: str = '') -> AgeRecord:
    """Generate one Age and append it to the civilization's history."""
    name    = build_name(rng, signals, biome_hint)
    effects = build_effects(signals)
    causes  = {s.kind: s.weight for s in rank(signals)}
    record  = AgeRecord(
        id           = next_age_id(civ.age_history),
        name         = name,
        causes       = causes,
        effects      = effects,
        started_turn = turn,
        ends_turn    = None,
        trigger      = trigger,
    )
    civ.add_age(record)
    return record
