# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
catalog.py — Static, read-only tables: actions, world events, Age lexicon.

Built once at import.  Mappings are wrapped in MappingProxyType and the
event definitions are frozen, so nothing can edit a catalog at runtime.

Lookups that miss raise ValueError — the catalogs are closed sets, so an
unknown name is a programming defect rather than a runtime condition.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .civilization import Domain

S, P, W, E, SO, X = (Domain.SURVIVAL, Domain.PRODUCTION, Domain.WARFARE,
                     Domain.EXPLORATION, Domain.SOCIAL, Domain.EXPRESSION)


# ══════════════════════════════════════════════════════════════════════════
# Actions — per-action experience contributions
# ══════════════════════════════════════════════════════════════════════════

ACTIONS: Mapping[str, Mapping[Domain, float]] = MappingProxyType({
    'hunt':           MappingProxyType({S: 1.0, W: 0.5}),
    'farm':           MappingProxyType({S: 2.0, P: 1.0}),
    'raid':           MappingProxyType({W: 2.0, P: 1.0, SO: -0.5}),
    'trade':          MappingProxyType({E: 1.0, SO: 1.0, P: 0.5}),
    'ritual':         MappingProxyType({X: 1.5, SO: 0.5}),
    'explore':        MappingProxyType({E: 1.5, S: 0.5}),
    'infrastructure': MappingProxyType({P: 1.5, SO: 0.5}),
})

# Draw order for the random picker; must stay in catalog order
ACTION_NAMES: tuple = tuple(ACTIONS)


def action_xp(name: str) -> Mapping[Domain, float]:
    try:
        return ACTIONS[name]
    except KeyError:
        raise ValueError(f"invalid action: {name!r}") from None


# ══════════════════════════════════════════════════════════════════════════
# World events
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EventDefinition:
    """A world event.

    xp_multipliers scale this turn's experience before growth (absent → 1.0);
    domain_deltas are flat additions applied after growth.
    """
    name:           str
    domain_deltas:  Mapping[Domain, float]
    xp_multipliers: Mapping[Domain, float]

    def multiplier(self, d: Domain) -> float:
        return self.xp_multipliers.get(d, 1.0)


def _event(name: str, deltas: dict, mults: dict) -> EventDefinition:
    return EventDefinition(name, MappingProxyType(deltas), MappingProxyType(mults))


EVENTS: tuple = (
    _event('Drought', {S: -0.45, SO: -0.15}, {S: 0.9}),
    _event('Flood',   {S: +0.30, P: -0.15},  {P: 0.93}),
    _event('Plague',  {SO: -0.45, X: -0.15}, {E: 0.9}),
)

_EVENTS_BY_NAME = MappingProxyType({ev.name: ev for ev in EVENTS})


def event_by_name(name: str) -> EventDefinition:
    try:
        return _EVENTS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"invalid event: {name!r}") from None


# ══════════════════════════════════════════════════════════════════════════
# Age naming lexicon
# ══════════════════════════════════════════════════════════════════════════

NAME_TEMPLATES: tuple = (
    "The {Adj} {Noun}",
    "{Noun} of {Concept}",
    "Era of {Concept}",
    "The {Adj} {Concept}",
    "{Biome} {Noun}",
)

ADJECTIVES: Mapping[str, tuple] = MappingProxyType({
    'survival':    ('Fertile', 'Resilient', 'Provisioned', 'Green'),
    'production':  ('Forged', 'Masoned', 'Industrious', 'Artisan'),
    'warfare':     ('Martial', 'Bronzeclad', 'Hardened', 'Bannered'),
    'exploration': ('Wandering', 'Seafaring', 'Expansive', 'Astral'),
    'social':      ('Ordered', 'Civic', 'Codified', 'Cohesive'),
    'expression':  ('Radiant', 'Golden', 'Sacred', 'Harmonic'),
    'crisis':      ('Fractured', 'Tempest', 'Ashen', 'Trial'),
    'unity':       ('United', 'Concord', 'Commonweal', 'Harmonic'),
})

# Concepts reuse this table
NOUNS: Mapping[str, tuple] = MappingProxyType({
    'survival':    ('Harvest', 'Granaries', 'Rivers', 'Plenty'),
    'production':  ('Stoneworks', 'Forges', 'Workshops', 'Engines'),
    'warfare':     ('Standards', 'Spears', 'Legions', 'Strongholds'),
    'exploration': ('Ways', 'Currents', 'Horizons', 'Maps'),
    'social':      ('Edicts', 'Assemblies', 'Laws', 'Provinces'),
    'expression':  ('Rites', 'Muse', 'Theater', 'Constellations'),
    'crisis':      ('Trials', 'Storms', 'Woe', 'Upheaval'),
    'unity':       ('Unity', 'Concord', 'Accord', 'Commons'),
})

FALLBACK_KIND = 'social'
DEFAULT_BIOME = 'Wilds'

# ── Signal kind → (effect key, per-weight coefficient) ────────────────────
# 'unity' is handled separately: it sets a ceiling rather than adding.
EFFECT_TABLE: Mapping[str, tuple] = MappingProxyType({
    'survival':    ('food_yield',  0.03),
    'production':  ('build_speed', 0.03),
    'warfare':     ('combat',      0.05),
    'exploration': ('trade',       0.05),
    'social':      ('stability',   0.05),
    'expression':  ('diplomacy',   0.05),
    'crisis':      ('resilience',  0.05),
})
UNITY_EFFECT  = 'ni_cap'
UNITY_CEILING = 10.0
