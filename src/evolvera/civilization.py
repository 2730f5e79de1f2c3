# (c) 2026 (KriaetvAspie / AspieTheBard)
# Licensed under the Polyform Noncommercial License 1.0.0
"""
civilization.py — Core state: the six domains, the civilization, Age records.

Public API:
    Domain                      — closed enum of competence axes
    Domain.parse(name)          -> Domain   (raises ValueError on unknown)
    AgeRecord                   — immutable generated milestone
    Civilization                — mutable per-run state
    compute_ni(domains)         -> float    (clamped to [0, 10])
    recompute_ni(civ)           -> float    (stores and returns)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import config


class Domain(enum.Enum):
    SURVIVAL    = 'Survival'
    PRODUCTION  = 'Production'
    WARFARE     = 'Warfare'
    EXPLORATION = 'Exploration'
    SOCIAL      = 'Social'
    EXPRESSION  = 'Expression'

    @property
    def key(self) -> str:
        """Lowercase name, used as the signal kind and CSV column."""
        return self.value.lower()

    @classmethod
    def parse(cls, name: str) -> 'Domain':
        """Accept 'Warfare', 'warfare' or 'WARFARE'."""
        for d in cls:
            if name.lower() == d.key:
                return d
        raise ValueError(f"invalid domain: {name!r}")


DOMAINS: tuple = tuple(Domain)


def require_domain(d) -> Domain:
    """Fail fast when something other than a Domain reaches the core."""
    if not isinstance(d, Domain):
        raise ValueError(f"invalid domain: {d!r}")
    return d


# ══════════════════════════════════════════════════════════════════════════
# Age records
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AgeRecord:
    id:           str
    name:         str
    causes:       Dict[str, float]
    effects:      Dict[str, float]
    started_turn: int
    ends_turn:    Optional[int] = None   # nothing closes an Age yet
    trigger:      str = ''

    def to_dict(self) -> dict:
        return {
            'id':           self.id,
            'name':         self.name,
            'causes':       dict(self.causes),
            'effects':      dict(self.effects),
            'started_turn': self.started_turn,
            'ends_turn':    self.ends_turn,
            'trigger':      self.trigger,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'AgeRecord':
        return cls(
            id           = data['id'],
            name         = data['name'],
            causes       = {k: float(v) for k, v in data['causes'].items()},
            effects      = {k: float(v) for k, v in data['effects'].items()},
            started_turn = int(data['started_turn']),
            ends_turn    = data.get('ends_turn'),
            trigger      = data.get('trigger', ''),
        )


def next_age_id(history: list) -> str:
    """Sequential id from the current history length: age_001, age_002, …"""
    return f"age_{len(history) + 1:03d}"


# ══════════════════════════════════════════════════════════════════════════
# Civilization
# ══════════════════════════════════════════════════════════════════════════

def _default_domains() -> Dict[Domain, float]:
    return {d: config.DOMAIN_START for d in Domain}


@dataclass
class Civilization:
    name:         str                   = config.CIV_NAME
    domains:      Dict[Domain, float]   = field(default_factory=_default_domains)
    capabilities: set                   = field(default_factory=set)
    ni:           float                 = config.NI_START
    age_history:  List[AgeRecord]       = field(default_factory=list)

    def value(self, d: Domain) -> float:
        return self.domains[require_domain(d)]

    def nudge(self, d: Domain, amount: float) -> None:
        self.domains[require_domain(d)] += amount

    def unlock(self, key: str) -> bool:
        """Add a capability flag.  Returns False if it was already present."""
        if key in self.capabilities:
            return False
        self.capabilities.add(key)
        return True

    def add_age(self, record: AgeRecord) -> None:
        self.age_history.append(record)

    # ── Serialisation (field names mirror the attributes) ──────────────────

    def to_dict(self) -> dict:
        return {
            'name':         self.name,
            'domains':      {d.value: v for d, v in self.domains.items()},
            'capabilities': sorted(self.capabilities),
            'ni':           self.ni,
            'age_history':  [a.to_dict() for a in self.age_history],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Civilization':
        raw = data['domains']
        domains = {Domain.parse(k): float(v) for k, v in raw.items()}
        missing = [d.value for d in Domain if d not in domains]
        if missing:
            raise ValueError(f"invalid domain mapping: missing {', '.join(missing)}")
        return cls(
            name         = data['name'],
            domains      = {d: domains[d] for d in Domain},
            capabilities = set(data['capabilities']),
            ni           = float(data['ni']),
            age_history  = [AgeRecord.from_dict(a) for a in data['age_history']],
        )


# ══════════════════════════════════════════════════════════════════════════
# National identity
# ══════════════════════════════════════════════════════════════════════════

def clamp(lo: float, hi: float, v: float) -> float:
    return max(lo, min(hi, v))


def compute_ni(domains: Dict[Domain, float]) -> float:
    """Institutions, culture and prosperity raise NI; militarism over social lowers it."""
    so = domains[Domain.SOCIAL]
    raw = (5.0
           + 0.25 * (so - 10)
           + 0.20 * (domains[Domain.EXPRESSION] - 10)
           + 0.10 * (domains[Domain.SURVIVAL] - 10)
           - 0.07 * max(0.0, domains[Domain.WARFARE] - so))
    return clamp(config.NI_MIN, config.NI_MAX, raw)


def recompute_ni(civ: Civilization) -> float:
    civ.ni = compute_ni(civ.domains)
    return civ.ni
