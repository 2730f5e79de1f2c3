"""
test_ages.py — pytest suite for evolvera.ages (signals, names, effects, records)
"""

import random

import pytest

from evolvera import catalog
from evolvera.ages import (Signal, age_gate_signals, build_effects,
                           build_name, crossing_signals, make_age_record, rank)
from evolvera.civilization import Domain


def _words(name: str) -> set:
    return set(name.replace(' of ', ' ').split())


# ─────────────────────────────────────────────────────
# Signals
# ─────────────────────────────────────────────────────

class TestSignals:
    def test_nothing_below_floor(self, civ):
        assert age_gate_signals(civ) == []

    def test_weight_scales_above_floor(self, make_civ):
        c = make_civ(warfare=15.0, social=12.0)
        sig = dict(age_gate_signals(c))
        assert sig == {'warfare': pytest.approx(0.5), 'social': pytest.approx(0.2)}

    def test_unity_added_at_high_ni(self, make_civ):
        c = make_civ(ni=9.5)
        assert age_gate_signals(c) == [Signal('unity', 1.0)]
        assert crossing_signals(c, Domain.WARFARE) == [Signal('warfare', 1.0),
                                                       Signal('unity', 1.0)]

    def test_rank_drops_non_positive_and_sorts(self):
        ranked = rank([('a', 0.2), ('b', 0.0), ('c', 0.9), ('d', -1.0)])
        assert [s.kind for s in ranked] == ['c', 'a']

    def test_rank_ties_keep_input_order(self):
        ranked = rank([('warfare', 0.5), ('social', 0.5)])
        assert [s.kind for s in ranked] == ['warfare', 'social']


# ─────────────────────────────────────────────────────
# Naming
# ─────────────────────────────────────────────────────

class TestBuildName:
    def test_single_signal_draws_only_from_its_lexicon(self):
        rng = random.Random(7)
        allowed = (set(catalog.ADJECTIVES['warfare']) | set(catalog.NOUNS['warfare'])
                   | {'The', 'Era', 'Wilds'})
        for _ in range(40):
            name = build_name(rng, [Signal('warfare', 1.0)])
            assert _words(name) <= allowed, name

    def test_scripted_draws(self, scripted_rng):
        # template 0 "The {Adj} {Noun}", adj idx 1, noun idx 2, concept idx 0
        rng = scripted_rng(ints=[0, 1, 2, 0])
        assert build_name(rng, [Signal('warfare', 1.0)]) == 'The Bronzeclad Legions'

    def test_biome_prefix_on_low_roll(self, scripted_rng):
        rng = scripted_rng(ints=[0, 0, 0, 0], floats=[0.2])
        assert build_name(rng, [Signal('warfare', 1.0)], 'River') == 'The Martial River Standards'

    def test_no_biome_prefix_on_high_roll(self, scripted_rng):
        rng = scripted_rng(ints=[0, 0, 0, 0], floats=[0.5])
        assert build_name(rng, [Signal('warfare', 1.0)], 'River') == 'The Martial Standards'

    def test_empty_signals_fall_back_to_social_and_default_biome(self, scripted_rng):
        # template 4 "{Biome} {Noun}"
        rng = scripted_rng(ints=[4, 0, 2, 0])
        assert build_name(rng, []) == 'Wilds Laws'

    def test_tail_kind_joins_the_bag(self, scripted_rng):
        # head warfare + tail social: bag is 4 warfare words then 4 social
        rng = scripted_rng(ints=[0, 5, 6, 0])
        signals = [Signal('warfare', 0.8), Signal('social', 0.3)]
        assert build_name(rng, signals) == 'The Civic Laws'

    def test_same_seed_same_name(self):
        signals = [Signal('exploration', 0.7), Signal('expression', 0.4)]
        a = [build_name(random.Random(3), signals, 'River') for _ in range(3)]
        assert len(set(a)) == 1


# ─────────────────────────────────────────────────────
# Effects
# ─────────────────────────────────────────────────────

class TestBuildEffects:
    def test_coefficients_scale_with_weight(self):
        fx = build_effects([Signal('warfare', 0.5), Signal('survival', 1.0)])
        assert fx == {'combat': pytest.approx(0.025), 'food_yield': pytest.approx(0.03)}

    def test_unity_sets_ni_ceiling(self):
        fx = build_effects([Signal('unity', 1.0)])
        assert fx == {'ni_cap': 10.0}

    def test_zero_weight_ignored(self):
        assert build_effects([Signal('warfare', 0.0)]) == {}

    def test_unknown_kind_contributes_nothing(self):
        assert build_effects([Signal('weather', 1.0)]) == {}

    def test_crisis_maps_to_resilience(self):
        fx = build_effects([Signal('crisis', 2.0)])
        assert fx == {'resilience': pytest.approx(0.1)}


# ─────────────────────────────────────────────────────
# Record assembly
# ─────────────────────────────────────────────────────

class TestMakeAgeRecord:
    def test_appends_with_sequential_ids(self, civ):
        rng = random.Random(1)
        a = make_age_record(rng, civ, [Signal('warfare', 1.0)], turn=4)
        b = make_age_record(rng, civ, [Signal('social', 0.5)], turn=9, trigger='Social')
        assert [r.id for r in civ.age_history] == ['age_001', 'age_002']
        assert civ.age_history == [a, b]
        assert b.started_turn == 9
        assert b.ends_turn is None
        assert b.trigger == 'Social'

    def test_causes_are_ranked_signals(self, civ):
        rec = make_age_record(random.Random(1), civ,
                              [Signal('social', 0.2), Signal('warfare', 0.6),
                               Signal('survival', 0.0)], turn=1)
        assert list(rec.causes) == ['warfare', 'social']

    def test_record_is_immutable(self, civ):
        rec = make_age_record(random.Random(1), civ, [], turn=1)
        with pytest.raises(Exception):
            rec.name = 'Renamed'
