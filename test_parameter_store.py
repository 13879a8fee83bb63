"""Tests for pot value storage and clamping."""
import random

from music.effect_catalog import EffectCatalog, POT_COUNT
from music.parameter_store import ParameterStore


def make_store():
    return ParameterStore(EffectCatalog())


def test_store_is_seeded_from_defaults():
    store = make_store()
    for i, effect in enumerate(store.catalog):
        assert store.get(i) == list(effect.defaults)


def test_reset_restores_defaults_exactly():
    store = make_store()
    for i, effect in enumerate(store.catalog):
        for pot in range(POT_COUNT):
            store.increase(i, pot, 0.37)
            store.decrease(i, (pot + 1) % POT_COUNT, 0.11)
        store.reset(i)
        assert store.get(i) == list(effect.defaults)


def test_reset_keeps_live_reference():
    store = make_store()
    pots = store.get(2)
    store.increase(2, 0)
    store.reset(2)
    assert pots is store.get(2)
    assert pots == [0.25, 0.25, 0.5, 0.5]


def test_twenty_increases_from_zero_reach_exactly_one():
    store = make_store()
    for _ in range(40):
        store.decrease(0, 0)
    assert store.get(0)[0] == 0.0
    for _ in range(20):
        store.increase(0, 0)
    assert store.get(0)[0] == 1.0


def test_ceiling_and_floor_are_idempotent():
    store = make_store()
    for _ in range(30):
        store.increase(3, 1)
    assert store.get(3)[1] == 1.0
    store.increase(3, 1)
    assert store.get(3)[1] == 1.0

    for _ in range(30):
        store.decrease(3, 2)
    assert store.get(3)[2] == 0.0
    store.decrease(3, 2)
    assert store.get(3)[2] == 0.0


def test_values_stay_in_range_under_random_adjustment():
    store = make_store()
    rng = random.Random(1234)
    for _ in range(2000):
        effect = rng.randrange(store.catalog.count())
        pot = rng.randrange(POT_COUNT)
        if rng.random() < 0.5:
            store.increase(effect, pot)
        else:
            store.decrease(effect, pot)
        assert 0.0 <= store.get(effect)[pot] <= 1.0


def test_adjusting_one_effect_leaves_others_alone():
    store = make_store()
    store.increase(1, 0)
    assert store.get(1)[0] == 0.35
    assert store.get(4) == [0.3, 0.3, 0.5, 0.5]
