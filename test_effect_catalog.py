"""Tests for the fixed effect catalog."""
import pytest

from music.effect_catalog import EFFECT_NAMES, EffectCatalog, POT_COUNT


def test_catalog_has_six_effects_in_order():
    catalog = EffectCatalog()
    assert catalog.count() == 6
    assert [e.name for e in catalog] == ["flanger", "echo", "fm", "am", "phaser", "discont"]
    assert EFFECT_NAMES == [e.name for e in catalog]


def test_every_effect_has_four_bounded_defaults_and_labels():
    for effect in EffectCatalog():
        assert len(effect.defaults) == POT_COUNT
        assert len(effect.pots) == POT_COUNT
        assert all(0.0 <= v <= 1.0 for v in effect.defaults)
        assert effect.description


def test_get_and_index_of():
    catalog = EffectCatalog()
    echo = catalog.get(1)
    assert echo.name == "echo"
    assert echo.defaults == (0.3, 0.3, 0.3, 0.3)
    assert echo.pots == ("Delay", "Feedback", "Mix", "Tone")
    assert catalog.index_of("discont") == 5
    assert catalog.index_of("reverb") == -1


def test_get_out_of_range_raises():
    catalog = EffectCatalog()
    with pytest.raises(IndexError):
        catalog.get(catalog.count())
    with pytest.raises(IndexError):
        catalog.get(-1)


def test_definitions_are_immutable():
    effect = EffectCatalog().get(0)
    with pytest.raises(AttributeError):
        effect.name = "chorus"
