from dataclasses import FrozenInstanceError
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwork.base import ArithmeticInvariantError, PositionRangeError
from fretwork.harmonics import harmonic_pairs
from fretwork.pitch import Pitch
from fretwork.touch import (
    FrettedPosition,
    HarmonicNode,
    StoppedPosition,
    TouchKind,
    sort_key,
)
from tests.fretwork.hypo import configure_hypo

configure_hypo()

LOW_E = Pitch(40)


def test_fretted_position() -> None:
    open_string = FrettedPosition(LOW_E, 0, 22)
    octave = FrettedPosition(LOW_E, 12, 22)
    assert open_string.kind == TouchKind.Fret
    assert open_string.is_open
    assert open_string.distance == 0.0
    assert open_string.pitch == LOW_E
    assert open_string.frequency == pytest.approx(82.41, abs=0.01)
    assert open_string.fret_number == 0.0
    assert octave.distance == pytest.approx(0.5)
    assert octave.pitch == Pitch(52)
    assert octave.pitch.name == "E3"
    assert octave.frequency == pytest.approx(164.81, abs=0.01)
    assert octave.fret_number == 12.0


@pytest.mark.parametrize("fret", [-1, 23])
def test_fretted_position_out_of_range(fret: int) -> None:
    with pytest.raises(PositionRangeError):
        FrettedPosition(LOW_E, fret, 22)


def test_fretted_position_frozen() -> None:
    fret = FrettedPosition(LOW_E, 3, 22)
    with pytest.raises(FrozenInstanceError):
        fret.fret = 4  # type: ignore[misc]


def test_stopped_position() -> None:
    stop = StoppedPosition(Pitch(55), 7, 10)
    assert stop.kind == TouchKind.Stop
    assert stop.pitch == Pitch(62)
    assert stop.distance == FrettedPosition(Pitch(55), 7, 10).distance
    assert stop != FrettedPosition(Pitch(55), 7, 10)


def test_natural_octave_harmonic() -> None:
    root = FrettedPosition(LOW_E, 0, 22)
    node = HarmonicNode(root, 1, 2)
    assert node.kind == TouchKind.Node
    assert node.is_natural
    assert node.ratio == Fraction(1, 2)
    assert node.distance == 0.5
    assert node.interval_cents == pytest.approx(1200.0)
    assert node.pitch == Pitch(52)
    assert node.frequency == pytest.approx(2 * root.frequency)
    assert node.equivalent_fret_number == 12.0
    assert node.fret_number == 12.0


def test_mirrored_nodes_sound_the_same_partial() -> None:
    # Both nodes of order 3 sound the third partial (an octave and a fifth
    # above the root), at different places on the string.
    root = FrettedPosition(LOW_E, 0, 22)
    near = HarmonicNode(root, 1, 3)
    far = HarmonicNode(root, 2, 3)
    assert near.interval_cents == pytest.approx(1901.955, abs=1e-3)
    assert far.interval_cents == near.interval_cents
    assert near.pitch == far.pitch == Pitch(59, 2)
    assert str(near.pitch) == "B3+2c"
    assert near.frequency == pytest.approx(3 * root.frequency)
    assert far.frequency == near.frequency
    assert near.distance == pytest.approx(1 / 3)
    assert far.distance == pytest.approx(2 / 3)
    assert near.equivalent_fret_number == 7.0
    assert far.equivalent_fret_number == 19.0


def test_artificial_harmonic() -> None:
    root = FrettedPosition(LOW_E, 5, 22)
    node = HarmonicNode(root, 1, 2)
    assert not node.is_natural
    assert node.distance == pytest.approx(root.distance + (1 - root.distance) / 2)
    assert node.pitch == Pitch(57)
    assert node.frequency == pytest.approx(2 * root.frequency)
    assert node.equivalent_fret_number == 17.0


def test_fifth_harmonic_rounds_down() -> None:
    node = HarmonicNode(FrettedPosition(LOW_E, 0, 22), 1, 5)
    assert node.pitch == Pitch(68, -14)
    assert node.pitch.name == "G#4"


@pytest.mark.parametrize(
    "node, order",
    [(0, 2), (2, 2), (3, 2), (2, 4), (3, 6), (-1, 3)],
)
def test_invalid_node(node: int, order: int) -> None:
    root = FrettedPosition(LOW_E, 0, 22)
    with pytest.raises(ArithmeticInvariantError):
        HarmonicNode(root, node, order)


@given(st.integers(min_value=0, max_value=36), st.integers(min_value=2, max_value=12))
def test_node_frequency_is_partial_of_root(fret: int, max_order: int) -> None:
    root = FrettedPosition(LOW_E, fret, 36)
    for node, order in harmonic_pairs(max_order):
        harmonic = HarmonicNode(root, node, order)
        assert harmonic.frequency == pytest.approx(order * root.frequency)
        assert root.distance < harmonic.distance < 1.0
        assert abs(harmonic.pitch.cents) <= 50


def test_sort_key_breaks_ties_by_kind() -> None:
    root = FrettedPosition(LOW_E, 0, 22)
    octave_fret = FrettedPosition(LOW_E, 12, 22)
    octave_node = HarmonicNode(root, 1, 2)
    assert octave_fret.distance == octave_node.distance
    assert sorted([octave_node, octave_fret], key=sort_key) == [
        octave_fret,
        octave_node,
    ]
