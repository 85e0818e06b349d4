from concurrent.futures import ThreadPoolExecutor

import pytest
from hypothesis import given
from hypothesis import strategies as st

from fretwork.base import ConfigurationRangeError, PositionRangeError
from fretwork.family import CELLO, GUITAR, VIOLIN
from fretwork.harmonics import harmonic_pairs, node_count
from fretwork.pitch import Pitch
from fretwork.strings import StringFactory, to_pitch
from fretwork.touch import FrettedPosition, StoppedPosition, TouchKind
from tests.fretwork.hypo import configure_hypo

configure_hypo()

GUITAR_FACTORY = StringFactory(GUITAR)


def test_low_e_scenario() -> None:
    string = GUITAR_FACTORY.build(40, 22)
    assert string.tuning == Pitch(40)
    assert string.tuning.name == "E2"
    assert len(string.frets) == 23
    assert string.fret(0).frequency == pytest.approx(82.41, abs=0.01)
    assert string.fret(12).frequency == pytest.approx(164.81, abs=0.01)
    assert string.frequency == string.fret(0).frequency
    assert string.max_harmonic_order == GUITAR.default_harmonic_order
    assert len(string) == 23 + 23 * node_count(7)
    assert string.count_kind(TouchKind.Fret) == 23
    assert string.count_kind(TouchKind.Node) == 23 * 17


def test_defaults_from_family() -> None:
    string = GUITAR_FACTORY.build("E2")
    assert string.fret_count == 22
    assert string.max_harmonic_order == 7
    assert string.family is GUITAR


def test_touch_points_sorted_by_distance() -> None:
    string = GUITAR_FACTORY.build(45, 24, 12)
    distances = [p.distance for p in string]
    assert distances == sorted(distances)
    assert distances[0] == 0.0
    assert all(0.0 <= d < 1.0 for d in distances)


@given(
    st.integers(min_value=0, max_value=100),
    st.integers(min_value=0, max_value=36),
)
def test_fret_properties(tuning: int, fret_count: int) -> None:
    string = GUITAR_FACTORY.build(tuning, fret_count, 2)
    frets = string.frets
    assert len(frets) == fret_count + 1
    assert frets[0].distance == 0.0
    for n, (lo, hi) in enumerate(zip(frets, frets[1:])):
        assert lo.fret == n
        assert lo.distance < hi.distance
        assert lo.frequency < hi.frequency
    for fret in frets:
        assert fret.pitch.transpose(-fret.fret) == string.tuning
    if fret_count >= 12:
        assert string.fret(12).distance == pytest.approx(0.5)


def test_harmonic_order_twelve_on_any_root() -> None:
    string = GUITAR_FACTORY.build(40, 22, 12)
    for fret in [0, 5, 12, 22]:
        nodes = string.nodes_for(fret)
        assert len(nodes) == 45
        assert [(n.node, n.order) for n in nodes] == list(harmonic_pairs(12))
        assert all(n.root == string.fret(fret) for n in nodes)


@pytest.mark.parametrize(
    "fret_count, order, name",
    [
        (-1, 7, "fret_count"),
        (37, 7, "fret_count"),
        (22, 1, "max_harmonic_order"),
        (22, 13, "max_harmonic_order"),
    ],
)
def test_build_out_of_range(fret_count: int, order: int, name: str) -> None:
    with pytest.raises(ConfigurationRangeError) as info:
        GUITAR_FACTORY.build(40, fret_count, order)
    assert info.value.name == name
    assert info.value.value in (fret_count, order)


def test_build_error_message() -> None:
    with pytest.raises(ConfigurationRangeError, match=r"fret_count -1 .*\[0, 36\]"):
        GUITAR_FACTORY.build(40, -1)


def test_empty_tuning() -> None:
    with pytest.raises(ConfigurationRangeError) as info:
        GUITAR_FACTORY.build_instrument([])
    assert info.value.name == "tuning"


def test_oversized_tuning() -> None:
    with pytest.raises(ConfigurationRangeError):
        GUITAR_FACTORY.build_instrument([40] * 45)
    with pytest.raises(ConfigurationRangeError):
        StringFactory(VIOLIN).build_instrument(["G3"] * 7)


def test_instrument_rejects_before_building() -> None:
    with pytest.raises(ConfigurationRangeError):
        GUITAR_FACTORY.build_instrument(["E2", "A2"], 22, 1)


def test_standard_instrument() -> None:
    guitar = GUITAR_FACTORY.build_instrument()
    assert len(guitar) == 6
    assert [p.name for p in guitar.tuning] == ["E2", "A2", "D3", "G3", "B3", "E4"]
    assert guitar[0] == GUITAR_FACTORY.build(40)
    assert all(s.fret_count == 22 for s in guitar)


def test_custom_instrument() -> None:
    drop_d = GUITAR_FACTORY.build_instrument(
        ["D2", 45, Pitch(50)], fret_count=12, max_harmonic_order=3
    )
    assert drop_d.tuning == (Pitch(38), Pitch(45), Pitch(50))
    assert all(len(s) == 13 + 13 * 3 for s in drop_d)


def test_bowed_string() -> None:
    factory = StringFactory(VIOLIN)
    string = factory.build("G3")
    assert string.fret_count == 10
    assert string.max_harmonic_order is None
    assert len(string) == 11
    assert string.nodes == ()
    assert all(isinstance(p, StoppedPosition) for p in string)
    assert string.fret(7).pitch.name == "D4"
    assert string.nodes_for(0) == ()


@pytest.mark.parametrize("count", [3, 13])
def test_bowed_out_of_range(count: int) -> None:
    with pytest.raises(ConfigurationRangeError) as info:
        StringFactory(CELLO).build("C2", count)
    assert info.value.name == "semitone_count"


def test_bowed_rejects_harmonics() -> None:
    with pytest.raises(ConfigurationRangeError) as info:
        StringFactory(VIOLIN).build("G3", 10, 5)
    assert info.value.name == "max_harmonic_order"


def test_fret_lookup_out_of_range() -> None:
    string = GUITAR_FACTORY.build(40, 22, 2)
    with pytest.raises(PositionRangeError):
        string.fret(23)
    with pytest.raises(PositionRangeError):
        string.fret(-1)


def test_nearest() -> None:
    string = GUITAR_FACTORY.build(40, 22, 2)
    middle = string.nearest(0.5)
    assert middle.kind == TouchKind.Fret
    assert isinstance(middle, FrettedPosition)
    assert middle.fret == 12
    assert string.nearest(0.0) == string.fret(0)
    assert string.nearest(0.001) == string.fret(0)
    assert string.nearest(1.0) == string.touch_points[-1]
    with pytest.raises(PositionRangeError):
        string.nearest(1.5)
    with pytest.raises(PositionRangeError):
        string.nearest(-0.1)


def test_to_pitch() -> None:
    assert to_pitch("E2") == Pitch(40)
    assert to_pitch(40) == Pitch(40)
    assert to_pitch(Pitch(40, 12)) == Pitch(40)
    with pytest.raises(ValueError):
        to_pitch("X2")


def test_concurrent_builds_match_sequential() -> None:
    tuning = list(GUITAR.standard_tuning)
    with ThreadPoolExecutor(max_workers=3) as pool:
        parallel = list(pool.map(lambda t: GUITAR_FACTORY.build(t, 12, 5), tuning))
    assert parallel == [GUITAR_FACTORY.build(t, 12, 5) for t in tuning]
