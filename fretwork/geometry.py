"""Closed-form string geometry and interval arithmetic.

Distances are relative to the vibrating length of the open string: 0 is the
nut and 1 is the bridge.
"""

from __future__ import annotations

import math

from fretwork.base import PositionRangeError
from fretwork.pitch import CENTS_PER_SEMITONE, MAX_NOTES

SEMITONE_RATIO = 2.0 ** (1.0 / MAX_NOTES)
"""Frequency ratio of one equal-tempered semitone."""

CENTS_PER_OCTAVE = CENTS_PER_SEMITONE * MAX_NOTES
"""Cents in one octave."""

OCTAVE_FRET = 12
"""The fret that halves the string."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up, e.g. -0.5 -> 0."""
    return math.floor(value + 0.5)


def round1(value: float) -> float:
    """Round half up to one decimal place."""
    return round_half_up(value * 10) / 10


def check_index(index: int, bound: int) -> None:
    """Ensure a fret or semitone index lies in [0, bound].

    Raises:
        PositionRangeError: If the index is off the string.
    """
    if index < 0 or index > bound:
        raise PositionRangeError(f"Index {index} out of range [0, {bound}]")


def fret_distance(index: int) -> float:
    """Relative distance from the nut of the fret at a semitone index.

    Fret 12 sits at exactly half the string; every further fret is one
    equal-tempered semitone closer to the bridge.
    """
    if index == 0:
        return 0.0
    else:
        return 1.0 - (1.0 / SEMITONE_RATIO) ** (index - OCTAVE_FRET) / 2.0


def node_distance(root_distance: float, node: int, order: int) -> float:
    """Relative distance from the nut of harmonic node ``node/order``.

    The node divides the part of the string between the root fret and the
    bridge.
    """
    return root_distance + (1.0 - root_distance) * node / order


def harmonic_cents(order: int) -> float:
    """Interval in cents between a vibrating length and its ``order``-th partial."""
    return CENTS_PER_OCTAVE * math.log2(order)


def ratio_semitones(ratio: float) -> float:
    """Size of a length ratio in equal-tempered semitones."""
    return math.log(ratio) / math.log(SEMITONE_RATIO)


def node_fret_offset(node: int, order: int) -> float:
    """Fret position of node ``node/order`` counted from its root fret.

    This locates the node on the fretboard, rounded to a tenth of a fret for
    display. It is not the sounding interval of the harmonic.
    """
    return round1(ratio_semitones(order / (order - node)))


def split_cents(cents: float) -> tuple[int, int]:
    """Split an interval into whole semitones and residual cents.

    Returns:
        Tuple of (semitones, residual) with the residual in [-50, 50].
    """
    semitones = round_half_up(cents / CENTS_PER_SEMITONE)
    residual = round_half_up(cents - semitones * CENTS_PER_SEMITONE)
    return semitones, residual
