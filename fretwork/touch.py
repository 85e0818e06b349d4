"""Touch points on a string: fretted positions and harmonic nodes.

A touch point is any place on a string where a finger can press or lightly
touch to sound a pitch. Every variant is a frozen dataclass tagged with a
TouchKind, so consumers can dispatch on ``point.kind`` without isinstance
chains.
"""

from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto, unique
from fractions import Fraction
from math import gcd
from typing import ClassVar, Tuple, override

from fretwork import geometry
from fretwork.base import ArithmeticInvariantError, MatchException
from fretwork.pitch import CENTS_PER_SEMITONE, Pitch, frequency_of


@unique
class TouchKind(Enum):
    """Tag identifying the variant of a touch point."""

    Fret = auto()  # Pressed against a fret (fret 0 is the open string)
    Stop = auto()  # Stopped on a fretless fingerboard, one per semitone
    Node = auto()  # Lightly touched harmonic node

    @property
    def label(self) -> str:
        if self == TouchKind.Fret:
            return "fret"
        elif self == TouchKind.Stop:
            return "stop"
        elif self == TouchKind.Node:
            return "node"
        else:
            raise MatchException(self)


class TouchPoint(metaclass=ABCMeta):
    """A position on a string with the pitch it produces.

    Implementations carry a ``distance`` attribute: the position relative to
    the open string length, 0 at the nut and 1 at the bridge.
    """

    kind: ClassVar[TouchKind]
    distance: float

    @property
    @abstractmethod
    def pitch(self) -> Pitch:
        """The resulting pitch when the point is pressed or touched."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def frequency(self) -> float:
        """The resulting frequency in Hz."""
        raise NotImplementedError()

    @property
    @abstractmethod
    def fret_number(self) -> float:
        """Position expressed in frets, fractional between two frets."""
        raise NotImplementedError()


@dataclass(frozen=True)
class FrettedPosition(TouchPoint):
    """A fret on the string, one equal-tempered semitone per index.

    Fret 0 is the open string. The distance is computed once at creation.
    """

    kind: ClassVar[TouchKind] = TouchKind.Fret

    tuning: Pitch
    """Pitch of the open string."""
    fret: int
    """Fret index, 0 for the open string."""
    bound: int
    """Highest fret index on the string."""
    distance: float = field(init=False)

    def __post_init__(self) -> None:
        geometry.check_index(self.fret, self.bound)
        object.__setattr__(self, "distance", geometry.fret_distance(self.fret))

    @property
    def is_open(self) -> bool:
        return self.fret == 0

    @property
    @override
    def pitch(self) -> Pitch:
        return self.tuning.transpose(self.fret)

    @property
    @override
    def frequency(self) -> float:
        return frequency_of(self.tuning.number + self.fret)

    @property
    @override
    def fret_number(self) -> float:
        return float(self.fret)


@dataclass(frozen=True)
class StoppedPosition(FrettedPosition):
    """A semitone stop on a fretless fingerboard.

    Bowed strings have no frets, but the fingering positions follow the same
    equal-tempered spacing.
    """

    kind: ClassVar[TouchKind] = TouchKind.Stop


def check_node(node: int, order: int) -> None:
    """Ensure ``node/order`` is a reduced proper fraction.

    Raises:
        ArithmeticInvariantError: If ``node < 1``, ``node >= order`` or the
            fraction is reducible.
    """
    if node < 1 or node >= order or gcd(node, order) != 1:
        raise ArithmeticInvariantError(node, order)


@dataclass(frozen=True)
class HarmonicNode(TouchPoint):
    """A harmonic node relative to a pressed root fret.

    The node sits at fraction ``node/order`` of the way from the root fret to
    the bridge. With the root at fret 0 it is a natural harmonic, otherwise
    an artificial one.

    Touching a node of order h damps every partial without a node at that
    point, leaving the h-th partial of the root's vibrating length. The
    sounding interval above the root therefore depends only on ``order``;
    ``node/order`` and ``(order - node)/order`` sound the same pitch at
    mirrored positions.
    """

    kind: ClassVar[TouchKind] = TouchKind.Node

    root: FrettedPosition
    """The pressed fret the node is measured from (not owned)."""
    node: int
    """Node number k, the numerator."""
    order: int
    """Harmonic order h, the denominator."""
    distance: float = field(init=False)

    def __post_init__(self) -> None:
        check_node(self.node, self.order)
        object.__setattr__(
            self,
            "distance",
            geometry.node_distance(self.root.distance, self.node, self.order),
        )

    @property
    def ratio(self) -> Fraction:
        return Fraction(self.node, self.order)

    @property
    def is_natural(self) -> bool:
        return self.root.is_open

    @property
    def interval_cents(self) -> float:
        """Sounding interval above the root fret in cents."""
        return geometry.harmonic_cents(self.order)

    @property
    def equivalent_fret_number(self) -> float:
        """The fret under the node, to a tenth of a fret. Display only."""
        return self.root.fret + geometry.node_fret_offset(self.node, self.order)

    @property
    @override
    def pitch(self) -> Pitch:
        semitones, residual = geometry.split_cents(self.interval_cents)
        return self.root.pitch.transpose(semitones).with_cents(residual)

    @property
    @override
    def frequency(self) -> float:
        return frequency_of(
            self.root.pitch.number + self.interval_cents / CENTS_PER_SEMITONE
        )

    @property
    @override
    def fret_number(self) -> float:
        return self.equivalent_fret_number


def sort_key(point: TouchPoint) -> Tuple[float, int, int, int, int]:
    """Ordering key for touch points: by distance, then a stable tie-break.

    Coincident points are ordered by kind, then harmonic order, node number
    and root fret.
    """
    if isinstance(point, HarmonicNode):
        return (
            point.distance,
            point.kind.value,
            point.order,
            point.node,
            point.root.fret,
        )
    else:
        return (point.distance, point.kind.value, 0, 0, 0)
