"""Open strings and the factory that assembles them.

An OpenString owns every touch point on one string: a position per fret (or
semitone stop) and, for fretted families, the harmonic nodes over every fret.
The factory validates all parameters before creating anything, so a failed
build leaves nothing behind.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from fretwork.base import ConfigurationRangeError, MatchException, PositionRangeError
from fretwork.family import FamilyKind, StringFamily
from fretwork.harmonics import generate_nodes
from fretwork.pitch import Pitch, number_of
from fretwork.touch import (
    FrettedPosition,
    HarmonicNode,
    StoppedPosition,
    TouchKind,
    TouchPoint,
    sort_key,
)

type PitchLike = int | str | Pitch
"""A tuning given as a semitone number, a note name or a Pitch."""


def to_pitch(value: PitchLike) -> Pitch:
    """Coerce a tuning value to an unadjusted Pitch.

    Raises:
        ValueError: If a note name cannot be parsed.
    """
    if isinstance(value, Pitch):
        return Pitch(value.number)
    elif isinstance(value, str):
        return Pitch(number_of(value))
    elif isinstance(value, int):
        return Pitch(value)
    else:
        raise MatchException(value)


@dataclass(frozen=True)
class OpenString:
    """One string with all of its touch points, sorted from nut to bridge."""

    family: StringFamily
    tuning: Pitch
    fret_count: int
    """Number of frets, or semitone stops for bowed families."""
    max_harmonic_order: Optional[int]
    """Highest harmonic order, None when the family has no harmonics."""
    touch_points: Tuple[TouchPoint, ...]

    def __len__(self) -> int:
        return len(self.touch_points)

    def __iter__(self) -> Iterator[TouchPoint]:
        return iter(self.touch_points)

    @property
    def frequency(self) -> float:
        """Frequency of the open string in Hz."""
        return self.fret(0).frequency

    @property
    def frets(self) -> Tuple[FrettedPosition, ...]:
        """Fretted or stopped positions, from the open string upwards."""
        return tuple(p for p in self.touch_points if isinstance(p, FrettedPosition))

    @property
    def nodes(self) -> Tuple[HarmonicNode, ...]:
        """All harmonic nodes, in position order."""
        return tuple(p for p in self.touch_points if isinstance(p, HarmonicNode))

    def fret(self, index: int) -> FrettedPosition:
        """The position at a fret or semitone index.

        Raises:
            PositionRangeError: If no such fret exists on this string.
        """
        if index < 0 or index > self.fret_count:
            raise PositionRangeError(
                f"Fret {index} out of range [0, {self.fret_count}]"
            )
        return self.frets[index]

    def nodes_for(self, index: int) -> Tuple[HarmonicNode, ...]:
        """Harmonic nodes rooted at a fret, by order then node number."""
        root = self.fret(index)
        found = [n for n in self.nodes if n.root == root]
        return tuple(sorted(found, key=lambda n: (n.order, n.node)))

    def nearest(self, distance: float) -> TouchPoint:
        """The touch point closest to a relative distance from the nut.

        Ties go to the point nearer the nut.

        Raises:
            PositionRangeError: If the distance is outside [0, 1].
        """
        if distance < 0.0 or distance > 1.0:
            raise PositionRangeError(f"Distance {distance} out of range [0, 1]")
        distances = [p.distance for p in self.touch_points]
        ix = bisect_left(distances, distance)
        if ix == 0:
            return self.touch_points[0]
        elif ix == len(distances):
            return self.touch_points[-1]
        else:
            before = self.touch_points[ix - 1]
            after = self.touch_points[ix]
            if distance - before.distance <= after.distance - distance:
                return before
            else:
                return after

    def count_kind(self, kind: TouchKind) -> int:
        return sum(1 for p in self.touch_points if p.kind == kind)


@dataclass(frozen=True)
class Instrument:
    """The strings of one instrument, lowest tuning first as given."""

    family: StringFamily
    strings: Tuple[OpenString, ...]

    def __len__(self) -> int:
        return len(self.strings)

    def __iter__(self) -> Iterator[OpenString]:
        return iter(self.strings)

    def __getitem__(self, index: int) -> OpenString:
        return self.strings[index]

    @property
    def tuning(self) -> Tuple[Pitch, ...]:
        return tuple(s.tuning for s in self.strings)


class StringFactory:
    """Builds strings for one instrument family.

    Counts left as None fall back to the family defaults.
    """

    def __init__(self, family: StringFamily) -> None:
        self._family = family

    @property
    def family(self) -> StringFamily:
        return self._family

    def validate(
        self, fret_count: Optional[int], max_harmonic_order: Optional[int]
    ) -> Tuple[int, Optional[int]]:
        """Resolve defaults and check both counts against the family bounds.

        Returns:
            Tuple of (fret_count, max_harmonic_order) to build with.

        Raises:
            ConfigurationRangeError: If either count is out of bounds, or a
                harmonic order is given for a family without harmonics.
        """
        family = self._family
        count = family.default_count if fret_count is None else fret_count
        if count < family.min_count or count > family.max_count:
            raise ConfigurationRangeError(
                family.kind.count_name, count, family.min_count, family.max_count
            )
        if family.has_harmonics:
            assert family.min_harmonic_order is not None
            assert family.max_harmonic_order is not None
            order = (
                family.default_harmonic_order
                if max_harmonic_order is None
                else max_harmonic_order
            )
            assert order is not None
            if order < family.min_harmonic_order or order > family.max_harmonic_order:
                raise ConfigurationRangeError(
                    "max_harmonic_order",
                    order,
                    family.min_harmonic_order,
                    family.max_harmonic_order,
                )
            return count, order
        else:
            if max_harmonic_order is not None:
                raise ConfigurationRangeError("max_harmonic_order", max_harmonic_order)
            return count, None

    def validate_tuning(self, tuning: Optional[Sequence[PitchLike]]) -> List[Pitch]:
        """Resolve and check an instrument tuning.

        None selects the family's standard tuning.

        Raises:
            ConfigurationRangeError: If the tuning is empty or has more
                strings than the family allows.
        """
        if tuning is None:
            return [Pitch(n) for n in self._family.standard_tuning]
        if len(tuning) < 1 or len(tuning) > self._family.max_strings:
            raise ConfigurationRangeError(
                "tuning", len(tuning), 1, self._family.max_strings
            )
        return [to_pitch(t) for t in tuning]

    def build(
        self,
        tuning: PitchLike,
        fret_count: Optional[int] = None,
        max_harmonic_order: Optional[int] = None,
    ) -> OpenString:
        """Build one string with all of its touch points.

        Args:
            tuning: Pitch of the open string.
            fret_count: Frets (or semitone stops) on the string.
            max_harmonic_order: Highest harmonic order for the nodes.

        Returns:
            The assembled string.

        Raises:
            ConfigurationRangeError: If a count is out of bounds.
        """
        count, order = self.validate(fret_count, max_harmonic_order)
        return self._assemble(to_pitch(tuning), count, order)

    def build_instrument(
        self,
        tuning: Optional[Sequence[PitchLike]] = None,
        fret_count: Optional[int] = None,
        max_harmonic_order: Optional[int] = None,
    ) -> Instrument:
        """Build every string of an instrument.

        Everything is validated before the first string is assembled.
        """
        pitches = self.validate_tuning(tuning)
        count, order = self.validate(fret_count, max_harmonic_order)
        strings = tuple(self._assemble(p, count, order) for p in pitches)
        logging.info(
            "built %s with %d strings (%s)",
            self._family.name,
            len(strings),
            " ".join(p.name for p in pitches),
        )
        return Instrument(self._family, strings)

    def _assemble(self, tuning: Pitch, count: int, order: Optional[int]) -> OpenString:
        points: List[TouchPoint] = []
        kind = self._family.kind
        if kind == FamilyKind.Fretted:
            assert order is not None
            for index in range(count + 1):
                fret = FrettedPosition(tuning, index, count)
                points.append(fret)
                points.extend(generate_nodes(fret, order))
        elif kind == FamilyKind.Bowed:
            for index in range(count + 1):
                points.append(StoppedPosition(tuning, index, count))
        else:
            raise MatchException(kind)
        points.sort(key=sort_key)
        logging.debug(
            "built %s string %s with %d touch points",
            self._family.name,
            tuning,
            len(points),
        )
        return OpenString(self._family, tuning, count, order, tuple(points))
