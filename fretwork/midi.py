"""MIDI messages for sounding touch points.

A touch point's pitch is a semitone number plus a residual cent offset.
The semitone becomes the note number and the residual becomes a pitch-wheel
message sent just before the note, so harmonics that fall between
equal-tempered notes sound in tune.
"""

from __future__ import annotations

from typing import List, NewType

from mido.frozen import FrozenMessage

from fretwork.geometry import round_half_up
from fretwork.pitch import CENTS_PER_SEMITONE
from fretwork.touch import TouchPoint

Channel = NewType("Channel", int)
"""MIDI channel (0-15)"""

Velocity = NewType("Velocity", int)
"""MIDI velocity (0-127)"""

DEFAULT_CHANNEL = Channel(0)
DEFAULT_VELOCITY = Velocity(64)
"""Default MIDI velocity when not specified"""

DEFAULT_BEND_RANGE = 2
"""Pitch-wheel range in semitones either side of the note."""

PITCHWHEEL_MIN = -8192
PITCHWHEEL_MAX = 8191


def _assert_midi_range(value: int, max_value: int, name: str) -> None:
    """Assert that a value is in valid MIDI range."""
    if not (0 <= value <= max_value):
        raise ValueError(f"{name} {value} out of range (0-{max_value})")


def pitch_bend_value(cents: int, bend_range: int = DEFAULT_BEND_RANGE) -> int:
    """Pitch-wheel value that shifts a note by ``cents``.

    Args:
        cents: Signed offset in cents.
        bend_range: Semitones covered by a full wheel deflection.

    Raises:
        ValueError: If the offset exceeds the bend range.
    """
    if bend_range < 1:
        raise ValueError(f"bend range {bend_range} must be positive")
    span = bend_range * CENTS_PER_SEMITONE
    if abs(cents) > span:
        raise ValueError(f"offset {cents} cents exceeds bend range of {span} cents")
    value = round_half_up(cents / span * -PITCHWHEEL_MIN)
    return max(PITCHWHEEL_MIN, min(PITCHWHEEL_MAX, value))


def msg_pitchwheel(channel: Channel, value: int) -> FrozenMessage:
    """Create a pitch-wheel MIDI message."""
    return FrozenMessage("pitchwheel", channel=int(channel), pitch=value)


def touch_messages(
    point: TouchPoint,
    channel: Channel = DEFAULT_CHANNEL,
    velocity: Velocity = DEFAULT_VELOCITY,
    bend_range: int = DEFAULT_BEND_RANGE,
) -> List[FrozenMessage]:
    """Messages that sound a touch point: pitch wheel, then note on.

    The pitch wheel is always set, to 0 for exact semitones, so a previous
    bend on the channel never leaks into this note.

    Raises:
        ValueError: If the note, channel or velocity is outside MIDI range.
    """
    pitch = point.pitch
    _assert_midi_range(pitch.number, 127, "note")
    _assert_midi_range(int(channel), 15, "channel")
    _assert_midi_range(int(velocity), 127, "velocity")
    return [
        msg_pitchwheel(channel, pitch_bend_value(pitch.cents, bend_range)),
        FrozenMessage(
            "note_on", channel=int(channel), note=pitch.number, velocity=int(velocity)
        ),
    ]


def release_messages(
    point: TouchPoint, channel: Channel = DEFAULT_CHANNEL
) -> List[FrozenMessage]:
    """Messages that release a touch point: note off, then pitch-wheel reset."""
    pitch = point.pitch
    _assert_midi_range(pitch.number, 127, "note")
    _assert_midi_range(int(channel), 15, "channel")
    return [
        FrozenMessage("note_off", channel=int(channel), note=pitch.number, velocity=0),
        msg_pitchwheel(channel, 0),
    ]
