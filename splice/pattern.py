"""Decoded splice pattern values and their canonical text rendering.

Rendered form::

  Saved with HW Version: 0.808-alpha
  Tempo: 120
  (0) kick	|x---|x---|x---|x---|
  (1) snare	|----|x---|----|x---|

Steps are drawn in four groups of four sixteenth notes, ``x`` for an
active step and ``-`` for a rest.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

STEP_COUNT = 16
STEPS_PER_GROUP = 4


@dataclass(frozen=True)
class Track:
    """One instrument lane."""

    id: int  # 0-255, not unique within a pattern
    name: str
    steps: Tuple[bool, ...]  # always STEP_COUNT entries


@dataclass(frozen=True)
class Pattern:
    version: str
    tempo: float  # float32 as decoded; rounding happens in format_tempo
    tracks: Tuple[Track, ...] = ()

    def __str__(self) -> str:
        return render_pattern(self)


def format_tempo(tempo: float) -> str:
    """Return ``tempo`` as shown by the hardware.

    Whole tempos print without a fractional part; anything else is snapped
    to the nearest half BPM and printed with one decimal.
    """

    if not math.isfinite(tempo):
        return str(tempo)
    rounded = int(tempo / 0.5 + 0.5) * 0.5
    if rounded == tempo:
        return str(int(tempo))
    return f"{rounded:.1f}"


def format_steps(steps: Sequence[bool]) -> str:
    out = []
    for idx, active in enumerate(steps):
        if idx % STEPS_PER_GROUP == 0:
            out.append("|")
        out.append("x" if active else "-")
    out.append("|")
    return "".join(out)


def render_pattern(pattern: Pattern) -> str:
    lines = [
        f"\n({track.id}) {track.name}\t{format_steps(track.steps)}"
        for track in pattern.tracks
    ]
    return (
        f"Saved with HW Version: {pattern.version}\n"
        f"Tempo: {format_tempo(pattern.tempo)}{''.join(lines)}\n"
    )
