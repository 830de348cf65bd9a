"""Build splice pattern bytes in memory.

Inverse of :mod:`splice.decoder`; used to assemble synthetic patterns.
"""

from __future__ import annotations

from .decoder import (
    MAGIC,
    METADATA_SIZE,
    NAME_LENGTH_FIELD,
    PAYLOAD_SIZE_FIELD,
    TEMPO_FIELD,
    VERSION_SIZE,
)
from .pattern import STEP_COUNT, Pattern, Track


def encode_track(track: Track) -> bytes:
    if not 0 <= track.id <= 0xFF:
        raise ValueError(f"track id must be 0-255, got {track.id}")
    if len(track.steps) != STEP_COUNT:
        raise ValueError(
            f"track {track.id}: expected {STEP_COUNT} steps, got {len(track.steps)}"
        )
    name = track.name.encode("latin-1")
    return (
        bytes([track.id])
        + NAME_LENGTH_FIELD.pack(len(name))
        + name
        + bytes(1 if active else 0 for active in track.steps)
    )


def encode_pattern(pattern: Pattern, *, payload_size: int | None = None) -> bytes:
    """Serialise ``pattern``.

    ``payload_size`` overrides the declared size field; by default it covers
    the version, tempo and every track record exactly.
    """

    version = pattern.version.encode("latin-1")
    if len(version) > VERSION_SIZE:
        raise ValueError(
            f"version is {len(version)} bytes; the field holds {VERSION_SIZE}"
        )
    body = b"".join(encode_track(track) for track in pattern.tracks)
    if payload_size is None:
        payload_size = METADATA_SIZE + len(body)
    return b"".join(
        [
            MAGIC,
            PAYLOAD_SIZE_FIELD.pack(payload_size),
            version.ljust(VERSION_SIZE, b"\x00"),
            TEMPO_FIELD.pack(pattern.tempo),
            body,
        ]
    )
