"""Decode splice pattern files.

File layout::

  0x00  6   magic "SPLICE"
  0x06  8   payload size, i64 BE (bytes that follow this field)
  0x0E  32  hardware version, ASCII, NUL padded
  0x2E  4   tempo, f32 LE
  0x32  ..  track records until the payload or the file runs out

Track record::

  [id u8] [name_len i32 BE] [name: name_len bytes] [16 step bytes]

There is no track count; scanning stops at the first record that does not
fit in what is left.  A short header is fatal, a short track is not.
"""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import BinaryIO, Iterator, List, Union

from .errors import InvalidHeader, TruncatedHeader
from .pattern import STEP_COUNT, Pattern, Track

logger = logging.getLogger(__name__)

MAGIC = b"SPLICE"
PAYLOAD_SIZE_FIELD = struct.Struct(">q")
VERSION_SIZE = 32
TEMPO_FIELD = struct.Struct("<f")
NAME_LENGTH_FIELD = struct.Struct(">i")
HEADER_SIZE = len(MAGIC) + PAYLOAD_SIZE_FIELD.size + VERSION_SIZE + TEMPO_FIELD.size
METADATA_SIZE = VERSION_SIZE + TEMPO_FIELD.size  # counted inside the payload size
READ_CHUNK = 0x10000

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class _BoundedReader:
    """Forward-only reader that never returns more than ``limit`` bytes."""

    def __init__(self, stream: BinaryIO, limit: int) -> None:
        self._stream = stream
        self.remaining = max(limit, 0)

    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; shorter only at the bound or end of stream."""

        size = min(size, self.remaining)
        chunks: List[bytes] = []
        got = 0
        while got < size:
            chunk = self._stream.read(min(size - got, READ_CHUNK))
            if not chunk:
                break
            chunks.append(chunk)
            got += len(chunk)
        self.remaining -= got
        return b"".join(chunks)


def _read_field(stream: BinaryIO, field: str, size: int) -> bytes:
    raw = _BoundedReader(stream, size).read(size)
    if len(raw) < size:
        raise TruncatedHeader(field, size, len(raw))
    return raw


def _decode_text(raw: bytes) -> str:
    return raw.decode("latin-1")


def _read_track(reader: _BoundedReader) -> Track | None:
    head = reader.read(1 + NAME_LENGTH_FIELD.size)
    if not head:
        return None
    if len(head) < 1 + NAME_LENGTH_FIELD.size:
        logger.debug("track record cut short in name length")
        return None

    track_id = head[0]
    (name_len,) = NAME_LENGTH_FIELD.unpack_from(head, 1)
    if name_len < 0 or name_len + STEP_COUNT > reader.remaining:
        logger.debug(
            "track %d: name length %d does not fit in %d remaining bytes",
            track_id,
            name_len,
            reader.remaining,
        )
        return None

    name = reader.read(name_len)
    if len(name) < name_len:
        logger.debug("track %d: name cut short (%d of %d bytes)", track_id, len(name), name_len)
        return None

    steps = reader.read(STEP_COUNT)
    if len(steps) < STEP_COUNT:
        logger.debug("track %d: steps cut short (%d of %d bytes)", track_id, len(steps), STEP_COUNT)
        return None

    return Track(
        id=track_id,
        name=_decode_text(name),
        steps=tuple(b != 0 for b in steps),
    )


def iter_tracks(stream: BinaryIO, limit: int) -> Iterator[Track]:
    """Yield track records from ``stream`` until ``limit`` bytes are used or data runs out."""

    reader = _BoundedReader(stream, limit)
    while True:
        track = _read_track(reader)
        if track is None:
            return
        yield track


def decode(source: Source) -> Pattern:
    """Decode a pattern from bytes or a binary stream positioned at offset 0.

    Raises
    ------
    InvalidHeader
        The magic is not ``SPLICE``.
    TruncatedHeader
        The source ends before the 50-byte header is complete.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        stream: BinaryIO = io.BytesIO(source)
    else:
        stream = source

    magic = _read_field(stream, "magic", len(MAGIC))
    if magic != MAGIC:
        raise InvalidHeader(magic)

    (payload_size,) = PAYLOAD_SIZE_FIELD.unpack(
        _read_field(stream, "payload_size", PAYLOAD_SIZE_FIELD.size)
    )
    version_raw = _read_field(stream, "version", VERSION_SIZE)
    (tempo,) = TEMPO_FIELD.unpack(_read_field(stream, "tempo", TEMPO_FIELD.size))
    logger.debug("declared payload size %d", payload_size)

    tracks = tuple(iter_tracks(stream, payload_size - METADATA_SIZE))
    logger.debug("decoded %d tracks", len(tracks))

    return Pattern(
        version=_decode_text(version_raw.rstrip(b"\x00")),
        tempo=tempo,
        tracks=tracks,
    )


def decode_bytes(data: bytes) -> Pattern:
    """Decode a pattern held in memory."""

    return decode(io.BytesIO(data))


def decode_file(path: Union[str, Path]) -> Pattern:
    """Decode the pattern stored at ``path``."""

    with open(path, "rb") as handle:
        return decode(handle)
