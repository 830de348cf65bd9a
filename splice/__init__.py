"""Decode and render drum machine splice pattern files."""

from .decoder import (  # noqa: F401
    HEADER_SIZE,
    MAGIC,
    METADATA_SIZE,
    VERSION_SIZE,
    decode,
    decode_bytes,
    decode_file,
    iter_tracks,
)
from .encoder import encode_pattern, encode_track  # noqa: F401
from .errors import InvalidHeader, SpliceError, TruncatedHeader  # noqa: F401
from .pattern import (  # noqa: F401
    STEP_COUNT,
    Pattern,
    Track,
    format_steps,
    format_tempo,
    render_pattern,
)
