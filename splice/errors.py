from __future__ import annotations


class SpliceError(ValueError):
    """Base class for failures decoding a splice pattern file."""


class InvalidHeader(SpliceError):
    """The leading magic bytes are not ``SPLICE``."""

    field = "magic"

    def __init__(self, found: bytes) -> None:
        self.found = found
        super().__init__(f"bad magic: {found!r}")


class TruncatedHeader(SpliceError):
    """The source ended inside the fixed 50-byte header."""

    def __init__(self, field: str, needed: int, got: int) -> None:
        self.field = field
        self.needed = needed
        self.got = got
        super().__init__(
            f"file too short for {field} ({got} bytes, need {needed})"
        )
