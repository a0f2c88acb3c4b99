"""Error taxonomy for the RLE codec.

Every failure is an :class:`RLEError` (a ``ValueError``) tagged with an
:class:`ErrorKind`, so callers can tell a truncated stream from an output
overflow without string matching.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

__all__ = [
    "ErrorKind",
    "FrameError",
    "InvalidArgumentError",
    "LiteralRangeError",
    "OutputOverflowError",
    "RLEError",
    "TruncatedStreamError",
]


class ErrorKind(IntEnum):
    INVALID_ARGUMENT = 1
    TRUNCATED_STREAM = 2
    OUTPUT_OVERFLOW = 3
    LITERAL_OUT_OF_RANGE = 4
    MALFORMED_FRAME = 5


class RLEError(ValueError):
    """Base class for codec failures."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


class InvalidArgumentError(RLEError):
    """Absent buffer, non-positive length or a length beyond its buffer."""

    kind = ErrorKind.INVALID_ARGUMENT


class TruncatedStreamError(RLEError):
    """A run header is the last byte of the token stream."""

    kind = ErrorKind.TRUNCATED_STREAM


class OutputOverflowError(RLEError):
    """The decoded data does not fit in the output capacity."""

    kind = ErrorKind.OUTPUT_OVERFLOW


class LiteralRangeError(RLEError):
    """A byte >= 128 would be written as a literal token."""

    kind = ErrorKind.LITERAL_OUT_OF_RANGE


class FrameError(RLEError):
    """A framed token stream failed size, version or CRC checks."""

    kind = ErrorKind.MALFORMED_FRAME
