"""Run-length encoding codec package initialisation."""

__version__ = "1.0.0"

import logging

from .decoder import decode, decode_into, decoded_length
from .encoder import (
    compression_ratio,
    encode,
    encode_into,
    encoded_length,
    unsafe_literal_positions,
    validate_literals,
)
from .errors import (
    ErrorKind,
    FrameError,
    InvalidArgumentError,
    LiteralRangeError,
    OutputOverflowError,
    RLEError,
    TruncatedStreamError,
)

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "ErrorKind",
    "FrameError",
    "InvalidArgumentError",
    "LiteralRangeError",
    "OutputOverflowError",
    "RLEError",
    "TruncatedStreamError",
    "compression_ratio",
    "decode",
    "decode_into",
    "decoded_length",
    "encode",
    "encode_into",
    "encoded_length",
    "unsafe_literal_positions",
    "validate_literals",
]
