"""Token format constants shared by the encoder and decoder.

Token layout:
  - ``0xxxxxxx``: literal byte, the value is the byte itself (0-127)
  - ``1ccccccc vvvvvvvv``: run token, ``c`` (low 7 bits) copies of ``v``

Examples:
  0x41           = 'A'
  0x83 0x41      = 'AAA'
  0xFF 0x7F 0x85 0x7F = 132 x 0x7F (127 + 5)

The raw stream has no header, length prefix or checksum.
"""
from __future__ import annotations

from typing import Final

# High bit of a token's first byte marks a run header
RUN_FLAG: Final[int] = 0x80

# Low 7 bits of a run header hold the count
COUNT_MASK: Final[int] = 0x7F

# Largest byte value that can be written as a literal token
LITERAL_MAX: Final[int] = 0x7F

# Shortest run emitted as a run token; single bytes stay literals
MIN_RUN_LENGTH: Final[int] = 2

# Largest count a run header can carry
MAX_RUN_LENGTH: Final[int] = COUNT_MASK

LITERAL_TOKEN_SIZE: Final[int] = 1
RUN_TOKEN_SIZE: Final[int] = 2

UINT8_MASK: Final[int] = 0xFF
UINT32_MAX: Final[int] = 0xFFFFFFFF
CRC32_MASK: Final[int] = 0xFFFFFFFF

FRAME_VERSION: Final[int] = 1

DEFAULT_STRICT_LITERAL_RANGE: Final[bool] = False
DEFAULT_MAX_OUTPUT_BYTES: Final[int] = 1024 * 1024
DEFAULT_DEBUG_LOGGING: Final[bool] = False
DEFAULT_LOG_FORMAT: Final[str] = "text"
LOG_FORMATS: Final[tuple[str, ...]] = ("text", "json")
