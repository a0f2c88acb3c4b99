"""Data model for codec configuration."""

from __future__ import annotations

from dataclasses import dataclass

from ..const import (
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_LOG_FORMAT,
    DEFAULT_MAX_OUTPUT_BYTES,
    DEFAULT_STRICT_LITERAL_RANGE,
)


@dataclass(slots=True)
class CodecConfig:
    """Strongly typed configuration for :class:`rlecodec.codec.RleCodec`."""

    strict_literal_range: bool = DEFAULT_STRICT_LITERAL_RANGE
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES
    debug_logging: bool = DEFAULT_DEBUG_LOGGING
    log_format: str = DEFAULT_LOG_FORMAT
