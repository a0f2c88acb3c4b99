"""Config-bound facade over the encoder, decoder and frame helpers.

This is the layer callers hold on to. The core functions stay free of side
effects; logging and configuration defaults are applied here.
"""

from __future__ import annotations

import logging

from . import frame
from .buffers import BytesLike, as_view
from .config.model import CodecConfig
from .decoder import decode
from .encoder import compression_ratio, encode, unsafe_literal_positions

logger = logging.getLogger(__name__)


class RleCodec:
    """Encode and decode byte strings according to a :class:`CodecConfig`."""

    def __init__(self, config: CodecConfig | None = None) -> None:
        self.config = config or CodecConfig()

    def _check_literals(self, data: BytesLike) -> None:
        if self.config.strict_literal_range:
            return
        positions = unsafe_literal_positions(data)
        if positions:
            logger.warning(
                "Input has %d literal byte(s) >= 0x80; the token stream will not round-trip",
                len(positions),
                extra={"first_position": positions[0]},
            )

    def compress(self, data: BytesLike) -> bytes:
        self._check_literals(data)
        tokens = encode(data, strict=self.config.strict_literal_range)
        logger.debug(
            "Encoded %d bytes into %d token bytes",
            len(as_view(data)),
            len(tokens),
            extra={"ratio": round(compression_ratio(data, tokens), 3)},
        )
        return tokens

    def decompress(self, tokens: BytesLike, max_output: int | None = None) -> bytes:
        """Decode *tokens*, bounded by *max_output* or ``config.max_output_bytes``."""
        limit = self.config.max_output_bytes if max_output is None else max_output
        data = decode(tokens, max_output=limit)
        logger.debug("Decoded %d token bytes into %d bytes", len(as_view(tokens)), len(data))
        return data

    def pack(self, data: BytesLike) -> bytes:
        self._check_literals(data)
        raw = frame.pack(data, strict=self.config.strict_literal_range)
        logger.debug("Packed %d bytes into a %d byte frame", len(as_view(data)), len(raw))
        return raw

    def unpack(self, raw_frame: bytes) -> bytes:
        data = frame.unpack(raw_frame, max_output=self.config.max_output_bytes)
        logger.debug("Unpacked a %d byte frame into %d bytes", len(raw_frame), len(data))
        return data
