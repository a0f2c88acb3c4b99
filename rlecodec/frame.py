"""Framing for persisting or transmitting RLE token streams.

A raw token stream has no length prefix and no integrity check, and the
decoder needs the original length to size its output. This module wraps a
stream in a small frame carrying both.

Frame Structure:
    [Header (9 bytes)] [Tokens (0-N bytes)] [CRC32 (4 bytes)]

Header Format (big-endian):
    - version (1 byte): Frame version, must match FRAME_VERSION
    - original_length (4 bytes): Number of bytes the tokens decode to
    - token_length (4 bytes): Number of token bytes that follow

The CRC32 (IEEE 802.3, as computed by ``binascii.crc32``) covers the header
and the tokens.

Example:
    >>> raw = pack(b"AAAB")
    >>> unpack(raw)
    b'AAAB'
"""

from __future__ import annotations

from binascii import crc32
from typing import Any, cast

import msgspec
from construct import Bytes, ConstructError, Int8ub, Int32ub, Struct, Terminated, this  # type: ignore

from .buffers import BytesLike, as_view
from .const import CRC32_MASK, FRAME_VERSION, UINT32_MAX
from .decoder import decode_into, decoded_length
from .encoder import encode
from .errors import FrameError

CRC_STRUCT: Any = Int32ub
CRC_SIZE: int = CRC_STRUCT.sizeof()

# Corresponds to: [Version:1][OriginalLen:4][TokenLen:4][Tokens:N]
HeaderTokensStruct: Any = Struct(
    cast(Any, "version") / Int8ub,
    cast(Any, "original_length") / Int32ub,
    cast(Any, "token_length") / Int32ub,
    cast(Any, "tokens") / Bytes(this.token_length),
    Terminated,
)

HEADER_SIZE: int = 1 + 4 + 4
MIN_FRAME_SIZE: int = HEADER_SIZE + CRC_SIZE


class Frame(msgspec.Struct):
    """A token stream together with the length it decodes to.

    Example:
        >>> frame = Frame(original_length=4, tokens=b"\\x83AB")
        >>> Frame.from_bytes(frame.to_bytes()) == frame
        True
    """

    original_length: int
    tokens: bytes = b""

    @staticmethod
    def build(original_length: int, tokens: bytes) -> bytes:
        """Build a raw frame (header + tokens + CRC)."""
        if not 0 <= original_length <= UINT32_MAX:
            raise FrameError(f"Original length {original_length} outside 32-bit range")
        if len(tokens) > original_length:
            raise FrameError(
                f"Token stream ({len(tokens)} bytes) is longer than the data it encodes "
                f"({original_length} bytes)"
            )

        container = {
            "version": FRAME_VERSION,
            "original_length": original_length,
            "token_length": len(tokens),
            "tokens": bytes(tokens),
        }
        data_to_crc = HeaderTokensStruct.build(container)
        crc = crc32(data_to_crc) & CRC32_MASK
        return data_to_crc + CRC_STRUCT.build(crc)

    @staticmethod
    def parse(raw_frame_buffer: bytes) -> tuple[int, bytes]:
        """Validate size, CRC and header of a raw frame."""
        if len(raw_frame_buffer) < MIN_FRAME_SIZE:
            raise FrameError(
                f"Incomplete frame: size {len(raw_frame_buffer)} is less than minimum {MIN_FRAME_SIZE}"
            )

        crc_start = len(raw_frame_buffer) - CRC_SIZE
        data_to_check = raw_frame_buffer[:crc_start]
        received_crc = CRC_STRUCT.parse(raw_frame_buffer[crc_start:])
        calculated_crc = crc32(data_to_check) & CRC32_MASK

        if received_crc != calculated_crc:
            raise FrameError(f"CRC mismatch. Expected {calculated_crc:08X}, got {received_crc:08X}")

        try:
            container = HeaderTokensStruct.parse(data_to_check)
        except ConstructError as exc:
            raise FrameError(f"Frame structure error: {exc}") from exc

        if container.version != FRAME_VERSION:
            raise FrameError(f"Invalid version. Expected {FRAME_VERSION}, got {container.version}")

        tokens = bytes(container.tokens)
        if len(tokens) > container.original_length:
            raise FrameError(
                f"Token stream ({len(tokens)} bytes) is longer than the declared "
                f"original length ({container.original_length} bytes)"
            )
        return container.original_length, tokens

    def to_bytes(self) -> bytes:
        return self.build(self.original_length, self.tokens)

    @classmethod
    def from_bytes(cls, raw_frame_buffer: bytes) -> Frame:
        original_length, tokens = cls.parse(raw_frame_buffer)
        return cls(original_length=original_length, tokens=tokens)


def pack(data: BytesLike, *, strict: bool = False) -> bytes:
    """Encode *data* and wrap the tokens in a frame."""
    tokens = encode(data, strict=strict)
    return Frame.build(len(as_view(data)), tokens)


def unpack(raw_frame_buffer: bytes, *, max_output: int | None = None) -> bytes:
    """
    Verify a frame and decode its tokens.

    The declared length is checked against the tokens before the output
    buffer is allocated.

    Args:
        raw_frame_buffer: Bytes produced by :func:`pack`
        max_output: Reject frames declaring more than this many bytes

    Returns:
        The original data

    Raises:
        FrameError: Bad frame, or tokens that do not decode to the declared length
        TruncatedStreamError: Run header without a value byte
    """
    frame = Frame.from_bytes(raw_frame_buffer)
    if max_output is not None and frame.original_length > max_output:
        raise FrameError(f"Frame declares {frame.original_length} bytes; limit is {max_output}")
    if not frame.tokens:
        if frame.original_length:
            raise FrameError(f"Frame declares {frame.original_length} bytes but carries no tokens")
        return b""

    produced = decoded_length(frame.tokens)
    if produced != frame.original_length:
        raise FrameError(f"Tokens decode to {produced} bytes; frame declares {frame.original_length}")

    output = bytearray(produced)
    decode_into(frame.tokens, len(frame.tokens), output, produced)
    return bytes(output)
