"""
RLE encoder.

Scans the input left to right and collapses each run of 2-127 identical
bytes into a two byte run token (``0x80 | count``, value). Single bytes are
written unchanged as literal tokens, so only bytes 0-127 survive a round
trip outside of a run.

:func:`encode_into` works in place: a literal writes one byte for one byte
read and a run writes two bytes for at least two bytes read, so the write
cursor never passes the read cursor.
"""
from __future__ import annotations

from .buffers import BytesLike, as_view, resolve_length
from .const import (
    LITERAL_MAX,
    LITERAL_TOKEN_SIZE,
    MAX_RUN_LENGTH,
    MIN_RUN_LENGTH,
    RUN_FLAG,
    RUN_TOKEN_SIZE,
)
from .errors import LiteralRangeError


def _run_length(view: memoryview, pos: int, end: int) -> int:
    """Length of the run starting at *pos*, capped at MAX_RUN_LENGTH."""
    current = view[pos]
    run_len = 1
    while pos + run_len < end and view[pos + run_len] == current and run_len < MAX_RUN_LENGTH:
        run_len += 1
    return run_len


def unsafe_literal_positions(data: BytesLike | None, length: int | None = None) -> list[int]:
    """
    Find input offsets that would be emitted as literals with the high bit set.

    Follows the encoder's tokenisation exactly, so the single byte left over
    after a capped run (e.g. the 128th 0xFF) is reported too.

    Args:
        data: Raw bytes to analyse
        length: Number of bytes to consider (defaults to the whole buffer)

    Returns:
        Offsets in ascending order; empty when the input round-trips safely.
    """
    if data is None:
        return []
    view = as_view(data)
    end = resolve_length(view, length)

    positions: list[int] = []
    pos = 0
    while pos < end:
        run_len = _run_length(view, pos, end)
        if run_len < MIN_RUN_LENGTH and view[pos] > LITERAL_MAX:
            positions.append(pos)
        pos += run_len
    return positions


def validate_literals(data: BytesLike | None, length: int | None = None) -> None:
    """
    Reject input containing literal bytes the token format cannot carry.

    Raises:
        LiteralRangeError: On the first unsafe literal, with its position
    """
    positions = unsafe_literal_positions(data, length)
    if positions:
        first = positions[0]
        value = as_view(data)[first]  # type: ignore[arg-type]
        raise LiteralRangeError(
            f"Literal value 0x{value:02X} at index {first} has the high bit set "
            f"({len(positions)} unsafe literal(s) in input)",
            position=first,
        )


def encode_into(buffer: BytesLike | None, length: int | None = None, *, strict: bool = False) -> int:
    """
    Encode *buffer* in place.

    Args:
        buffer: Writable buffer holding the raw bytes; overwritten with tokens
        length: Number of raw bytes at the start of *buffer* (defaults to all)
        strict: Validate literal range before overwriting anything

    Returns:
        Number of token bytes written at the start of *buffer*. ``0`` when
        *buffer* is ``None`` or there is nothing to encode.

    Raises:
        InvalidArgumentError: Read-only buffer or length beyond the buffer
        LiteralRangeError: In strict mode, when a literal byte is >= 128
    """
    if buffer is None or (length is not None and length <= 0):
        return 0

    view = as_view(buffer, writable=True)
    src_len = resolve_length(view, length)
    if src_len == 0:
        return 0

    if strict:
        validate_literals(view, src_len)

    read_pos = 0
    write_pos = 0

    while read_pos < src_len:
        current = view[read_pos]
        count = _run_length(view, read_pos, src_len)

        if count == 1:
            view[write_pos] = current
            write_pos += 1
        else:
            view[write_pos] = RUN_FLAG | count
            view[write_pos + 1] = current
            write_pos += RUN_TOKEN_SIZE

        read_pos += count

    return write_pos


def encode(data: BytesLike, *, strict: bool = False) -> bytes:
    """
    Encode data using RLE.

    Args:
        data: Raw bytes to compress (left unmodified)
        strict: Reject literal bytes >= 128

    Returns:
        RLE-encoded bytes, ``b""`` for empty input
    """
    buffer = bytearray(data)
    written = encode_into(buffer, len(buffer), strict=strict)
    return bytes(buffer[:written])


def encoded_length(data: BytesLike, length: int | None = None) -> int:
    """Size of the token stream :func:`encode` would produce, without writing it."""
    view = as_view(data)
    end = resolve_length(view, length)

    total = 0
    pos = 0
    while pos < end:
        run_len = _run_length(view, pos, end)
        total += LITERAL_TOKEN_SIZE if run_len == 1 else RUN_TOKEN_SIZE
        pos += run_len
    return total


def compression_ratio(original: BytesLike, compressed: BytesLike) -> float:
    """
    Calculate compression ratio.

    Args:
        original: Original uncompressed data
        compressed: Compressed data

    Returns:
        Ratio of byte sizes (original / compressed). This format never expands,
        so any non-empty result is >= 1.0. ``0.0`` for empty *compressed*.
    """
    compressed_len = len(as_view(compressed))
    if not compressed_len:
        return 0.0
    return len(as_view(original)) / compressed_len
