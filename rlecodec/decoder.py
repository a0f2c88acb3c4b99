"""
RLE decoder.

Expands a token stream produced by :mod:`rlecodec.encoder`. A byte with the
high bit clear is copied as-is; a byte with the high bit set is a run header
whose low 7 bits give the count of the value byte that follows.

The token stream carries no length information, so the caller sizes the
output (see :func:`decoded_length`). Capacity is checked before every write;
bytes written before an overflow is detected are not rolled back.
"""
from __future__ import annotations

from .buffers import BytesLike, as_view, resolve_length
from .const import COUNT_MASK, RUN_FLAG
from .errors import InvalidArgumentError, OutputOverflowError, TruncatedStreamError


def _checked_tokens(tokens: BytesLike | None, token_length: int | None) -> tuple[memoryview, int]:
    if tokens is None:
        raise InvalidArgumentError("Token buffer is missing")
    view = as_view(tokens)
    src_len = resolve_length(view, token_length, name="token_length")
    if src_len <= 0:
        raise InvalidArgumentError(f"token_length must be positive, got {src_len}")
    return view, src_len


def decoded_length(tokens: BytesLike | None, token_length: int | None = None) -> int:
    """
    Compute the number of bytes *tokens* decodes to.

    Args:
        tokens: RLE-encoded bytes
        token_length: Number of token bytes to consider (defaults to all)

    Returns:
        Output size needed by :func:`decode_into`

    Raises:
        InvalidArgumentError: Missing or empty token stream
        TruncatedStreamError: Run header without a value byte
    """
    view, src_len = _checked_tokens(tokens, token_length)

    total = 0
    src_pos = 0
    while src_pos < src_len:
        current = view[src_pos]
        src_pos += 1
        if current & RUN_FLAG:
            if src_pos >= src_len:
                raise TruncatedStreamError(
                    f"Malformed RLE: run header 0x{current:02X} at position {src_pos - 1} "
                    "has no value byte",
                    position=src_pos - 1,
                )
            total += current & COUNT_MASK
            src_pos += 1
        else:
            total += 1
    return total


def decode_into(
    tokens: BytesLike | None,
    token_length: int | None = None,
    output: BytesLike | None = None,
    output_capacity: int | None = None,
) -> int:
    """
    Decode *tokens* into the caller-supplied *output* buffer.

    Args:
        tokens: RLE-encoded bytes
        token_length: Number of token bytes to decode (defaults to all)
        output: Writable buffer receiving the decoded bytes
        output_capacity: Maximum bytes to write (defaults to ``len(output)``)

    Returns:
        Number of bytes written to *output*

    Raises:
        InvalidArgumentError: Missing buffers, non-positive token length,
            or lengths beyond the buffers
        TruncatedStreamError: Run header without a value byte
        OutputOverflowError: Decoded data exceeds *output_capacity*
    """
    view, src_len = _checked_tokens(tokens, token_length)
    if output is None:
        raise InvalidArgumentError("Output buffer is missing")
    out = as_view(output, writable=True)
    capacity = resolve_length(out, output_capacity, name="output_capacity")
    if capacity < 0:
        raise InvalidArgumentError(f"output_capacity must not be negative, got {capacity}")

    src_pos = 0
    dst_pos = 0

    while src_pos < src_len:
        current = view[src_pos]
        src_pos += 1

        if current & RUN_FLAG:
            count = current & COUNT_MASK

            if src_pos >= src_len:
                raise TruncatedStreamError(
                    f"Malformed RLE: run header 0x{current:02X} at position {src_pos - 1} "
                    "has no value byte",
                    position=src_pos - 1,
                )

            byte_val = view[src_pos]
            src_pos += 1

            if dst_pos + count > capacity:
                raise OutputOverflowError(
                    f"Run of {count} at position {src_pos - 2} needs {dst_pos + count} bytes; "
                    f"capacity is {capacity}",
                    position=src_pos - 2,
                )

            out[dst_pos : dst_pos + count] = bytes((byte_val,)) * count
            dst_pos += count
        else:
            if dst_pos >= capacity:
                raise OutputOverflowError(
                    f"Literal at position {src_pos - 1} exceeds capacity {capacity}",
                    position=src_pos - 1,
                )
            out[dst_pos] = current
            dst_pos += 1

    return dst_pos


def decode(data: BytesLike, max_output: int | None = None) -> bytes:
    """
    Decode RLE-encoded data.

    Args:
        data: RLE-encoded bytes
        max_output: Upper bound on the decoded size (unbounded when ``None``)

    Returns:
        Decoded raw bytes

    Raises:
        InvalidArgumentError: Negative *max_output*, or empty input; unlike
            :func:`~rlecodec.encoder.encode` this is a failure, since no token
            stream is empty
        TruncatedStreamError: Run header without a value byte
        OutputOverflowError: Decoded size exceeds *max_output*
    """
    if max_output is not None and max_output < 0:
        raise InvalidArgumentError(f"max_output must not be negative, got {max_output}")
    needed = decoded_length(data)
    capacity = needed if max_output is None else min(needed, max_output)
    output = bytearray(capacity)
    written = decode_into(data, None, output, capacity)
    return bytes(output[:written])
