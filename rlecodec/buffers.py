"""Buffer helpers shared by the encoder and decoder."""

from __future__ import annotations

from typing import TypeAlias

from .errors import InvalidArgumentError

BytesLike: TypeAlias = bytes | bytearray | memoryview


def as_view(data: BytesLike, *, writable: bool = False) -> memoryview:
    """Return a flat unsigned-byte view of *data*."""
    try:
        view = memoryview(data).cast("B")
    except TypeError as exc:
        raise InvalidArgumentError(f"Expected a contiguous byte buffer: {exc}") from exc
    if writable and view.readonly:
        raise InvalidArgumentError("Buffer is read-only; pass a bytearray or writable memoryview")
    return view


def resolve_length(view: memoryview, length: int | None, *, name: str = "length") -> int:
    """Default *length* to the view size and reject values beyond it."""
    if length is None:
        return len(view)
    if length > len(view):
        raise InvalidArgumentError(f"{name} {length} exceeds buffer size {len(view)}")
    return length
