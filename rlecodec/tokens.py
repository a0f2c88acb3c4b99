"""Token-level view of an RLE stream.

The binary layout is declared with Construct so that tooling can inspect a
stream token by token. The encoder and decoder keep their own byte loops and
do not go through these structures.

Token Structure:
    [Header (1 byte)] [Value (1 byte, run tokens only)]

Header Format (bit fields, MSB first):
    - is_run (1 bit): 1 for a run token, 0 for a literal
    - count (7 bits): run length, or the literal value itself
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import StrEnum
from typing import Any, cast

import msgspec
from construct import BitsInteger, BitStruct, ConstructError, Flag, If, Int8ub, Struct, this  # type: ignore

from .buffers import BytesLike, as_view, resolve_length
from .const import LITERAL_MAX, LITERAL_TOKEN_SIZE, MAX_RUN_LENGTH, RUN_TOKEN_SIZE, UINT8_MASK
from .errors import InvalidArgumentError, LiteralRangeError, TruncatedStreamError

__all__ = [
    "TOKEN_HEADER_STRUCT",
    "TOKEN_STRUCT",
    "Token",
    "TokenKind",
    "build_token",
    "iter_tokens",
    "join_tokens",
]

TOKEN_HEADER_STRUCT: Any = BitStruct(
    cast(Any, "is_run") / Flag,
    cast(Any, "count") / BitsInteger(7),
)

TOKEN_STRUCT: Any = Struct(
    cast(Any, "header") / TOKEN_HEADER_STRUCT,
    cast(Any, "value") / If(this.header.is_run, Int8ub),
)


class TokenKind(StrEnum):
    LITERAL = "literal"
    RUN = "run"


class Token(msgspec.Struct, frozen=True):
    """One decoded token.

    Attributes:
        kind: Literal or run.
        value: The literal byte, or the repeated byte of a run.
        count: Number of output bytes (always 1 for literals).
        offset: Position of the token's first byte in the stream.
    """

    kind: TokenKind
    value: int
    count: int = 1
    offset: int = 0

    @classmethod
    def literal(cls, value: int, offset: int = 0) -> Token:
        return cls(kind=TokenKind.LITERAL, value=value, count=1, offset=offset)

    @classmethod
    def run(cls, count: int, value: int, offset: int = 0) -> Token:
        return cls(kind=TokenKind.RUN, value=value, count=count, offset=offset)

    @property
    def size(self) -> int:
        return RUN_TOKEN_SIZE if self.kind is TokenKind.RUN else LITERAL_TOKEN_SIZE

    def expand(self) -> bytes:
        return bytes((self.value,)) * self.count

    def to_bytes(self) -> bytes:
        return build_token(self)


def build_token(token: Token) -> bytes:
    """Serialise *token* to its wire form."""
    if token.kind is TokenKind.LITERAL:
        if not 0 <= token.value <= LITERAL_MAX:
            raise LiteralRangeError(
                f"Literal value 0x{token.value:02X} does not fit in 7 bits",
                position=token.offset,
            )
        container = {"header": {"is_run": False, "count": token.value}, "value": None}
    else:
        if not 1 <= token.count <= MAX_RUN_LENGTH:
            raise InvalidArgumentError(f"Run count {token.count} outside 1-{MAX_RUN_LENGTH}")
        if not 0 <= token.value <= UINT8_MASK:
            raise InvalidArgumentError(f"Run value {token.value} outside 8-bit range")
        container = {"header": {"is_run": True, "count": token.count}, "value": token.value}

    try:
        return TOKEN_STRUCT.build(container)
    except ConstructError as exc:
        raise InvalidArgumentError(f"Token structure error: {exc}") from exc


def iter_tokens(tokens: BytesLike | None, token_length: int | None = None) -> Iterator[Token]:
    """Yield the tokens of a stream in order.

    Raises:
        InvalidArgumentError: *tokens* is ``None``
        TruncatedStreamError: The stream ends right after a run header
    """
    if tokens is None:
        raise InvalidArgumentError("Token buffer is missing")
    view = as_view(tokens)
    src_len = resolve_length(view, token_length, name="token_length")

    offset = 0
    while offset < src_len:
        chunk = bytes(view[offset : min(offset + RUN_TOKEN_SIZE, src_len)])
        try:
            container = TOKEN_STRUCT.parse(chunk)
        except ConstructError as exc:
            raise TruncatedStreamError(
                f"Malformed RLE: run header 0x{chunk[0]:02X} at position {offset} has no value byte",
                position=offset,
            ) from exc

        if container.header.is_run:
            token = Token.run(container.header.count, container.value, offset)
        else:
            token = Token.literal(container.header.count, offset)
        yield token
        offset += token.size


def join_tokens(tokens: Iterable[Token]) -> bytes:
    """Serialise a sequence of tokens back into a stream."""
    return b"".join(build_token(token) for token in tokens)
