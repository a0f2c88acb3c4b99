"""Token inspection utility for RLE codec developers.

Encodes, decodes or round-trips a payload and prints the resulting lengths,
the compression ratio, hex dumps and optionally a token table. Payloads come
from a hex string, a literal text string or a file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from rlecodec.codec import RleCodec
from rlecodec.config.logging import configure_logging
from rlecodec.config.settings import load_codec_config
from rlecodec.encoder import compression_ratio
from rlecodec.errors import RLEError
from rlecodec.frame import Frame
from rlecodec.tokens import Token, TokenKind, iter_tokens

logger = logging.getLogger(__name__)

MODES = ("encode", "decode", "roundtrip")


@dataclass(slots=True)
class TokenDebugSnapshot:
    mode: str
    input_length: int
    output_length: int
    ratio: float
    input_hex: str
    output_hex: str
    tokens: tuple[Token, ...] = ()
    roundtrip_ok: bool | None = None

    def render(self) -> str:
        lines = [
            "[TokenDebug] --- Snapshot ---",
            f"mode={self.mode}",
            f"input_len={self.input_length}",
            f"output_len={self.output_length}",
            f"ratio={self.ratio:.3f}",
            f"input={self.input_hex}",
            f"output={self.output_hex}",
        ]
        if self.roundtrip_ok is not None:
            lines.append(f"roundtrip={'ok' if self.roundtrip_ok else 'MISMATCH'}")
        if self.tokens:
            lines.append("[TokenDebug] --- Tokens ---")
            lines.extend(_render_token(token) for token in self.tokens)
        return "\n".join(lines)


def _render_token(token: Token) -> str:
    if token.kind is TokenKind.RUN:
        return f"@{token.offset:04d} run     count={token.count:<3d} value=0x{token.value:02X}"
    return f"@{token.offset:04d} literal           value=0x{token.value:02X}"


def _hex_with_spacing(data: bytes) -> str:
    return " ".join(f"{byte:02X}" for byte in data)


def _parse_payload(hex_string: str | None) -> bytes:
    if not hex_string:
        return b""
    compact = "".join(hex_string.split())
    if compact.startswith("0x") or compact.startswith("0X"):
        compact = compact[2:]
    if len(compact) % 2:
        raise ValueError("payload hex must contain an even number of digits")
    try:
        return bytes.fromhex(compact)
    except ValueError as exc:
        raise ValueError(f"Invalid payload hex '{hex_string}': {exc}") from exc


def _read_input(args: argparse.Namespace) -> bytes:
    if args.file:
        try:
            return Path(args.file).read_bytes()
        except OSError as exc:
            raise ValueError(f"Cannot read {args.file}: {exc}") from exc
    if args.text is not None:
        return args.text.encode("latin-1")
    return _parse_payload(args.payload)


def build_snapshot(
    codec: RleCodec,
    mode: str,
    data: bytes,
    *,
    use_frame: bool = False,
    show_tokens: bool = False,
) -> TokenDebugSnapshot:
    """Run *mode* over *data* and collect what the CLI prints."""
    roundtrip_ok: bool | None = None
    if mode == "decode":
        output = codec.unpack(data) if use_frame else codec.decompress(data)
        stream = data
        ratio = compression_ratio(output, data)
    else:
        output = codec.pack(data) if use_frame else codec.compress(data)
        stream = output
        ratio = compression_ratio(data, output)
        if mode == "roundtrip":
            restored = _restore(codec, output, use_frame=use_frame, original_length=len(data))
            roundtrip_ok = restored == data

    tokens: tuple[Token, ...] = ()
    if show_tokens:
        if use_frame:
            stream = Frame.from_bytes(stream).tokens
        if stream:
            tokens = tuple(iter_tokens(stream))

    return TokenDebugSnapshot(
        mode=mode,
        input_length=len(data),
        output_length=len(output),
        ratio=ratio,
        input_hex=_hex_with_spacing(data),
        output_hex=_hex_with_spacing(output),
        tokens=tokens,
        roundtrip_ok=roundtrip_ok,
    )


def _restore(codec: RleCodec, output: bytes, *, use_frame: bool, original_length: int) -> bytes:
    if use_frame:
        return codec.unpack(output)
    if not output:
        # encode() of empty input yields no tokens, and decode() rejects an empty stream.
        return b""
    return codec.decompress(output, max_output=original_length)


def _positive_int(value: str) -> int:
    try:
        candidate = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from exc
    if candidate < 1:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return candidate


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Encode, decode and inspect RLE token streams.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--payload",
        "-p",
        help="Input as hex string (spaces and a leading 0x allowed).",
    )
    source.add_argument(
        "--text",
        "-t",
        help="Input as a literal string (latin-1 encoded).",
    )
    source.add_argument(
        "--file",
        "-f",
        help="Read input bytes from a file.",
    )
    parser.add_argument(
        "--mode",
        "-m",
        choices=MODES,
        default="roundtrip",
        help="Operation to run on the input (default: roundtrip).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject literal bytes >= 0x80 before encoding.",
    )
    parser.add_argument(
        "--capacity",
        type=_positive_int,
        default=None,
        help="Maximum decoded size in bytes (default: 1 MiB).",
    )
    parser.add_argument(
        "--frame",
        action="store_true",
        help="Wrap encoded output in a length-prefixed CRC frame (or unwrap in decode mode).",
    )
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print a table of the tokens in the stream.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--log-format",
        choices=("text", "json"),
        default="text",
        help="Log line format (default: text).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    raw_config: dict[str, object] = {
        "strict_literal_range": args.strict,
        "debug_logging": args.debug,
        "log_format": args.log_format,
    }
    if args.capacity is not None:
        raw_config["max_output_bytes"] = args.capacity

    try:
        config = load_codec_config(raw_config)
        data = _read_input(args)
    except ValueError as exc:
        parser.error(str(exc))
        return 2

    configure_logging(config)
    codec = RleCodec(config)

    try:
        snapshot = build_snapshot(
            codec,
            args.mode,
            data,
            use_frame=args.frame,
            show_tokens=args.tokens,
        )
    except RLEError as exc:
        logger.debug("Codec failure", exc_info=True)
        print(f"[TokenDebug] {exc.kind.name}: {exc.message}")
        return 1

    print(snapshot.render())
    if snapshot.roundtrip_ok is False:
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
