"""Tests for the token_debug utility."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest
from rlecodec.codec import RleCodec
from rlecodec.config.model import CodecConfig
from rlecodec.frame import pack
from rlecodec.tokens import TokenKind
from rlecodec.tools import token_debug

from tests.test_constants import MIXED_RUNS_ENCODED, MIXED_RUNS_RAW


def test_parse_payload() -> None:
    assert token_debug._parse_payload(None) == b""
    assert token_debug._parse_payload("") == b""
    assert token_debug._parse_payload("010203") == bytes([1, 2, 3])
    assert token_debug._parse_payload("0x0102") == bytes([1, 2])
    assert token_debug._parse_payload("01 02 03") == bytes([1, 2, 3])


def test_parse_payload_invalid() -> None:
    with pytest.raises(ValueError, match="even number"):
        token_debug._parse_payload("123")
    with pytest.raises(ValueError, match="Invalid payload hex"):
        token_debug._parse_payload("zz")


def test_build_snapshot_encode_with_tokens() -> None:
    snapshot = token_debug.build_snapshot(RleCodec(), "encode", MIXED_RUNS_RAW, show_tokens=True)
    assert snapshot.input_length == 10
    assert snapshot.output_length == 8
    assert snapshot.output_hex == "83 41 42 82 43 44 83 45"
    assert len(snapshot.tokens) == 5
    assert snapshot.roundtrip_ok is None

    rendered = snapshot.render()
    assert "ratio=1.250" in rendered
    assert "@0000 run     count=3   value=0x41" in rendered
    assert "@0002 literal           value=0x42" in rendered


def test_build_snapshot_roundtrip_empty() -> None:
    snapshot = token_debug.build_snapshot(RleCodec(), "roundtrip", b"")
    assert snapshot.output_length == 0
    assert snapshot.roundtrip_ok is True


def test_build_snapshot_roundtrip_frame() -> None:
    snapshot = token_debug.build_snapshot(RleCodec(), "roundtrip", b"\x00" * 64, use_frame=True)
    assert snapshot.roundtrip_ok is True
    assert snapshot.tokens == ()


def test_build_snapshot_frame_tokens() -> None:
    snapshot = token_debug.build_snapshot(
        RleCodec(), "roundtrip", b"\x00" * 64 + b"Z", use_frame=True, show_tokens=True
    )
    assert [(token.kind, token.count) for token in snapshot.tokens] == [
        (TokenKind.RUN, 64),
        (TokenKind.LITERAL, 1),
    ]


def test_main_decode_frame_prints_tokens(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "data.rle"
    path.write_bytes(pack(MIXED_RUNS_RAW))
    assert token_debug.main(["--file", str(path), "--mode", "decode", "--frame", "--tokens"]) == 0
    out = capsys.readouterr().out
    assert "@0000 run     count=3   value=0x41" in out
    assert "@0006 run     count=3   value=0x45" in out


def test_build_snapshot_decode() -> None:
    snapshot = token_debug.build_snapshot(RleCodec(CodecConfig()), "decode", MIXED_RUNS_ENCODED)
    assert snapshot.output_hex == "41 41 41 42 43 43 44 45 45 45"


def test_main_roundtrip(capsys: pytest.CaptureFixture[str]) -> None:
    assert token_debug.main(["--payload", "41414142434344454545", "--tokens"]) == 0
    out = capsys.readouterr().out
    assert "output=83 41 42 82 43 44 83 45" in out
    assert "roundtrip=ok" in out


def test_main_text_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert token_debug.main(["--text", "aaaab", "--mode", "encode"]) == 0
    assert "output=84 61 62" in capsys.readouterr().out


def test_main_file_decode_frame(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "data.rle"
    path.write_bytes(pack(MIXED_RUNS_RAW))
    assert token_debug.main(["--file", str(path), "--mode", "decode", "--frame"]) == 0
    assert "output=41 41 41 42 43 43 44 45 45 45" in capsys.readouterr().out


def test_main_reports_codec_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert token_debug.main(["--payload", "4183", "--mode", "decode"]) == 1
    assert "TRUNCATED_STREAM" in capsys.readouterr().out


def test_main_strict_rejects_high_literals(capsys: pytest.CaptureFixture[str]) -> None:
    assert token_debug.main(["--payload", "41 90 42", "--strict"]) == 1
    assert "LITERAL_OUT_OF_RANGE" in capsys.readouterr().out


def test_main_capacity_limit(capsys: pytest.CaptureFixture[str]) -> None:
    assert token_debug.main(["--payload", "FF7F857F", "--mode", "decode", "--capacity", "100"]) == 1
    assert "OUTPUT_OVERFLOW" in capsys.readouterr().out


def test_main_unsafe_literal_overflows_on_restore(capsys: pytest.CaptureFixture[str]) -> None:
    # 0x85 0x41 reads back as a run of five 'A', more than the 3 input bytes.
    assert token_debug.main(["--payload", "854142"]) == 1
    assert "OUTPUT_OVERFLOW" in capsys.readouterr().out


def test_build_snapshot_roundtrip_mismatch() -> None:
    # Restored to exactly 3 bytes, but 0x81 0x41 then 0x42 does not match the input.
    snapshot = token_debug.build_snapshot(RleCodec(), "roundtrip", b"\x81AB")
    assert snapshot.roundtrip_ok is False
    assert "roundtrip=MISMATCH" in snapshot.render()


def test_main_bad_payload() -> None:
    with pytest.raises(SystemExit) as excinfo:
        token_debug.main(["--payload", "abc"])
    assert excinfo.value.code == 2


def test_main_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        token_debug.main(["--file", str(tmp_path / "missing.bin")])
    assert excinfo.value.code == 2


@pytest.mark.parametrize("value", ["0", "-5", "ten"])
def test_main_rejects_non_positive_capacity(value: str, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        token_debug.main(["--payload", "4141", "--capacity", value])
    assert excinfo.value.code == 2
    assert "argument --capacity" in capsys.readouterr().err


def test_positive_int() -> None:
    assert token_debug._positive_int("1") == 1
    with pytest.raises(argparse.ArgumentTypeError):
        token_debug._positive_int("0")
