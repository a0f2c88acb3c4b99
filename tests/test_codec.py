"""Tests for the config-bound RleCodec facade."""

from __future__ import annotations

import logging
from array import array

import pytest
from rlecodec.codec import RleCodec
from rlecodec.config.model import CodecConfig
from rlecodec.errors import InvalidArgumentError, LiteralRangeError, OutputOverflowError

from tests.test_constants import MIXED_RUNS_ENCODED, MIXED_RUNS_RAW, SPLIT_RUN_RAW


def test_compress_decompress(codec: RleCodec) -> None:
    assert codec.compress(MIXED_RUNS_RAW) == MIXED_RUNS_ENCODED
    assert codec.decompress(MIXED_RUNS_ENCODED) == MIXED_RUNS_RAW


def test_default_config() -> None:
    assert RleCodec().config == CodecConfig()


def test_decompress_uses_configured_limit() -> None:
    codec = RleCodec(CodecConfig(max_output_bytes=100))
    tokens = codec.compress(SPLIT_RUN_RAW)
    with pytest.raises(OutputOverflowError):
        codec.decompress(tokens)
    assert codec.decompress(tokens, max_output=200) == SPLIT_RUN_RAW


def test_decompress_empty_fails(codec: RleCodec) -> None:
    with pytest.raises(InvalidArgumentError):
        codec.decompress(b"")


def test_pack_unpack(codec: RleCodec) -> None:
    assert codec.unpack(codec.pack(MIXED_RUNS_RAW)) == MIXED_RUNS_RAW


def test_non_strict_warns_about_unsafe_literals(codec: RleCodec, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="rlecodec.codec"):
        tokens = codec.compress(b"A\x90B")
    assert tokens == b"A\x90B"
    assert "will not round-trip" in caplog.text
    assert caplog.records[0].first_position == 1


def test_safe_input_does_not_warn(codec: RleCodec, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="rlecodec.codec"):
        codec.compress(MIXED_RUNS_RAW)
    assert caplog.records == []


def test_strict_rejects_unsafe_literals(strict_codec: RleCodec) -> None:
    with pytest.raises(LiteralRangeError):
        strict_codec.compress(b"A\x90B")
    with pytest.raises(LiteralRangeError):
        strict_codec.pack(b"A\x90B")


def test_debug_logging(codec: RleCodec, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="rlecodec.codec"):
        codec.compress(SPLIT_RUN_RAW)
    assert "Encoded 132 bytes into 4 token bytes" in caplog.text
    assert caplog.records[-1].ratio == 33.0


def test_decompress_negative_limit(codec: RleCodec) -> None:
    with pytest.raises(InvalidArgumentError):
        codec.decompress(MIXED_RUNS_ENCODED, max_output=-1)


def test_debug_logging_counts_bytes_of_wide_buffers(codec: RleCodec, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="rlecodec.codec"):
        tokens = codec.compress(array("H", [0x4141] * 4))
    assert tokens == bytes([0x88, ord("A")])
    assert "Encoded 8 bytes into 2 token bytes" in caplog.text
    assert caplog.records[-1].ratio == 4.0
