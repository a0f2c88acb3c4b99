"""Pytest configuration for RLE codec tests."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

import pytest
from rlecodec.codec import RleCodec
from rlecodec.config.model import CodecConfig

from tests.test_constants import TEST_RANDOM_SEED


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: randomized resilience tests with a fixed seed")


@pytest.fixture(autouse=True)
def reset_logging_handlers() -> Iterator[None]:
    """Undo root logger changes made by configure_logging() during a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler in original_handlers:
            continue
        try:
            handler.close()
        except (OSError, RuntimeError):
            pass
        root.removeHandler(handler)
    for handler in original_handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(original_level)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(TEST_RANDOM_SEED)


@pytest.fixture()
def codec_config() -> CodecConfig:
    return CodecConfig()


@pytest.fixture()
def codec(codec_config: CodecConfig) -> RleCodec:
    return RleCodec(codec_config)


@pytest.fixture()
def strict_codec() -> RleCodec:
    return RleCodec(CodecConfig(strict_literal_range=True))
