"""Configuration helpers for the RLE codec."""

from . import logging, settings  # noqa: F401  # pyright: ignore[reportUnusedImport]
from .model import CodecConfig
from .settings import load_codec_config

__all__ = ["CodecConfig", "load_codec_config"]
