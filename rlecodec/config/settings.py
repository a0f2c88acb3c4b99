"""Settings loader for the RLE codec.

Configuration comes only from the mapping handed in by the caller (the CLI
builds one from its arguments). Environment variables and files are not
consulted.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from marshmallow import ValidationError

from .model import CodecConfig
from .schema import CodecConfigSchema

logger = logging.getLogger(__name__)


def _format_errors(messages: Any) -> str:
    if isinstance(messages, dict):
        return "; ".join(f"{key}: {_format_errors(value)}" for key, value in sorted(messages.items()))
    if isinstance(messages, (list, tuple)):
        return ", ".join(str(item) for item in messages)
    return str(messages)


def load_codec_config(raw: Mapping[str, Any] | None = None) -> CodecConfig:
    """Validate *raw* and build a :class:`CodecConfig`.

    ``None`` yields the defaults. Unknown keys are rejected.

    Raises:
        ValueError: When the mapping fails schema validation
    """
    if raw is None:
        return CodecConfig()

    try:
        config: CodecConfig = CodecConfigSchema().load(dict(raw))
    except ValidationError as exc:
        raise ValueError(f"Invalid codec configuration: {_format_errors(exc.messages)}") from exc

    if not config.strict_literal_range:
        logger.debug("Strict literal range validation disabled; literals >= 0x80 will not round-trip")
    return config
