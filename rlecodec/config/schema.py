"""Marshmallow schema for CodecConfig validation."""

from __future__ import annotations

from typing import Any, Dict

from marshmallow import Schema, fields, post_load, pre_load, validate

from ..const import (
    DEFAULT_DEBUG_LOGGING,
    DEFAULT_LOG_FORMAT,
    DEFAULT_MAX_OUTPUT_BYTES,
    DEFAULT_STRICT_LITERAL_RANGE,
    LOG_FORMATS,
)
from .model import CodecConfig


class CodecConfigSchema(Schema):
    """Declarative validation schema for codec configuration."""

    strict_literal_range = fields.Bool(load_default=DEFAULT_STRICT_LITERAL_RANGE)
    max_output_bytes = fields.Int(load_default=DEFAULT_MAX_OUTPUT_BYTES, validate=validate.Range(min=1))
    debug_logging = fields.Bool(load_default=DEFAULT_DEBUG_LOGGING)
    log_format = fields.Str(load_default=DEFAULT_LOG_FORMAT, validate=validate.OneOf(LOG_FORMATS))

    @pre_load
    def normalize_log_format(self, data: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        if isinstance(data.get("log_format"), str):
            data = dict(data)
            data["log_format"] = data["log_format"].strip().lower()
        return data

    @post_load
    def make_config(self, data: Dict[str, Any], **kwargs: Any) -> CodecConfig:
        return CodecConfig(**data)
