"""Runtime - request execution and monitoring.

Contains: dispatcher, response envelopes and codec, logging setup.
"""

from __future__ import annotations

from .dispatch import Dispatcher, bind_arguments
from .envelope import (
    ContentPart,
    DataPart,
    ResponseEnvelope,
    TextPart,
    decode,
    decode_envelope,
    encode,
    encode_envelope,
    to_content,
    to_jsonable,
)
from .observability import configure_from_settings, configure_logging

__all__ = [
    "Dispatcher", "bind_arguments",
    "ContentPart", "DataPart", "ResponseEnvelope", "TextPart",
    "decode", "decode_envelope", "encode", "encode_envelope", "to_content", "to_jsonable",
    "configure_from_settings", "configure_logging",
]
