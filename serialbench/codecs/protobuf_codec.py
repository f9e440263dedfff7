"""
Protocol Buffers codec backed by a runtime-compiled schema descriptor.

Encoding is gated by the schema's structural check: a payload that does not
match the declared shape raises `SchemaViolation` before any bytes are built.
Decoded output is normalized to the schema's types, so it is only semantically
equivalent to the input on the declared fields.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from serialbench.codecs.abstract import AbstractCodec
from serialbench.infrastructure.schema import (
    SchemaDescriptor,
    SchemaViolation,
    ValidationResult,
    load_schema,
)


class ProtobufCodec(AbstractCodec):
    name: str = "protobuf"
    description: str = "Schema-defined Protocol Buffers binary (deterministic)."
    filename: str = "data.proto"

    def __init__(self, schema: Optional[SchemaDescriptor] = None) -> None:
        self.schema = schema or load_schema()

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        return self.schema.validate(payload)

    def encode(self, payload: Dict[str, Any]) -> bytes:
        """
        Validate the payload against the schema, then serialize it.

        Raises
        ------
        SchemaViolation
            If the payload does not conform to the schema.
        """
        result = self.validate(payload)
        if not result.ok:
            raise SchemaViolation(result.error)
        return self.schema.encode(payload)

    def decode(self, data: bytes) -> Dict[str, Any]:
        return self.schema.decode(data)


__all__ = ["ProtobufCodec"]
