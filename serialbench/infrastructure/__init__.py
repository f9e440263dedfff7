"""
Infrastructure package for serialbench.

Centralizes the schema provider that backs the Protocol Buffers codec.
Keep this layer focused on external collaborators, decoupled from
codec/orchestrator logic.
"""

from serialbench.infrastructure.schema import (
    SchemaDescriptor,
    SchemaViolation,
    ValidationResult,
    available_schemas,
    load_schema,
)

__all__ = [
    "SchemaDescriptor",
    "SchemaViolation",
    "ValidationResult",
    "available_schemas",
    "load_schema",
]
