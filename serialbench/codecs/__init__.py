"""
Codecs package for serialbench.

This module re-exports the abstract interfaces and the concrete codec classes
and hosts the codec registry used by the orchestrator and CLI.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from serialbench.codecs.abstract import AbstractCodec, Codec, Measurement, SymmetryResult
from serialbench.codecs.json_codec import JsonCodec
from serialbench.codecs.protobuf_codec import ProtobufCodec
from serialbench.codecs.xml_codec import XmlCodec
from serialbench.infrastructure.schema import SchemaDescriptor


def _codec_factories(
    schema: Optional[SchemaDescriptor] = None,
) -> Dict[str, Callable[[], Codec]]:
    """Registry of available codecs, in execution order."""
    return {
        "json": lambda: JsonCodec(),
        "xml": lambda: XmlCodec(),
        "protobuf": lambda: ProtobufCodec(schema),
    }


def available_codecs() -> List[str]:
    """List available codec names in execution order."""
    return list(_codec_factories().keys())


def resolve_codec(name: str, schema: Optional[SchemaDescriptor] = None) -> Codec:
    factories = _codec_factories(schema)
    if name not in factories:
        raise ValueError(f"Unknown codec '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


__all__ = [
    # Abstracts
    "AbstractCodec",
    "Codec",
    "Measurement",
    "SymmetryResult",
    # Concrete codecs
    "JsonCodec",
    "ProtobufCodec",
    "XmlCodec",
    # Registry
    "available_codecs",
    "resolve_codec",
]
