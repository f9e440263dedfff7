"""
JSON codec: compact UTF-8 text, plus an indented rendering used only as a
size baseline.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from serialbench.codecs.abstract import AbstractCodec

COMPACT_SEPARATORS = (",", ":")


class JsonCodec(AbstractCodec):
    """
    Serialize the root object with `json.dumps` and no insignificant whitespace.

    Key order follows the payload's insertion order, so output is byte-identical
    for an unchanged payload.
    """

    name: str = "json"
    description: str = "Compact JSON text (UTF-8)."
    filename: str = "data.json"

    def encode(self, payload: Dict[str, Any]) -> bytes:
        return json.dumps(payload, separators=COMPACT_SEPARATORS, ensure_ascii=False).encode(
            "utf-8"
        )

    def encode_indented(self, payload: Dict[str, Any], indent: int = 2) -> bytes:
        """Human-formatted rendering; measured for size, never written or decoded."""
        return json.dumps(payload, indent=indent, ensure_ascii=False).encode("utf-8")

    def decode(self, data: bytes) -> Dict[str, Any]:
        return json.loads(data.decode("utf-8"))


__all__ = ["JsonCodec"]
