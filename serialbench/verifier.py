"""
Round-trip (symmetry) checks for each codec.

Each format gets the strictest check its fidelity allows:

- json: full deep equality, field order canonicalized.
- protobuf: `id` and `name` of the first record, since decoding normalizes
  types to the schema (salary comes back as float).
- xml: only that decoding produced the `root` container; values come back as
  strings and one-element lists collapse to scalars.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

from serialbench.codecs.abstract import SymmetryResult
from serialbench.codecs.xml_codec import ROOT_TAG

PROTOBUF_CHECKED_FIELDS = ["id", "name"]


def _canonical(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def verify_json(original: Dict[str, Any], decoded: Dict[str, Any]) -> SymmetryResult:
    passed = _canonical(original) == _canonical(decoded)
    return SymmetryResult(
        codec="json",
        passed=passed,
        mode="full",
        checked_fields=[],
        detail=None if passed else "decoded structure differs from original",
    )


def verify_protobuf(original: Dict[str, Any], decoded: Dict[str, Any]) -> SymmetryResult:
    original_records: List[Dict[str, Any]] = original.get("employee") or []
    decoded_records: List[Dict[str, Any]] = decoded.get("employee") or []
    if not original_records or not decoded_records:
        return SymmetryResult(
            codec="protobuf",
            passed=False,
            mode="fields",
            checked_fields=list(PROTOBUF_CHECKED_FIELDS),
            detail="no employee record to compare",
        )

    first_original, first_decoded = original_records[0], decoded_records[0]
    mismatched = [
        name
        for name in PROTOBUF_CHECKED_FIELDS
        if first_original.get(name) != first_decoded.get(name)
    ]
    return SymmetryResult(
        codec="protobuf",
        passed=not mismatched,
        mode="fields",
        checked_fields=list(PROTOBUF_CHECKED_FIELDS),
        detail=f"mismatched fields: {', '.join(mismatched)}" if mismatched else None,
    )


def verify_xml(original: Dict[str, Any], decoded: Dict[str, Any]) -> SymmetryResult:
    del original
    passed = isinstance(decoded, dict) and ROOT_TAG in decoded
    return SymmetryResult(
        codec="xml",
        passed=passed,
        mode="container",
        checked_fields=[],
        detail=None if passed else f"missing <{ROOT_TAG}> container",
    )


_VERIFIERS: Dict[str, Callable[[Dict[str, Any], Dict[str, Any]], SymmetryResult]] = {
    "json": verify_json,
    "xml": verify_xml,
    "protobuf": verify_protobuf,
}


def verify_symmetry(
    codec_name: str, original: Dict[str, Any], decoded: Dict[str, Any]
) -> SymmetryResult:
    """Dispatch to the symmetry check registered for `codec_name`."""
    if codec_name not in _VERIFIERS:
        raise ValueError(
            f"No symmetry check for codec '{codec_name}'. Available: {', '.join(_VERIFIERS)}"
        )
    return _VERIFIERS[codec_name](original, decoded)


__all__ = ["verify_json", "verify_protobuf", "verify_symmetry", "verify_xml"]
