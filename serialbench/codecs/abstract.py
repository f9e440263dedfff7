"""
Abstract codec interfaces and result contracts for serialbench.

Concrete codecs (JSON, XML, Protocol Buffers) implement the Codec protocol and
return bytes from `encode` so the harness can measure every artifact the same
way. Measurement and symmetry results are TypedDicts to keep downstream
reporting and JSON persistence simple.
"""

from __future__ import annotations

import abc
from typing import Any, Dict, List, Optional, Protocol, TypedDict, runtime_checkable

from serialbench.infrastructure.schema import ValidationResult


class Measurement(TypedDict, total=False):
    """
    One timed codec operation.

    `size_bytes` is only set for encodes. `rss_bytes` is the highest resident
    memory seen after the operation. `aggregate` and `rss_aggregate` hold
    median/mean/stddev statistics when the operation was measured more than once.
    """

    codec: str
    operation: str
    duration_seconds: float
    size_bytes: Optional[int]
    runs: int
    aggregate: Dict[str, float]
    rss_bytes: Optional[int]
    rss_aggregate: Dict[str, int]
    peak_traced_bytes: Optional[int]


class SymmetryResult(TypedDict, total=False):
    """Round-trip verdict for one codec."""

    codec: str
    passed: bool
    mode: str
    checked_fields: List[str]
    detail: Optional[str]


@runtime_checkable
class Codec(Protocol):
    """
    Common interface all codecs must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the format.
    filename : str
        Artifact file name written by the harness.
    """

    name: str
    description: str
    filename: str

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        """Check the payload before encoding; never raises."""
        ...

    def encode(self, payload: Dict[str, Any]) -> bytes:
        """Serialize the root object to bytes."""
        ...

    def decode(self, data: bytes) -> Dict[str, Any]:
        """Deserialize bytes produced by `encode`."""
        ...


class AbstractCodec(abc.ABC):
    """
    ABC helper for class-based codecs.

    Subclasses set `name`, `description` and `filename` and implement
    `encode`/`decode`. Validation defaults to accepting everything.
    """

    name: str
    description: str
    filename: str

    def validate(self, payload: Dict[str, Any]) -> ValidationResult:
        return ValidationResult.success()

    @abc.abstractmethod
    def encode(self, payload: Dict[str, Any]) -> bytes:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def decode(self, data: bytes) -> Dict[str, Any]:  # pragma: no cover - interface only
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = [
    "AbstractCodec",
    "Codec",
    "Measurement",
    "SymmetryResult",
]
