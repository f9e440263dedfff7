"""
serialbench - Serialization benchmark for JSON, XML and Protocol Buffers.

This package builds a small employee dataset and compares three encodings of
it:

- Compact JSON text
- Element-per-field XML wrapped in a root container
- Schema-defined Protocol Buffers binary

For each format it times encode and decode, writes the artifact to disk,
compares artifact sizes, and checks that decoding reproduces the original to
the fidelity the format supports.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from serialbench.codecs import (
    AbstractCodec,
    Codec,
    JsonCodec,
    Measurement,
    ProtobufCodec,
    SymmetryResult,
    XmlCodec,
    available_codecs,
    resolve_codec,
)
from serialbench.config import Settings, get_settings
from serialbench.domain import Employee, EmployeeCollection, build_sample_dataset
from serialbench.infrastructure.schema import (
    SchemaDescriptor,
    SchemaViolation,
    ValidationResult,
    load_schema,
)
from serialbench.orchestrator import RunReport, run_benchmark
from serialbench.reporter import compute_ratios, percent_smaller, print_report
from serialbench.utils.logging import configure_logging, get_logger
from serialbench.utils.profiler import ProfileStats, profile_block
from serialbench.verifier import verify_symmetry

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Employee",
    "EmployeeCollection",
    "build_sample_dataset",
    # Schema
    "SchemaDescriptor",
    "SchemaViolation",
    "ValidationResult",
    "load_schema",
    # Codecs
    "AbstractCodec",
    "Codec",
    "JsonCodec",
    "XmlCodec",
    "ProtobufCodec",
    "Measurement",
    "SymmetryResult",
    "available_codecs",
    "resolve_codec",
    # Orchestration
    "RunReport",
    "run_benchmark",
    "verify_symmetry",
    # Reporting
    "compute_ratios",
    "percent_smaller",
    "print_report",
    # Logging
    "configure_logging",
    "get_logger",
    # Profiling
    "ProfileStats",
    "profile_block",
]
