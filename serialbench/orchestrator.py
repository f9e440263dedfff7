"""
Orchestrator for running every codec over a dataset, profiling each encode and
decode, writing the artifacts, and verifying round trips.

Usage (example from CLI):
    from serialbench.domain import build_sample_dataset
    from serialbench.infrastructure.schema import load_schema
    from serialbench.orchestrator import run_benchmark

    report = run_benchmark(build_sample_dataset().to_payload(), load_schema("Employees"))
    print(report["sizes"])

Artifacts are written to the output directory (overwritten each run):
- `data.json`, `data.xml`, `data.proto`

When persistence is enabled the report is also saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import statistics
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, TypedDict

from serialbench.codecs import Codec, JsonCodec, available_codecs, resolve_codec
from serialbench.codecs.abstract import Measurement, SymmetryResult
from serialbench.infrastructure.schema import SchemaDescriptor, SchemaViolation
from serialbench.reporter import compute_ratios
from serialbench.utils.logging import get_logger
from serialbench.utils.profiler import profile_block
from serialbench.verifier import verify_symmetry

log = get_logger(__name__)


class RunReport(TypedDict):
    """Everything the report emitter needs, and what gets persisted."""

    timestamp: str
    runs: int
    measurements: List[Measurement]
    symmetry: List[SymmetryResult]
    artifacts: Dict[str, str]
    sizes: Dict[str, int]
    compact_json_size: int
    indented_json_size: int
    ratios: Dict[str, float]


def _aggregate_durations(durations: List[float]) -> Dict[str, float]:
    """Median, mean, stddev, min and max of repeated timings."""
    return {
        "median": statistics.median(durations),
        "mean": statistics.mean(durations),
        "stddev": statistics.stdev(durations) if len(durations) > 1 else 0.0,
        "min": min(durations),
        "max": max(durations),
    }


def _aggregate_rss(rss_values: List[int]) -> Dict[str, int]:
    """Median, mean, stddev, min and max of RSS snapshots, in whole bytes."""
    return {
        "median": int(statistics.median(rss_values)),
        "mean": int(statistics.mean(rss_values)),
        "stddev": int(statistics.stdev(rss_values)) if len(rss_values) > 1 else 0,
        "min": min(rss_values),
        "max": max(rss_values),
    }


def _measure(
    codec_name: str,
    operation: str,
    func: Callable[[], Any],
    runs: int,
    trace_allocations: bool,
) -> Tuple[Any, Measurement]:
    """Call `func` `runs` times under the profiler and keep the last result."""
    durations: List[float] = []
    rss_values: List[int] = []
    peak_traced: Optional[int] = None
    result: Any = None
    for _ in range(runs):
        with profile_block(
            f"{codec_name}-{operation}", enable_tracemalloc=trace_allocations
        ) as stats:
            result = func()
        durations.append(stats.duration_seconds)
        if stats.rss_bytes is not None:
            rss_values.append(stats.rss_bytes)
        if stats.peak_traced_bytes is not None:
            peak_traced = max(peak_traced or 0, stats.peak_traced_bytes)

    measurement = Measurement(
        codec=codec_name,
        operation=operation,
        duration_seconds=statistics.median(durations),
        size_bytes=None,
        runs=runs,
        rss_bytes=max(rss_values) if rss_values else None,
    )
    if runs > 1:
        measurement["aggregate"] = _aggregate_durations(durations)
        if rss_values:
            measurement["rss_aggregate"] = _aggregate_rss(rss_values)
    if trace_allocations:
        measurement["peak_traced_bytes"] = peak_traced
    return result, measurement


def _gate(codec: Codec, payload: Dict[str, Any]) -> None:
    """Run the codec's validation once; a failure halts the whole run."""
    result = codec.validate(payload)
    if not result.ok:
        log.error(
            f"[GATE FAILED] {codec.name}",
            extra={"codec": codec.name, "error": result.error},
        )
        raise SchemaViolation(result.error)


def _write_artifacts(
    codecs: List[Codec], encoded: Dict[str, bytes], output_dir: Path
) -> Dict[str, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    paths: Dict[str, Path] = {}
    for codec in codecs:
        path = output_dir / codec.filename
        path.write_bytes(encoded[codec.name])
        paths[codec.name] = path
    log.info("Artifacts written", extra={"files": [str(p) for p in paths.values()]})
    return paths


def _persist_results(payload: RunReport, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    with latest_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    with archive_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def run_benchmark(
    payload: Dict[str, Any],
    schema: SchemaDescriptor,
    output_dir: Path | str = ".",
    runs: int = 1,
    warmup: bool = False,
    trace_allocations: bool = False,
    indent: int = 2,
    persist: bool = False,
    results_dir: Path | str = "results",
) -> RunReport:
    """
    Encode and decode the payload with every codec, then write and verify.

    Parameters
    ----------
    payload : dict
        Root object to serialize, e.g. `{"employee": [...]}`.
    schema : SchemaDescriptor
        Descriptor backing the Protocol Buffers codec.
    output_dir : Path | str
        Directory receiving `data.json`, `data.xml` and `data.proto`.
    runs : int
        Number of timed encodes and decodes per codec; the median is reported.
    warmup : bool
        Whether to run one untimed encode/decode per codec first.
    trace_allocations : bool
        Whether to record peak Python allocations per operation.
    indent : int
        Indentation of the size-only JSON baseline.
    persist : bool
        Whether to save the report as JSON under `results_dir`.
    results_dir : Path | str
        Directory for persisted reports.

    Returns
    -------
    RunReport
        Measurements, artifact sizes, ratios and symmetry verdicts.

    Raises
    ------
    SchemaViolation
        If the payload fails a codec's validation gate. Nothing is written.
    """
    if runs < 1:
        raise ValueError(f"runs must be >= 1, got {runs}")

    codecs = [resolve_codec(name, schema) for name in available_codecs()]
    encoded: Dict[str, bytes] = {}
    decoded: Dict[str, Dict[str, Any]] = {}
    measurements: List[Measurement] = []

    for codec in codecs:
        log.info(f"[CODEC START] {codec.name}", extra={"codec": codec.name, "runs": runs})
        _gate(codec, payload)

        if warmup:
            codec.decode(codec.encode(payload))
            log.debug(f"[WARMUP] Completed warmup for {codec.name}", extra={"codec": codec.name})

        data, encode_measurement = _measure(
            codec.name, "encode", lambda: codec.encode(payload), runs, trace_allocations
        )
        encode_measurement["size_bytes"] = len(data)
        result, decode_measurement = _measure(
            codec.name, "decode", lambda: codec.decode(data), runs, trace_allocations
        )

        encoded[codec.name] = data
        decoded[codec.name] = result
        measurements.extend([encode_measurement, decode_measurement])
        log.info(
            f"[CODEC COMPLETE] {codec.name}",
            extra={
                "codec": codec.name,
                "size_bytes": len(data),
                "encode_seconds": encode_measurement["duration_seconds"],
                "decode_seconds": decode_measurement["duration_seconds"],
            },
        )

    json_codec = next(codec for codec in codecs if isinstance(codec, JsonCodec))
    indented_size = len(json_codec.encode_indented(payload, indent=indent))

    paths = _write_artifacts(codecs, encoded, Path(output_dir))
    sizes = {name: path.stat().st_size for name, path in paths.items()}

    symmetry = [verify_symmetry(codec.name, payload, decoded[codec.name]) for codec in codecs]
    for verdict in symmetry:
        if not verdict["passed"]:
            log.warning(
                f"[SYMMETRY FAILED] {verdict['codec']}",
                extra={"codec": verdict["codec"], "detail": verdict.get("detail")},
            )

    report = RunReport(
        timestamp=datetime.now(timezone.utc).isoformat(),
        runs=runs,
        measurements=measurements,
        symmetry=symmetry,
        artifacts={name: str(path) for name, path in paths.items()},
        sizes=sizes,
        compact_json_size=len(encoded[json_codec.name]),
        indented_json_size=indented_size,
        ratios=compute_ratios(sizes),
    )

    if persist:
        _persist_results(report, Path(results_dir))

    log.info(
        f"[ORCHESTRATOR COMPLETE] {len(codecs)} codecs benchmarked",
        extra={"codecs": [codec.name for codec in codecs]},
    )
    return report


__all__ = [
    "RunReport",
    "run_benchmark",
]
