from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from serialbench.utils.logging import get_logger

log = get_logger(__name__)

# (ratio key, smaller codec, larger codec, label)
RATIO_PAIRS = [
    ("protobuf_vs_json", "protobuf", "json", "Protobuf vs JSON"),
    ("protobuf_vs_xml", "protobuf", "xml", "Protobuf vs XML"),
    ("json_vs_xml", "json", "xml", "JSON vs XML"),
]


def percent_smaller(size_a: int, size_b: int) -> float:
    """
    How much smaller `size_a` is than `size_b`, in percent, one decimal.

    Negative when `size_a` is larger. An empty `size_b` has no meaningful
    ratio: 0.0 is returned and a warning is logged so the empty artifact
    does not go unnoticed.
    """
    if size_b == 0:
        log.warning(
            "[RATIO SKIPPED] reference artifact is empty",
            extra={"size_a": size_a, "size_b": size_b},
        )
        return 0.0
    return round((1 - size_a / size_b) * 100, 1)


def compute_ratios(sizes: Mapping[str, int]) -> Dict[str, float]:
    """Pairwise percentage-smaller ratios for the three artifacts."""
    return {key: percent_smaller(sizes[a], sizes[b]) for key, a, b, _ in RATIO_PAIRS}


def _format_duration(seconds: float) -> str:
    return f"{seconds * 1000:.3f}"


def _format_rss(m: Mapping[str, Any]) -> str:
    rss_aggregate = m.get("rss_aggregate")
    rss = rss_aggregate["median"] if rss_aggregate else m.get("rss_bytes")
    if rss is None:
        return "N/A"
    return f"{rss / (1024 * 1024):.2f}"


def _timing_table(measurements: List[Dict[str, Any]]) -> Table:
    aggregated = any("aggregate" in m for m in measurements)
    traced = any(m.get("peak_traced_bytes") is not None for m in measurements)

    table = Table(title="Encode / Decode Timings", box=box.ROUNDED)
    table.add_column("Codec", style="cyan", no_wrap=True)
    table.add_column("Operation", style="blue")
    if aggregated:
        table.add_column("Duration (ms)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green")
        table.add_column("Runs", justify="right", style="blue")
        table.add_column("RSS (MB)\n[dim](Median)[/dim]", justify="right", style="yellow")
    else:
        table.add_column("Duration (ms)", justify="right", style="green")
        table.add_column("RSS (MB)", justify="right", style="yellow")
    table.add_column("Size (bytes)", justify="right", style="magenta")
    if traced:
        table.add_column("Peak Alloc (KB)", justify="right", style="yellow")

    for m in measurements:
        row = [m["codec"], m["operation"]]
        if aggregated:
            aggregate = m.get("aggregate")
            if aggregate:
                row.append(
                    f"{_format_duration(aggregate['median'])} ± "
                    f"{_format_duration(aggregate['stddev'])}"
                )
            else:
                row.append(_format_duration(m["duration_seconds"]))
            row.append(str(m.get("runs", 1)))
        else:
            row.append(_format_duration(m["duration_seconds"]))
        row.append(_format_rss(m))
        size = m.get("size_bytes")
        row.append(f"{size:,}" if size is not None else "-")
        if traced:
            peak = m.get("peak_traced_bytes")
            row.append(f"{peak / 1024:.1f}" if peak is not None else "N/A")
        table.add_row(*row)
    return table


def _size_table(report: Mapping[str, Any]) -> Table:
    table = Table(title="File Sizes", box=box.ROUNDED)
    table.add_column("File", style="cyan", no_wrap=True)
    table.add_column("Size (bytes)", justify="right", style="magenta")
    for name, size in report["sizes"].items():
        path = report["artifacts"].get(name, name)
        table.add_row(path, f"{size:,}")
    return table


def _ratio_table(ratios: Mapping[str, float]) -> Table:
    table = Table(title="Size Ratios", box=box.ROUNDED)
    table.add_column("Comparison", style="cyan", no_wrap=True)
    table.add_column("Smaller by", justify="right", style="bold green")
    for key, _, _, label in RATIO_PAIRS:
        table.add_row(label, f"{ratios[key]:.1f}%")
    return table


def format_symmetry(result: Mapping[str, Any]) -> str:
    """One verdict line, e.g. `json encode/decode: ✓ symmetric`."""
    if result.get("mode") == "container":
        verdict = "✓ decoded" if result["passed"] else "✗ error"
    else:
        verdict = "✓ symmetric" if result["passed"] else "✗ asymmetric"
    line = f"{result['codec']} encode/decode: {verdict}"
    if result.get("detail"):
        line += f" ({result['detail']})"
    return line


def print_report(report: Mapping[str, Any], console: Optional[Console] = None) -> None:
    """
    Render a benchmark report as rich tables.

    Shows timings, persisted file sizes, the indented-vs-compact JSON overhead,
    the three pairwise ratios, and one symmetry verdict per codec.
    """
    console = console or Console()

    if not report.get("measurements"):
        console.print("[yellow]No results to display.[/yellow]")
        return

    console.print(_timing_table(report["measurements"]))
    console.print(_size_table(report))

    compact = report["compact_json_size"]
    indented = report["indented_json_size"]
    console.print(
        f"Indented JSON (in memory): {indented:,} bytes (+{indented - compact:,} vs compact)"
    )

    ratios = report.get("ratios") or compute_ratios(report["sizes"])
    console.print(_ratio_table(ratios))

    console.rule("Symmetry")
    for result in report["symmetry"]:
        style = "green" if result["passed"] else "red"
        console.print(f"[{style}]{format_symmetry(result)}[/{style}]")


__all__ = ["compute_ratios", "format_symmetry", "percent_smaller", "print_report"]
