"""Per-route JavaScript bundle size reporting for pull requests."""

from .diff import classify_change, format_diff
from .formatting import format_bytes
from .model import DiffResult, ReportRow, RouteSize, RouteSizes, Thresholds
from .report import generate_report
from .stats import process_stats

__all__ = [
    "DiffResult",
    "ReportRow",
    "RouteSize",
    "RouteSizes",
    "Thresholds",
    "classify_change",
    "format_bytes",
    "format_diff",
    "generate_report",
    "process_stats",
]
