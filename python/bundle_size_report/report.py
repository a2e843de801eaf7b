from __future__ import annotations

from .diff import classify_change, render_diff
from .formatting import format_bytes
from .model import CRITICAL, REMOVED, DiffResult, ReportRow, RouteSizes, Thresholds

REPORT_HEADER = "### 📦 Next.js App Router Sizes (Turbopack)"
REPORT_ATTRIBUTION = (
    "<sub>Gzipped JavaScript per route, measured from the Turbopack stats "
    "manifest and compared against the latest `main` build.</sub>"
)
NO_ROUTES_WARNING = (
    "> ⚠️ **Warning:** No routes identified. "
    "Ensure `TURBOPACK_STATS=1` is set during build."
)
NO_CHANGES_MESSAGE = "✅ No bundle size changes introduced by this PR."
TABLE_HEADER = "| Route | Size (gzipped) | Diff (vs main) |\n|---|---|---|"


def build_rows(
    current_routes: RouteSizes,
    baseline_routes: RouteSizes,
    thresholds: Thresholds | None = None,
) -> list[ReportRow]:
    limits = thresholds or Thresholds()
    rows: list[ReportRow] = []

    for route, size in current_routes.items():
        baseline = baseline_routes.get(route)
        diff = classify_change(
            size.gzip,
            baseline.gzip if baseline is not None else None,
            minimum_change_threshold=limits.minimum_change_threshold,
            budget_percent_increase_red=limits.budget_percent_increase_red,
        )
        rows.append(ReportRow(route, size, baseline, diff))

    for route, baseline in baseline_routes.items():
        if route in current_routes:
            continue
        rows.append(ReportRow(route, None, baseline, DiffResult(REMOVED)))

    return rows


def _render_row(row: ReportRow) -> str:
    size = "—" if row.current is None else f"`{format_bytes(row.current.gzip)}`"
    return f"| `{row.route}` | {size} | {render_diff(row.diff)} |"


def render_rows(rows: list[ReportRow]) -> str:
    lines = [REPORT_HEADER, REPORT_ATTRIBUTION, ""]
    changed = [row for row in rows if row.diff.changed]

    if not rows:
        lines.append(NO_ROUTES_WARNING)
    elif changed:
        lines.append(TABLE_HEADER)
        lines.extend(_render_row(row) for row in changed)
    else:
        lines.append(NO_CHANGES_MESSAGE)
    return "\n".join(lines) + "\n"


def generate_report(
    current_routes: RouteSizes,
    baseline_routes: RouteSizes,
    minimum_change_threshold: int = 0,
    budget_percent_increase_red: float = 0,
) -> str:
    rows = build_rows(
        current_routes,
        baseline_routes,
        Thresholds(
            minimum_change_threshold=minimum_change_threshold,
            budget_percent_increase_red=budget_percent_increase_red,
        ),
    )
    return render_rows(rows)


def summarize(rows: list[ReportRow]) -> dict[str, int]:
    return {
        "routes": len(rows),
        "changed": sum(1 for row in rows if row.diff.changed),
        "critical": sum(1 for row in rows if row.diff.severity == CRITICAL),
    }


def budget_violation(rows: list[ReportRow], fail_on_critical: bool) -> tuple[bool, str]:
    if not fail_on_critical:
        return False, ""
    offenders = [row.route for row in rows if row.diff.severity == CRITICAL]
    if offenders:
        return (
            True,
            f"routes over the size budget: {', '.join(offenders)}",
        )
    return False, ""
