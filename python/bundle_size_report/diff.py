from __future__ import annotations

from .formatting import format_bytes, format_percent
from .model import (
    CRITICAL,
    DECREASE,
    INCREASE,
    NEW,
    NO_CHANGE,
    REMOVED,
    WARNING,
    DiffResult,
)


def classify_change(
    current: int,
    baseline: int | None,
    minimum_change_threshold: int = 0,
    budget_percent_increase_red: float = 0,
) -> DiffResult:
    if baseline is None:
        return DiffResult(NEW)

    delta = current - baseline
    if abs(delta) <= minimum_change_threshold:
        return DiffResult(NO_CHANGE, delta=delta)

    percent = abs(delta) / baseline * 100 if baseline > 0 else None
    if delta < 0:
        return DiffResult(DECREASE, delta=delta, percent=percent)

    # A percentage equal to the red budget stays a warning.
    critical = percent is not None and percent > budget_percent_increase_red
    return DiffResult(
        INCREASE,
        delta=delta,
        percent=percent,
        severity=CRITICAL if critical else WARNING,
    )


def render_diff(result: DiffResult) -> str:
    if result.kind == NEW:
        return "🆕 New"
    if result.kind == REMOVED:
        return "🗑️ Removed"
    if result.kind == NO_CHANGE:
        return "➖ No change"

    amount = format_bytes(abs(result.delta))
    if result.kind == DECREASE:
        text = f"🟢 `-{amount}`"
        sign = "-"
    else:
        marker = "🔴" if result.severity == CRITICAL else "🟡"
        text = f"{marker} `+{amount}`"
        sign = "+"
    if result.percent is not None:
        text += f" ({sign}{format_percent(result.percent)})"
    return text


def format_diff(
    current: int,
    baseline: int | None,
    minimum_change_threshold: int = 0,
    budget_percent_increase_red: float = 0,
) -> str:
    return render_diff(
        classify_change(
            current,
            baseline,
            minimum_change_threshold=minimum_change_threshold,
            budget_percent_increase_red=budget_percent_increase_red,
        )
    )
