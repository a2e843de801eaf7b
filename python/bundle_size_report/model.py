from __future__ import annotations

from dataclasses import dataclass

NEW = "new"
REMOVED = "removed"
NO_CHANGE = "no change"
DECREASE = "decrease"
INCREASE = "increase"

WARNING = "warning"
CRITICAL = "critical"


@dataclass(frozen=True)
class RouteSize:
    raw: int
    gzip: int


RouteSizes = dict[str, RouteSize]


@dataclass(frozen=True)
class DiffResult:
    kind: str
    delta: int = 0
    percent: float | None = None
    severity: str | None = None

    @property
    def changed(self) -> bool:
        return self.kind != NO_CHANGE


@dataclass(frozen=True)
class Thresholds:
    minimum_change_threshold: int = 0
    budget_percent_increase_red: float = 0

    def validate(self) -> None:
        if self.minimum_change_threshold < 0:
            raise ValueError("minimum_change_threshold must be >= 0")
        if self.budget_percent_increase_red < 0:
            raise ValueError("budget_percent_increase_red must be >= 0")


@dataclass(frozen=True)
class ReportRow:
    route: str
    current: RouteSize | None
    baseline: RouteSize | None
    diff: DiffResult
