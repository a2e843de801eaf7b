from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path
from typing import Any

from .model import RouteSize, RouteSizes
from .stats import GzipSizeFn, process_stats

logger = logging.getLogger(__name__)


def load_stats(path: Path | str) -> dict[str, Any] | None:
    source = Path(path)
    if not source.exists():
        logger.warning("stats file not found: %s", source)
        return None
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source}: invalid JSON ({exc.msg})") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{source}: stats manifest must be an object")
    return payload


def gzip_sizer(build_dir: Path | str = ".next") -> GzipSizeFn:
    root = Path(build_dir)

    def get_gzip_size(asset_name: str) -> int:
        file_path = Path(asset_name)
        if not file_path.exists() and not asset_name.startswith(root.name):
            file_path = root / asset_name
        if not file_path.exists():
            logger.warning("could not find file on disk for gzip: %s", file_path)
            return 0
        size = len(gzip.compress(file_path.read_bytes()))
        logger.debug("gzip %s: %d bytes", file_path, size)
        return size

    return get_gzip_size


def parse_stats_file(
    path: Path | str,
    calculate_gzip: bool,
    build_dir: Path | str = ".next",
) -> RouteSizes:
    stats = load_stats(path)
    if stats is None:
        return {}
    return process_stats(stats, gzip_sizer(build_dir) if calculate_gzip else None)


def _size_field(path: Path, route: str, entry: dict[str, Any], key: str) -> int:
    value = entry.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{path}: route '{route}' has invalid {key} size {value!r}")
    return value


def load_routes(path: Path | str) -> RouteSizes:
    source = Path(path)
    if not source.exists():
        return {}
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{source}: invalid JSON ({exc.msg})") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{source}: route snapshot must be an object")

    routes: RouteSizes = {}
    for route, entry in payload.items():
        if not isinstance(entry, dict):
            raise ValueError(f"{source}: route '{route}' must be an object")
        routes[route] = RouteSize(
            raw=_size_field(source, route, entry, "raw"),
            gzip=_size_field(source, route, entry, "gzip"),
        )
    return routes


def dump_routes(routes: RouteSizes, path: Path | str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {route: {"raw": size.raw, "gzip": size.gzip} for route, size in routes.items()}
    target.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
