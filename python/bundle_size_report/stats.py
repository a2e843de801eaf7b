from __future__ import annotations

from typing import Any, Callable, Union

from .model import RouteSize, RouteSizes

INTERNAL_CHUNKS = (
    "webpack",
    "main-app",
    "main",
    "polyfills",
    "react-refresh",
    "edge-wrapper",
)

# Chunk groups list assets either by bare name or as {"name": ...} records.
AssetRef = Union[str, dict[str, Any]]
GzipSizeFn = Callable[[str], int]


def asset_name(asset: AssetRef) -> str | None:
    if isinstance(asset, str):
        return asset
    if isinstance(asset, dict):
        name = asset.get("name")
        if isinstance(name, str):
            return name
    return None


def select_entrypoints(stats: dict[str, Any]) -> dict[str, Any]:
    for key in ("namedChunkGroups", "entrypoints"):
        value = stats.get(key)
        if value is not None:
            return value if isinstance(value, dict) else {}
    return {}


def is_internal_chunk(route_name: str) -> bool:
    return any(chunk in route_name for chunk in INTERNAL_CHUNKS)


def normalize_route(route_name: str) -> str:
    route = route_name[len("app") :] if route_name.startswith("app") else route_name
    if route.endswith("/page"):
        route = route[: -len("/page")]
    return route or "/"


def _asset_sizes(stats: dict[str, Any]) -> dict[str, int]:
    sizes: dict[str, int] = {}
    for asset in stats.get("assets") or []:
        if not isinstance(asset, dict):
            continue
        name = asset_name(asset)
        size = asset.get("size")
        if name is None or isinstance(size, bool) or not isinstance(size, int):
            continue
        sizes[name] = size
    return sizes


def process_stats(
    stats: dict[str, Any],
    get_gzip_size: GzipSizeFn | None = None,
) -> RouteSizes:
    asset_sizes = _asset_sizes(stats)
    routes: RouteSizes = {}

    for route_name, chunk_group in select_entrypoints(stats).items():
        if is_internal_chunk(route_name):
            continue

        total_raw = 0
        total_gzip = 0
        assets = chunk_group.get("assets") if isinstance(chunk_group, dict) else None
        for asset in assets or []:
            name = asset_name(asset)
            if name is None or not name.endswith(".js"):
                continue
            total_raw += asset_sizes.get(name, 0)
            if get_gzip_size is not None:
                total_gzip += get_gzip_size(name)

        if total_raw == 0:
            continue
        routes[normalize_route(route_name)] = RouteSize(raw=total_raw, gzip=total_gzip)

    return routes
