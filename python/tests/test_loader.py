from __future__ import annotations

import gzip
import json
import logging
from pathlib import Path

import pytest

from bundle_size_report.loader import dump_routes, gzip_sizer, load_routes, parse_stats_file
from bundle_size_report.model import RouteSize


def _write_build(root: Path) -> Path:
    chunks = root / ".next" / "static" / "chunks"
    chunks.mkdir(parents=True)
    (chunks / "about.js").write_bytes(b"console.log('about');" * 50)
    stats = {
        "assets": [
            {"name": "static/chunks/about.js", "size": 1050},
            {"name": "static/chunks/ghost.js", "size": 10},
        ],
        "namedChunkGroups": {
            "app/about/page": {"assets": ["static/chunks/about.js"]},
            "app/ghost/page": {"assets": ["static/chunks/ghost.js"]},
        },
    }
    path = root / "webpack-stats.json"
    path.write_text(json.dumps(stats), encoding="utf-8")
    return path


def test_parse_stats_file_missing_returns_empty(tmp_path: Path) -> None:
    assert parse_stats_file(tmp_path / "nope.json", calculate_gzip=True) == {}


def test_parse_stats_file_without_gzip(tmp_path: Path) -> None:
    path = _write_build(tmp_path)
    routes = parse_stats_file(path, calculate_gzip=False)
    assert routes == {
        "/about": RouteSize(raw=1050, gzip=0),
        "/ghost": RouteSize(raw=10, gzip=0),
    }


def test_parse_stats_file_compresses_assets_from_build_dir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.chdir(tmp_path)
    path = _write_build(tmp_path)
    expected = len(gzip.compress((tmp_path / ".next/static/chunks/about.js").read_bytes()))

    with caplog.at_level(logging.WARNING):
        routes = parse_stats_file(path, calculate_gzip=True, build_dir=tmp_path / ".next")

    assert routes["/about"].gzip == expected
    assert routes["/ghost"].gzip == 0
    assert "ghost.js" in caplog.text


def test_gzip_sizer_accepts_paths_relative_to_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "bundle.js").write_bytes(b"x" * 4096)
    get_gzip_size = gzip_sizer(".next")
    assert get_gzip_size("bundle.js") == len(gzip.compress(b"x" * 4096))


def test_parse_stats_file_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="invalid JSON"):
        parse_stats_file(path, calculate_gzip=False)


def test_parse_stats_file_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ValueError, match="must be an object"):
        parse_stats_file(path, calculate_gzip=False)


def test_routes_snapshot_preserves_order(tmp_path: Path) -> None:
    routes = {
        "/zeta": RouteSize(raw=300, gzip=100),
        "/": RouteSize(raw=900, gzip=400),
    }
    path = tmp_path / "nested" / "routes.json"
    dump_routes(routes, path)

    loaded = load_routes(path)
    assert loaded == routes
    assert list(loaded) == ["/zeta", "/"]
    assert path.read_text(encoding="utf-8").endswith("\n")


def test_load_routes_missing_file_is_empty(tmp_path: Path) -> None:
    assert load_routes(tmp_path / "missing.json") == {}


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"/a": 12},
        {"/a": {"raw": 1}},
        {"/a": {"raw": -1, "gzip": 0}},
        {"/a": {"raw": 1, "gzip": "2"}},
    ],
)
def test_load_routes_rejects_malformed_snapshot(tmp_path: Path, payload: object) -> None:
    path = tmp_path / "routes.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError, match="routes.json"):
        load_routes(path)


def test_load_routes_names_file_on_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "baseline-routes.json"
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(ValueError, match="baseline-routes.json: invalid JSON"):
        load_routes(path)
