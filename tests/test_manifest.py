from __future__ import annotations

import threading
from pathlib import Path

import pytest

from riptide import manifest as manifest_module
from riptide.config import Settings
from riptide.manifest import ManifestCache, RenderMode


def test_route_lookup_ignores_case_and_leading_slash(settings: Settings, client_manifest: Path) -> None:
    manifest_cache = ManifestCache(settings)

    vite_route = manifest_cache.route("/SRC/routes/index.ts", RenderMode.CSR)

    assert vite_route is not None
    assert vite_route.file == "assets/index-4f2a.js"
    assert vite_route.imports == ["_shared-91c0.js"]
    assert vite_route.css == ["assets/index-77aa.css"]


def test_missing_routes_return_none(settings: Settings, client_manifest: Path) -> None:
    manifest_cache = ManifestCache(settings)

    assert manifest_cache.route("/nope.ts", RenderMode.CSR) is None
    assert manifest_cache.route(None, RenderMode.CSR) is None


def test_server_manifest_is_read_from_the_server_location(settings: Settings, client_manifest: Path) -> None:
    manifest_cache = ManifestCache(settings)

    assert manifest_cache.manifest_path(RenderMode.SSR) == settings.base_dir / "wwwroot" / "server" / "manifest.json"
    with pytest.raises(FileNotFoundError):
        manifest_cache.manifest(RenderMode.SSR)


def test_manifest_is_loaded_once_under_concurrent_access(
    settings: Settings,
    client_manifest: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    load_calls: list[Path] = []
    original_load_manifest = manifest_module.load_manifest

    def counting_load_manifest(manifest_path: Path):
        load_calls.append(manifest_path)
        return original_load_manifest(manifest_path)

    monkeypatch.setattr(manifest_module, "load_manifest", counting_load_manifest)

    manifest_cache = ManifestCache(settings)
    barrier = threading.Barrier(8)
    found_files: list[str] = []

    def look_up() -> None:
        barrier.wait()
        vite_route = manifest_cache.route("src/Routes/Index.ts", RenderMode.CSR)
        found_files.append(vite_route.file)

    threads = [threading.Thread(target=look_up) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert load_calls == [client_manifest]
    assert found_files == ["assets/index-4f2a.js"] * 8
