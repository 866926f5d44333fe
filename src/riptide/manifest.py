"""Vite build manifests, loaded once per render mode."""
from __future__ import annotations

import enum
import logging
import threading
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter

from riptide.config import Settings


logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "manifest.json"


class RenderMode(enum.Enum):
    SSR = "ssr"
    CSR = "csr"


class ViteRoute(BaseModel):
    """One entry of a Vite `manifest.json`."""
    model_config = ConfigDict(extra="ignore")

    file: Optional[str] = None
    src: Optional[str] = None
    imports: Optional[list[str]] = None
    css: Optional[list[str]] = None


ViteManifest = dict[str, ViteRoute]

_MANIFEST_ADAPTER: TypeAdapter[ViteManifest] = TypeAdapter(ViteManifest)


def load_manifest(manifest_path: Path) -> ViteManifest:
    """Parse a Vite manifest file."""
    return _MANIFEST_ADAPTER.validate_json(manifest_path.read_bytes())


class ManifestCache:
    """Manifests keyed by render mode; each is read at most once and never invalidated.

    Safe to share between threads: population of a mode happens under a lock,
    so concurrent first requests read the file once.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._manifests: dict[RenderMode, ViteManifest] = {}
        self._lock = threading.Lock()

    def manifest_path(self, mode: RenderMode) -> Path:
        location = self._settings.server_location if mode is RenderMode.SSR else self._settings.client_location
        return self._settings.base_dir / location / MANIFEST_FILE_NAME

    def manifest(self, mode: RenderMode) -> ViteManifest:
        """Return the manifest for a render mode, reading it on first use."""
        with self._lock:
            manifest = self._manifests.get(mode)
            if manifest is None:
                manifest_path = self.manifest_path(mode)
                manifest = load_manifest(manifest_path)
                self._manifests[mode] = manifest
                logger.info("Loaded %s manifest with %d entries from %s", mode.value, len(manifest), manifest_path)
            return manifest

    def route(self, route: Optional[str], mode: RenderMode) -> Optional[ViteRoute]:
        """Look up a manifest entry, ignoring case and a leading '/'."""
        if route is None:
            return None
        wanted_key = route.lstrip("/").lower()
        for entry_key, entry in self.manifest(mode).items():
            if entry_key.lower() == wanted_key:
                return entry
        return None
