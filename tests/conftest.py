import json
from pathlib import Path

import pytest

from riptide.config import Settings


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(base_dir=tmp_path)


@pytest.fixture()
def client_manifest(tmp_path: Path) -> Path:
    manifest_dir = tmp_path / "wwwroot" / "client"
    manifest_dir.mkdir(parents=True)
    manifest_path = manifest_dir / "manifest.json"
    manifest_path.write_text(
        json.dumps(
            {
                "src/Routes/Index.ts": {
                    "file": "assets/index-4f2a.js",
                    "src": "src/Routes/Index.ts",
                    "isEntry": True,
                    "imports": ["_shared-91c0.js"],
                    "css": ["assets/index-77aa.css"],
                },
                "_shared-91c0.js": {"file": "assets/shared-91c0.js"},
            }
        ),
        encoding="utf-8",
    )
    return manifest_path
