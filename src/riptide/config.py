from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Generation
    base_dir: Path = Field(default_factory=Path.cwd, alias="RIPTIDE_BASE_DIR")
    pages_path: str = Field(default="Routes", alias="RIPTIDE_PAGES_PATH")
    pages_package: str = Field(default="pages", alias="RIPTIDE_PAGES_PACKAGE")
    types_file_name: str = Field(default="types", alias="RIPTIDE_TYPES_FILE")
    routes_file_name: str = Field(default="utils.d.ts", alias="RIPTIDE_ROUTES_FILE")
    component_extension: str = Field(default=".svelte", alias="RIPTIDE_COMPONENT_EXTENSION")

    # Build output (Vite manifests)
    client_location: str = Field(default="wwwroot/client", alias="RIPTIDE_CLIENT_LOCATION")
    server_location: str = Field(default="wwwroot/server", alias="RIPTIDE_SERVER_LOCATION")

    @property
    def pages_root(self) -> Path:
        return self.base_dir / self.pages_path

    @property
    def types_path(self) -> Path:
        return self.pages_root / f"{self.types_file_name}.ts"

    @property
    def routes_path(self) -> Path:
        return self.pages_root / self.routes_file_name
