"""azlogic configuration — loads from environment and local .env file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


def _find_repo_root() -> Path:
    """Walk up from this file to find the repo root (where pyproject.toml lives)."""
    p = Path(__file__).resolve().parent
    while p != p.parent:
        if (p / "pyproject.toml").exists():
            return p
        p = p.parent
    return Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Application settings — populated from env vars or .env file."""

    # App
    app_name: str = "azlogic"
    app_version: str = "0.1.0"
    environment: str = "development"
    debug: bool = False

    # Azure — leave tenant/client/secret empty to fall back to DefaultAzureCredential
    subscription_id: str = ""
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    # Paths
    repo_root: Path = _find_repo_root()

    model_config = {"env_prefix": "AZLOGIC_", "env_file": ".env"}

    @property
    def local_dir(self) -> Path:
        return self.repo_root / "local"

    @property
    def effective_log_dir(self) -> Path:
        if self.log_dir is not None:
            return self.log_dir
        return self.local_dir / "logs"

    @property
    def has_service_principal(self) -> bool:
        return bool(self.tenant_id and self.client_id and self.client_secret)


settings = Settings()
