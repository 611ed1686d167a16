"""Runtime configuration for the install service."""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration values mapped from ``MVNINSTALL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MVNINSTALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "mvninstall"
    version: str = "1.0.0"
    log_level: str = "INFO"

    local_repository_path: str = "~/.m2/repository"
    temp_dir: Optional[str] = None

    # Install step defaults, overridable per module
    skip_install: bool = False
    install_at_end: bool = False
    allow_incomplete_projects: bool = False

    # install-file: None means "generate only when the local repository has no POM"
    generate_pom: Optional[bool] = None

    # packaging -> "extension[:classifier]"
    extra_artifact_types: Dict[str, str] = Field(default_factory=dict)

    # HTTP surface: flushed builds kept for status queries before the oldest are dropped
    retained_finished_builds: int = 100

    # directories /install/file may target through local_repository_path; empty refuses overrides
    repository_override_roots: List[str] = Field(default_factory=list)


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
