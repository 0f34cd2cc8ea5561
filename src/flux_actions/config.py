from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env_files() -> tuple[str, str]:
    """
    Local .env first, then the repo-root .env (useful when running from subdirectories).
    """
    repo_root_env = str(Path(__file__).resolve().parents[2] / ".env")
    return (".env", repo_root_env)


class FluxSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    name: str = Field(default="flux-actions", alias="FLUX_ACTIONS_NAME")
    log_level: str = Field(default="INFO", alias="FLUX_ACTIONS_LOG_LEVEL")
    # Value the `demo` command triggers the sample action with.
    demo_value: int = Field(default=42, alias="FLUX_ACTIONS_DEMO_VALUE")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> str:
        s = str(v or "INFO").strip().strip("'\"").upper()
        if s not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log level must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL")
        return s
