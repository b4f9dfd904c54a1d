"""Core configuration.

Centralizes environment variables (pydantic-settings) so that the CLI and the
adapters read the same values.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.errors import ConfigError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_API_BASE_URL = "https://api.modrinth.com/v2"
DEFAULT_USER_AGENT = "pydrinth/0.1 (+https://github.com/Tomyatana/Pydrinth)"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "pydrinth"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "pydrinth"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "pydrinth"
    return Path.home() / ".config" / "pydrinth"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Write or update variables in the user's global .env file.

    Keys with a `None` value are left untouched.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# pydrinth user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Application settings.

    Read from `PYDRINTH_*` environment variables, then the project `.env`,
    then the user `.env` (see `get_user_env_file`).
    """

    model_config = SettingsConfigDict(
        env_prefix="PYDRINTH_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Base URL of the Modrinth v2 API.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="Identifying User-Agent sent with every request.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per API request (seconds).",
    )
    download_timeout_seconds: float = Field(
        default=120.0,
        gt=0,
        description="Timeout for file downloads (seconds).",
    )
    minecraft_dir: Path | None = Field(
        default=None,
        description="Preferred Minecraft installation directory; skips platform detection.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value


def load_settings() -> AppSettings:
    """Build `AppSettings`, reporting invalid values as `ConfigError`."""

    try:
        return AppSettings()
    except ValidationError as exc:
        raise ConfigError(f"invalid configuration: {exc}") from exc
