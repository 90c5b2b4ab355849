"""Configuration management with Pydantic and YAML support."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_CONFIG_DIR = Path.home() / ".config/get-everything-done"


class SessionConfig(BaseModel):
    """Focus session length configuration."""

    base_minutes: int = Field(default=10, ge=1, description="Length of a task's first session")
    increment_minutes: int = Field(default=10, ge=0, description="Added per completed session")
    dev_mode: bool = Field(default=False, description="Treat the lengths above as seconds")
    tick_seconds: float = Field(default=1.0, gt=0, le=60, description="Clock cadence")

    @property
    def unit_seconds(self) -> int:
        """Seconds per configured unit (minutes normally, seconds in dev mode)."""
        return 1 if self.dev_mode else 60

    @property
    def base_seconds(self) -> int:
        return self.base_minutes * self.unit_seconds

    @property
    def increment_seconds(self) -> int:
        return self.increment_minutes * self.unit_seconds


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GET_EVERYTHING_DONE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Paths
    config_dir: Path = Field(default_factory=lambda: DEFAULT_CONFIG_DIR)
    log_dir: Path = Field(
        default_factory=lambda: Path.home() / ".local/state/get-everything-done"
    )

    # Log level
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    # Sub-configurations
    session: SessionConfig = Field(default_factory=SessionConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment wins over values passed in from the YAML file
        return env_settings, init_settings, file_secret_settings

    @property
    def config_file(self) -> Path:
        """Path to YAML config file."""
        return self.config_dir / "config.yaml"

    @property
    def log_file(self) -> Path:
        """Path to the session log file."""
        return self.log_dir / "get-everything-done.log"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from YAML file, environment variables, and defaults.

        Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        """
        # Defaults plus environment decide where the file lives
        config_path = config_path or cls().config_file

        yaml_config: dict[str, Any] = {}
        if config_path.exists():
            with open(config_path) as f:
                yaml_config = yaml.safe_load(f) or {}

        return cls(**yaml_config)

    def save(self, config_path: Path | None = None) -> None:
        """Save current configuration to YAML file."""
        config_path = config_path or self.config_file
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude_none=True)

        # Convert Path objects to strings for YAML
        for key in ["config_dir", "log_dir"]:
            if key in data:
                data[key] = str(data[key])

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


@lru_cache
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.load()
