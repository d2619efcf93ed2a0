"""
Configuration for gmaps-redirect.
There are three levels of configuration in order of priority
1. cli options
2. yaml config file
3. environment variables
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Host-level configuration with support for:
    - Environment variables (``GMAPS_REDIRECT_`` prefix)
    - YAML configuration file
    - CLI argument overrides

    Precedence: CLI args > YAML config > Environment variables > Defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="GMAPS_REDIRECT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ===== Resolution =====
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds before a single map request is abandoned",
    )
    max_redirects: int = Field(
        default=10,
        ge=0,
        le=100,
        description="Number of 302 hops followed before resolution fails",
    )

    # ===== Logging =====
    log_to_console: bool = Field(
        default=True,
        description="Emit selected logs to the console",
    )
    log_to_file: bool = Field(
        default=False,
        description="Persist logs to a file",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Log file path used when log_to_file is enabled",
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output",
    )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> Settings:
        """
        Load settings from a YAML file.

        The YAML file values will override defaults but can still be
        overridden by environment variables.

        Parameters
        ----------
        yaml_path : Path
            Path to YAML configuration file

        Returns
        -------
        Settings
            Configured settings instance
        """
        if not yaml_path.exists():
            raise FileNotFoundError(f"Settings file not found: {yaml_path}")

        with yaml_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        if not isinstance(data, dict):
            raise ValueError("Settings YAML must contain a mapping at the root")

        return cls(**data)

    def merge_overrides(self, overrides: Dict[str, Any]) -> Settings:
        """
        Create a new Settings instance with specific values overridden.

        The merged values are validated again, so an override cannot
        bypass the field bounds.

        Parameters
        ----------
        overrides : dict
            Dictionary of values to override (typically from CLI args)

        Returns
        -------
        Settings
            New settings instance with overrides applied
        """
        overrides = overrides or {}
        if not overrides:
            return self

        return type(self).model_validate({**self.model_dump(), **overrides})

    def ensure_directories(self) -> None:
        """Create the log file directory when file logging is enabled."""
        if self.log_to_file and self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


def load_settings(
    yaml_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """
    Load settings with proper precedence handling.

    Precedence order (highest to lowest):
    1. Overrides (typically from CLI args)
    2. YAML config file
    3. Environment variables
    4. Defaults

    Parameters
    ----------
    yaml_path : Path, optional
        Path to YAML configuration file
    overrides : dict, optional
        Dictionary of override values (typically from CLI)

    Returns
    -------
    Settings
        Configured settings instance
    """
    overrides = overrides or {}

    settings = Settings()

    if yaml_path is not None:
        yaml_settings = Settings.from_yaml(yaml_path)
        settings = settings.merge_overrides(
            yaml_settings.model_dump(exclude_unset=True)
        )

    if overrides:
        settings = settings.merge_overrides(overrides)

    settings.ensure_directories()
    return settings


__all__ = ["Settings", "load_settings"]
