"""Configuration models using Pydantic for validation."""

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

_VERSION_RE = re.compile(r"^(\d{1,5})\.(\d{1,5})$")


def parse_version(value: str) -> tuple[int, int]:
    """Split a ``"major.minor"`` string into its two integer fields."""
    match = _VERSION_RE.match(value.strip())
    if match is None:
        raise ValueError(f"Invalid version '{value}', expected 'major.minor'")
    major, minor = int(match.group(1)), int(match.group(2))
    if major > 0xFFFF or minor > 0xFFFF:
        raise ValueError(f"Version '{value}' does not fit into 16-bit header fields")
    return major, minor


class PatcherSettings(BaseModel):
    """Settings for the PE link fixer."""

    model_config = ConfigDict(extra="forbid")

    target_os_version: str = Field(
        default="5.1",
        description="Highest operating system version recorded in the optional header",
    )
    target_subsystem_version: str = Field(
        default="5.1",
        description="Highest subsystem version recorded in the optional header",
    )
    update_checksum: bool = Field(
        default=True, description="Recompute the optional header checksum after patching"
    )
    create_backup: bool = Field(
        default=False, description="Keep a copy of each file before it is rewritten"
    )
    backup_suffix: str = Field(default=".bak", min_length=1, description="Suffix for backups")

    @field_validator("target_os_version", "target_subsystem_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Ensure versions look like 'major.minor'."""
        parse_version(v)
        return v.strip()

    @property
    def os_version(self) -> tuple[int, int]:
        return parse_version(self.target_os_version)

    @property
    def subsystem_version(self) -> tuple[int, int]:
        return parse_version(self.target_subsystem_version)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        default="WARNING", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_dir: Path = Field(default=Path("logs"), description="Directory for log files")
    max_bytes: int = Field(
        default=5 * 1024 * 1024, ge=1024, description="Max log file size before rotation (bytes)"
    )
    backup_count: int = Field(default=3, ge=1, description="Number of rotated log files to keep")
    console_enabled: bool = Field(default=True, description="Enable console logging")
    file_enabled: bool = Field(default=False, description="Enable file logging")

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper


class WinPEFixConfig(BaseModel):
    """Main configuration for WinPEFix."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    patcher: PatcherSettings = Field(
        default_factory=PatcherSettings, description="PE link fixer settings"
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )
