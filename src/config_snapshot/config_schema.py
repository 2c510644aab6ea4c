"""Configuration schema for config_snapshot.

Defines Pydantic models for the settings that control where and how
snapshots are written, plus logging.

Usage:
    from config_snapshot.config_loader import load_hierarchical_config
    from config_snapshot.config_schema import build_config

    raw = load_hierarchical_config()
    unified = build_config(raw)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Section models
# ---------------------------------------------------------------------------


class SnapshotConfig(BaseModel):
    """Snapshot output settings.

    Attributes:
        output_dir: Directory receiving the snapshot file.
        filename: Snapshot file name (no directory part).
        width: Preferred maximum line width of the YAML output.
    """

    output_dir: str = Field(
        default=".config_snapshot",
        description="Directory receiving the snapshot file",
    )
    filename: str = Field(
        default="user.yaml", description="Snapshot file name"
    )
    width: int = Field(
        default=80,
        ge=20,
        le=1000,
        description="Preferred maximum line width (20-1000)",
    )

    model_config = {"frozen": True}

    @field_validator("filename")
    @classmethod
    def _bare_filename(cls, value: str) -> str:
        if not value or Path(value).name != value:
            raise ValueError(
                f"filename must be a bare file name, got '{value}'"
            )
        return value

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir).expanduser() / self.filename


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file: Optional log file path.
    """

    level: str = Field(default="INFO", description="Log level")
    file: str | None = Field(default=None, description="Log file path")

    model_config = {"frozen": True}


# ---------------------------------------------------------------------------
# Top-level unified config
# ---------------------------------------------------------------------------


class UnifiedConfig(BaseModel):
    """Top-level configuration.

    Every section has defaults, so ``UnifiedConfig()`` is always valid.
    """

    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}


def build_config(raw_data: dict) -> UnifiedConfig:
    """Construct a ``UnifiedConfig`` from the raw dict returned by
    ``load_hierarchical_config()``.

    Missing sections get defaults.

    Raises:
        pydantic.ValidationError: If a value is out of range or of the
            wrong type.
    """
    if not raw_data:
        return UnifiedConfig()

    return UnifiedConfig(**raw_data)
