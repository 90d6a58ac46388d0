"""Settings models for the benchmark harness and its logging."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator

from writebench.models.base import WriteBenchBaseModel


class BenchmarkSettings(WriteBenchBaseModel):
    """Fixed parameters of the measurement harness.

    These are not user-facing options; the CLI always uses the defaults.
    """

    settle_interval_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Pause after each reset so prior kernel activity can settle",
    )
    label_width: int = Field(
        default=40, gt=0, description="Field width of the report label column"
    )
    drain_chunk_size: int = Field(
        default=8192, gt=0, description="Read size of the drain-only baseline"
    )
    splice_chunk_size: int = Field(
        default=65536, gt=0, description="Bytes requested per splice call"
    )
    min_block_size: int = Field(
        default=1024,
        gt=0,
        description="Smallest acceptable preferred block size of the output filesystem",
    )


class LoggingSettings(WriteBenchBaseModel):
    """Logging options derived from the CLI flags."""

    level: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Path | None = Field(
        default=None, description="Optional JSON log file"
    )
    json_logs: bool = Field(
        default=False, description="Render console logs as JSON"
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.strip().upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Path | None:
        """Expand user and resolve the log file path."""
        if v is None:
            return None
        return Path(v).expanduser().resolve()

    @classmethod
    def from_verbosity(
        cls,
        verbose: int = 0,
        debug: bool = False,
        log_file: str | None = None,
        json_logs: bool = False,
    ) -> "LoggingSettings":
        """Map -v/-vv/--debug to a level (-v=INFO, -vv=DEBUG)."""
        level = "WARNING"
        if debug or verbose >= 2:
            level = "DEBUG"
        elif verbose == 1:
            level = "INFO"
        return cls(level=level, log_file=log_file, json_logs=json_logs)
