"""Configuration models for write-bench."""

from .models import BenchmarkSettings, LoggingSettings


__all__ = ["BenchmarkSettings", "LoggingSettings"]
