"""
Configuration settings for serialbench.

Uses Pydantic Settings to load environment variables for output locations,
logging, and benchmark defaults. Every value has a default so a bare run
behaves the same with or without a `.env` file.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Artifacts
    output_dir: str = Field(".", alias="OUTPUT_DIR")
    schema_name: str = Field("Employees", alias="SCHEMA_NAME")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    json_logs: bool = Field(False, alias="JSON_LOGS")

    # Benchmark defaults
    benchmark_runs: int = Field(1, ge=1, alias="BENCHMARK_RUNS")
    benchmark_warmup: bool = Field(False, alias="BENCHMARK_WARMUP")
    trace_allocations: bool = Field(False, alias="TRACE_ALLOCATIONS")
    json_indent: int = Field(2, ge=0, alias="JSON_INDENT")

    # Result persistence
    persist_results: bool = Field(False, alias="PERSIST_RESULTS")
    results_dir: str = Field("results", alias="RESULTS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
