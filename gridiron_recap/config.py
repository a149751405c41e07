"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``GRIDIRON_RECAP_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Every pipeline stage and CLI command receives an ``AppConfig`` instance,
never raw dicts or individual env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class SourceConfig(BaseModel):
    """Where the results table is scraped from."""

    model_config = ConfigDict(frozen=True)

    url: str = "https://www.espn.com/nfl/superbowl/history/winners"
    timeout_seconds: float = 30.0
    user_agent: str = "Mozilla/5.0 (X11; Linux x86_64) gridiron-recap/0.1"
    table_index: int = 0

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"url must be http(s), got '{v}'.")
        return v


class NormalizeConfig(BaseModel):
    """Header promotion and type coercion settings.

    ``header_row`` is the zero-based row of the raw table holding the column
    labels; it and every row above it are sliced off as metadata.
    """

    model_config = ConfigDict(frozen=True)

    header_row: int = 1
    column_aliases: dict[str, str] = {"no": "game"}
    date_column: str = "date"
    date_format: str = "%b %d, %Y"
    numeric_columns: list[str] = []

    @field_validator("header_row")
    @classmethod
    def validate_header_row(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"header_row must be >= 0, got {v}.")
        return v


class DeriveConfig(BaseModel):
    """Result splitting and spread categorisation parameters."""

    model_config = ConfigDict(frozen=True)

    result_column: str = "result"
    low_quantile: float = 0.25
    high_quantile: float = 0.75

    @model_validator(mode="after")
    def validate_quantiles(self) -> "DeriveConfig":
        if not 0.0 <= self.low_quantile <= self.high_quantile <= 1.0:
            raise ValueError(
                "Quantiles must satisfy 0 <= low_quantile <= high_quantile <= 1, "
                f"got {self.low_quantile} / {self.high_quantile}."
            )
        return self


class ReportConfig(BaseModel):
    """Recommendation list and output file settings."""

    model_config = ConfigDict(frozen=True)

    top_n: int = 5
    output_dir: str = "data/outputs"
    chart_file: str = "spread_categories.png"
    chart_dpi: int = 150

    @field_validator("top_n")
    @classmethod
    def validate_top_n(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"top_n must be >= 1, got {v}.")
        return v


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = "data/logs/gridiron_recap.log"
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration: the single source of truth."""

    model_config = ConfigDict(frozen=True)

    source: SourceConfig = SourceConfig()
    normalize: NormalizeConfig = NormalizeConfig()
    derive: DeriveConfig = DeriveConfig()
    report: ReportConfig = ReportConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply GRIDIRON_RECAP_* env vars to the raw config dict.

    Supported overrides:
      GRIDIRON_RECAP_SOURCE_URL  → raw["source"]["url"]
      GRIDIRON_RECAP_OUTPUT_DIR  → raw["report"]["output_dir"]
      GRIDIRON_RECAP_LOG_LEVEL   → raw["logging"]["level"]
      GRIDIRON_RECAP_DEBUG       → raw["debug"]
    """
    if url := os.environ.get("GRIDIRON_RECAP_SOURCE_URL"):
        raw.setdefault("source", {})["url"] = url

    if output_dir := os.environ.get("GRIDIRON_RECAP_OUTPUT_DIR"):
        raw.setdefault("report", {})["output_dir"] = output_dir

    if log_level := os.environ.get("GRIDIRON_RECAP_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("GRIDIRON_RECAP_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        source=SourceConfig(**raw.get("source", {})),
        normalize=NormalizeConfig(**raw.get("normalize", {})),
        derive=DeriveConfig(**raw.get("derive", {})),
        report=ReportConfig(**raw.get("report", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
