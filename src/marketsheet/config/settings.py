"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from marketsheet.pipeline.keywords import DEFAULT_KEYWORD_TABLE, KeywordTable, merge_keyword_table

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"
_CWD_CONFIG = Path.cwd() / "config"

MAX_FETCH_LIMIT = 1000


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    if _CWD_CONFIG.exists():
        return _CWD_CONFIG
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    config_dir = _find_config_dir(config_dir)
    default_path = config_dir / "default.toml"
    base = _load_toml(default_path) if default_path.exists() else {}
    if profile:
        profile_path = config_dir / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class RunConfig(BaseModel):
    """Per-run settings handed explicitly to the pipeline entry point."""

    fetch_limit_min: int = Field(1, ge=1)
    fetch_limit_max: int = Field(500, ge=1, le=MAX_FETCH_LIMIT)
    selected_tag_filter: str | None = None
    timezone: str = "America/Toronto"
    clock: Literal["24h", "12h"] = "24h"
    tag_match_threshold: float = 80.0

    def clamp_limit(self, requested: int | None = None) -> int:
        """Requested limit (default: max) clamped to [fetch_limit_min, fetch_limit_max]."""
        limit = self.fetch_limit_max if requested is None else requested
        return max(self.fetch_limit_min, min(limit, self.fetch_limit_max))


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        polymarket: dict[str, Any] | None = None,
        fetch: dict[str, Any] | None = None,
        output: dict[str, Any] | None = None,
        categories: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.polymarket = polymarket or {}
        self.fetch = fetch or {}
        self.output = output or {}
        self.categories = categories or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            polymarket=raw.get("polymarket"),
            fetch=raw.get("fetch"),
            output=raw.get("output"),
            categories=raw.get("categories"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def gamma_api_base(self) -> str:
        return self.polymarket.get("gamma_api_base", "https://gamma-api.polymarket.com")

    @property
    def timeout_sec(self) -> float:
        return float(self.polymarket.get("timeout_sec", 30.0))

    @property
    def fetch_limit_min(self) -> int:
        return max(1, int(self.fetch.get("limit_min", 1)))

    @property
    def fetch_limit_max(self) -> int:
        return min(MAX_FETCH_LIMIT, max(1, int(self.fetch.get("limit_max", 500))))

    @property
    def tag_filter(self) -> str | None:
        value = str(self.fetch.get("tag_filter", "") or "").strip()
        return value or None

    @property
    def tag_match_threshold(self) -> float:
        return float(self.fetch.get("tag_match_threshold", 80.0))

    @property
    def timezone(self) -> str:
        return self.output.get("timezone", "America/Toronto")

    @property
    def clock(self) -> str:
        return "12h" if str(self.output.get("clock", "24h")).lower() == "12h" else "24h"

    @property
    def layout(self) -> str:
        return self.output.get("layout", "structured")

    @property
    def category_keywords(self) -> KeywordTable:
        """Built-in keyword table with [categories.<Name>] overlays applied."""
        return merge_keyword_table(DEFAULT_KEYWORD_TABLE, self.categories)

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)

    def run_config(self, **overrides: Any) -> RunConfig:
        """RunConfig from settings; None-valued overrides are ignored."""
        values: dict[str, Any] = {
            "fetch_limit_min": self.fetch_limit_min,
            "fetch_limit_max": max(self.fetch_limit_min, self.fetch_limit_max),
            "selected_tag_filter": self.tag_filter,
            "timezone": self.timezone,
            "clock": self.clock,
            "tag_match_threshold": self.tag_match_threshold,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RunConfig(**values)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
