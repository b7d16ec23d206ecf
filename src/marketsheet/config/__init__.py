"""Configuration: TOML profiles, Settings, logging setup."""

from marketsheet.config.settings import RunConfig, Settings, configure_logging, get_settings

__all__ = ["RunConfig", "Settings", "configure_logging", "get_settings"]
