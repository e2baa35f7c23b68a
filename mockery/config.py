from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from mockery.errors import ConfigError

_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.upper()
        if normalized not in _LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return normalized


class MockerySettings(BaseSettings):
    infer_policy: bool = True
    """Derive void/optional/required handling from return annotations."""
    capture_call_site: bool = True
    """Attach file/line of the invoking frame to executions and errors."""
    log_invocations: bool = False
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="MOCKERY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    def configure_logging(self) -> None:
        from mockery.core.logging import setup_logging

        setup_logging(self.logging.level, json_output=self.logging.json_output)


def _merge(base: dict[str, object], overrides: dict[str, object]) -> dict[str, object]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(path: str | Path = "mockery.yaml") -> MockerySettings:
    """Load settings from a YAML file; ``MOCKERY_*`` variables win over the file."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config file not found: {config_path}")

    loaded = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ConfigError("config file must contain a top-level mapping")

    raw = loaded.get("mockery", loaded)
    if not isinstance(raw, dict):
        raise ConfigError("mockery config section must be a mapping")

    # model_validate skips the settings sources, so read the environment explicitly.
    overrides = EnvSettingsSource(MockerySettings)()
    return MockerySettings.model_validate(_merge(raw, overrides))


__all__ = [
    "LoggingConfig",
    "MockerySettings",
    "load_config",
]
