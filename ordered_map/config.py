from __future__ import annotations

import os
from functools import cache
from pathlib import Path
from typing import ClassVar

import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MissingConfigError(RuntimeError):
    """Raised when an explicitly requested config file does not exist."""


class LoggingSettings(BaseModel):

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)


class BenchSettings(BaseModel):
    """Timing knobs mirrored 1:1 by the ordered-map-bench CLI options."""

    start_capacity: int = Field(default=10_000, ge=1)
    stop_capacity: int = Field(default=10_000_000, ge=1)  # exclusive
    growth_factor: int = Field(default=2, ge=2)
    max_growth_ratio: float = Field(default=4.0, gt=1.0)  # per capacity step
    repeats: int = Field(default=1, ge=1)  # best-of-N per sample
    parity_capacity: int = Field(default=1_000_000, ge=1)
    parity_duration_sec: float = Field(default=2.0, gt=0.0)
    max_slowdown: float = Field(default=25.0, gt=1.0)  # vs plain dict

    @model_validator(mode="after")
    def _check_range(self) -> BenchSettings:
        if self.stop_capacity <= self.start_capacity:
            raise ValueError("stop_capacity must be greater than start_capacity")
        return self


class LRUSettings(BaseModel):

    capacity: int = Field(default=50_000, ge=1)


class AppConfig(BaseSettings):
    """
    Settings for the tooling around the container (bench CLI, logging, LRU defaults).

    Source of truth:
      1) YAML file (structured config)
      2) Env overrides for logging, merged explicitly in from_yaml().
    """

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_prefix="",  # no automatic prefixing
        extra="ignore",
        case_sensitive=False,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    bench: BenchSettings = Field(default_factory=BenchSettings)
    lru: LRUSettings = Field(default_factory=LRUSettings)

    # ---------- YAML loader with explicit env merge ----------
    @classmethod
    def from_yaml(cls, path: Path | None = None) -> AppConfig:
        """
        Load config from YAML, then overlay env.
        Search order if path is not provided:
          ./data/ordered_map.yaml
          ~/.config/ordered-map/config.yaml
        An explicit path must exist.
        """
        candidates: list[Path] = []
        if path is not None:
            if not path.exists():
                raise MissingConfigError(f"Config file not found: {path}")
            candidates.append(path)
        else:
            candidates.extend(
                [Path("data/ordered_map.yaml"), Path.home() / ".config/ordered-map/config.yaml"]
            )

        raw: dict[str, object] = {}
        for p in candidates:
            if p.exists():
                text = p.read_text(encoding="utf-8")
                loaded = yaml.safe_load(text) or {}
                if not isinstance(loaded, dict):
                    raise ValueError(f"YAML at {p} must define a mapping at the root")
                raw = loaded
                break

        cfg = cls.model_validate(raw)

        # ---- explicit env merge (no pydantic alias magic) ----
        def _get_env(*names: str) -> str | None:
            for n in names:
                v = os.getenv(n)
                if v is not None and v != "":
                    return v
            return None

        level = _get_env("ORDERED_MAP_LOG_LEVEL", "LOG_LEVEL")
        if level is not None:
            cfg.logging.level = level.strip().upper()

        json_raw = _get_env("ORDERED_MAP_LOG_JSON")
        if json_raw is not None:
            truthy = {"1", "true", "yes", "on"}
            cfg.logging.json_output = json_raw.strip().lower() in truthy

        return cfg


@cache
def get_settings() -> AppConfig:
    return AppConfig.from_yaml()


__all__ = [
    "AppConfig",
    "BenchSettings",
    "LRUSettings",
    "LoggingSettings",
    "MissingConfigError",
    "get_settings",
]
