# src/roadsnap/config/settings.py
"""
Library settings (Pydantic).

Settings are loaded from `src/roadsnap/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `ROADSNAP_LOG_LEVEL`, `ROADSNAP_CHECK_CONTRACTS`)
- an external YAML file via `ROADSNAP_CONFIG_PATH`

Design rule:
- Geometry constants (precision, earth radius) are NOT settings; every caller must share them.
  Only operational knobs (logging, contract checks, report sampling) live in YAML.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from roadsnap.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `roadsnap.config`."""
    text = resources.files("roadsnap.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "roadsnap"
    log_level: str = "INFO"


class ContractSettings(BaseModel):
    # Disabling checks is the equivalent of a release build: callers own the preconditions.
    enabled: bool = True
    log_broken_coordinates: bool = True


class OrderingReportSettings(BaseModel):
    samples: int = Field(2000, ge=1)
    seed: int = 42
    max_abs_lat: float = Field(0.5, gt=0, le=85)
    max_abs_lon: float = Field(0.5, gt=0, le=180)
    max_segment_deg: float = Field(0.02, gt=0)
    max_offset_deg: float = Field(0.02, gt=0)
    margin: float = Field(0.1, ge=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    contracts: ContractSettings = Field(default_factory=ContractSettings)
    ordering_report: OrderingReportSettings = Field(default_factory=OrderingReportSettings)  # type: ignore


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is small on purpose; everything else goes through YAML.
    """
    load_dotenv_if_present()
    data = dict(data)
    log_level = os.getenv("ROADSNAP_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    check_contracts = os.getenv("ROADSNAP_CHECK_CONTRACTS")
    if check_contracts is not None:
        data.setdefault("contracts", {})["enabled"] = _env_flag(check_contracts)

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("ROADSNAP_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
