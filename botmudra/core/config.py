from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv

# Repo root = .../botmudra/core/config.py -> parents[2]
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    reference_data_path: str

    min_investment: float
    min_duration_months: int
    max_duration_months: int

    api_host: str
    api_port: int


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def resolve_path(p: str) -> Path:
    """Relative paths are tried against the CWD first, then the repo root."""
    path = Path(p)
    if path.is_absolute() or path.exists():
        return path
    return PROJECT_ROOT / path


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    cfg_file = resolve_path(config_path)
    if cfg_file.exists():
        with open(cfg_file, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they can't blank out config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    reference_data_path = _env_or_cfg(
        "REFERENCE_DATA_PATH", "paths.reference_data", "data/reference/historical_data.json"
    )

    min_investment = float(_env_or_cfg("MIN_INVESTMENT", "projection.min_investment", 100000))
    min_duration_months = int(_env_or_cfg("MIN_DURATION_MONTHS", "projection.min_duration_months", 1))
    max_duration_months = int(_env_or_cfg("MAX_DURATION_MONTHS", "projection.max_duration_months", 60))

    if min_duration_months > max_duration_months:
        raise ValueError(
            f"min_duration_months ({min_duration_months}) exceeds max_duration_months ({max_duration_months})"
        )

    api_host = _env_or_cfg("API_HOST", "api.host", "127.0.0.1")
    api_port = int(_env_or_cfg("API_PORT", "api.port", 8000))

    return Settings(
        env=str(env).strip().lower(),
        log_level=str(log_level).strip().upper(),
        reference_data_path=str(reference_data_path),
        min_investment=min_investment,
        min_duration_months=min_duration_months,
        max_duration_months=max_duration_months,
        api_host=str(api_host),
        api_port=api_port,
    )


# Optional convenience singleton
SETTINGS = load_settings()
