"""Configuration loader for cache_solve defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .solvers import available_solvers


@dataclass(frozen=True)
class SolverConfig:
    default_method: str = "numpy"
    quiet: bool = False
    lu_tol: float = 0.0
    device: str = "cpu"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SolverConfig":
        return cls(
            default_method=str(data.get("default_method", "numpy")),
            quiet=_as_bool(data.get("quiet", False)),
            lu_tol=float(data.get("lu_tol", 0.0)),
            device=str(data.get("device", "cpu")),
        )

    def solver_defaults(self, method: str) -> Dict[str, Any]:
        if method in ("lu", "gauss_jordan"):
            return {"tol": self.lu_tol}
        if method == "torch":
            return {"device": self.device, "tol": self.lu_tol}
        return {}


ENV_MAP = {
    "default_method": "CACHEMATRIX_METHOD",
    "quiet": "CACHEMATRIX_QUIET",
    "lu_tol": "CACHEMATRIX_LU_TOL",
    "device": "CACHEMATRIX_DEVICE",
}


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def quiet_from_env() -> bool:
    return _as_bool(os.environ.get(ENV_MAP["quiet"], False))


def merge_env_overrides(config_data: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(config_data)
    for key, env_name in ENV_MAP.items():
        if env_name in os.environ:
            merged[key] = os.environ[env_name]
    return merged


def validate(config: SolverConfig) -> SolverConfig:
    if config.default_method not in available_solvers():
        raise ConfigError(
            f"default_method must be one of {available_solvers()}, got {config.default_method!r}"
        )
    if config.lu_tol < 0:
        raise ConfigError(f"lu_tol must be >= 0, got {config.lu_tol}")
    return config


def load_config(config_path: Optional[str | Path] = None) -> SolverConfig:
    data: Dict[str, Any] = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        data = load_yaml(path)

    data = merge_env_overrides(data)
    try:
        config = SolverConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
    return validate(config)
