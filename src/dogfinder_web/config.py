from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_ROOT = "DOGFINDER_ROOT"
ENV_BIND = "DOGFINDER_BIND"
ENV_PORT = "DOGFINDER_PORT"
ENV_CONFIG = "DOGFINDER_CONFIG"


class NetworkConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    bind_host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    file: str | None = Field(
        default=None,
        description="Optional log file path; rotated by size when set.",
    )
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


class ServerConfig(BaseModel):
    """Startup configuration for the asset server.

    `root` is the directory being served. It is made absolute once here and never
    changes for the lifetime of the process.
    """

    model_config = ConfigDict(frozen=True)

    root: Path
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("root", mode="before")
    @classmethod
    def _absolute_root(cls, value: Any) -> Path:
        if value is None or not str(value).strip():
            raise ValueError("root must be a non-empty path")
        return resolve_root(value)


def resolve_root(raw: str | os.PathLike[str]) -> Path:
    # Relative roots are taken against the CWD at startup, then fixed.
    return Path(raw).expanduser().resolve()


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _lift_flat_keys(raw: dict[str, Any]) -> dict[str, Any]:
    # Accept {"root", "host", "port"} at top level as well as the nested form.
    data = {k: v for k, v in raw.items() if k not in ("host", "port")}
    network = dict(data.get("network") or {})
    if "host" in raw:
        network.setdefault("bind_host", raw["host"])
    if "port" in raw:
        network.setdefault("port", raw["port"])
    if network:
        data["network"] = network
    return data


def _apply_overrides(data: dict[str, Any], values: Mapping[str, Any]) -> None:
    def _present(key: str) -> bool:
        value = values.get(key)
        return value is not None and str(value).strip() != ""

    if _present("root"):
        data["root"] = values["root"]
    if _present("host"):
        data.setdefault("network", {})["bind_host"] = values["host"]
    if _present("port"):
        data.setdefault("network", {})["port"] = values["port"]
    if _present("log_level"):
        data.setdefault("logging", {})["level"] = values["log_level"]
    if _present("log_file"):
        data.setdefault("logging", {})["file"] = values["log_file"]


def load_server_config(
    config_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ServerConfig:
    """Build the server config from its sources.

    Precedence, highest first: `overrides` (CLI flags), environment
    (DOGFINDER_ROOT / DOGFINDER_BIND / DOGFINDER_PORT), the JSON file at
    `config_path`, model defaults.

    - An explicit `config_path` that does not exist raises FileNotFoundError.
    - Validation is performed by Pydantic.
    """

    env = os.environ if environ is None else environ

    raw: Any = {}
    if config_path is not None:
        raw = _read_json(config_path)
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config format at {config_path}: expected a JSON object")

    data = _lift_flat_keys(raw)
    data["network"] = dict(data.get("network") or {})
    data["logging"] = dict(data.get("logging") or {})

    _apply_overrides(
        data,
        {
            "root": env.get(ENV_ROOT),
            "host": env.get(ENV_BIND),
            "port": env.get(ENV_PORT),
        },
    )
    _apply_overrides(data, overrides or {})

    return ServerConfig.model_validate(data)
