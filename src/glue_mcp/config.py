from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError

CONFIG_ENV_VAR = "GLUE_MCP_CONFIG"


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 8000
    sse_path: str = "/sse"

    @property
    def bind_address(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class AWSConfig:
    region: str | None = None
    profile: str | None = None
    verify_on_startup: bool = True


@dataclass
class ObservabilityConfig:
    log_level: str = "info"
    metrics_enabled: bool = True


@dataclass
class AppConfig:
    server: ServerConfig = field(default_factory=ServerConfig)
    aws: AWSConfig = field(default_factory=AWSConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)


_LOG_LEVELS = {"debug", "info", "warning", "error", "critical"}
_ENV_REF = re.compile(r"\$\{([^}]+)\}")
_TRUE = {"true", "1"}
_FALSE = {"false", "0"}


def _lookup_env(match: re.Match[str], env: Mapping[str, str]) -> str:
    key = match.group(1)
    if key not in env:
        raise ConfigError(f"Environment variable {key} is required but not set")
    return env[key]


def _resolve_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ``${VAR}`` references with values from ``env`` only."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda match: _lookup_env(match, env), value)
    if isinstance(value, list):
        return [_resolve_env(v, env) for v in value]
    if isinstance(value, dict):
        return {k: _resolve_env(v, env) for k, v in value.items()}
    return value


def _validate_port(value: Any) -> int:
    try:
        port = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"server.port must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise ConfigError(f"server.port must be between 1 and 65535, got {port}")
    return port


def _parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, int)):
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ConfigError(f"{field_name} must be true or false, got {value!r}")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def config_path(env: Mapping[str, str] | None = None) -> Path | None:
    """Get the configuration file path from the environment, if one is set."""
    env = os.environ if env is None else env
    path = env.get(CONFIG_ENV_VAR)
    return Path(path) if path else None


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    env = os.environ if env is None else env
    if path is None:
        return AppConfig()

    try:
        raw = yaml.safe_load(Path(path).read_text()) or {}
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file {path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    resolved = _resolve_env(raw, env)
    server_raw = resolved.get("server") or {}
    aws_raw = resolved.get("aws") or {}
    observability_raw = resolved.get("observability") or {}

    server = ServerConfig(
        host=str(server_raw.get("host", "127.0.0.1")),
        port=_validate_port(server_raw.get("port", 8000)),
        sse_path=str(server_raw.get("sse_path", "/sse")),
    )
    if not server.host:
        raise ConfigError("server.host is required")
    if not server.sse_path.startswith("/"):
        raise ConfigError("server.sse_path must start with '/'")

    aws = AWSConfig(
        region=_optional_str(aws_raw.get("region")),
        profile=_optional_str(aws_raw.get("profile")),
        verify_on_startup=_parse_bool(
            aws_raw.get("verify_on_startup", True), "aws.verify_on_startup"
        ),
    )

    log_level = str(observability_raw.get("log_level", "info")).lower()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"Unsupported log level: {log_level}")
    observability = ObservabilityConfig(
        log_level=log_level,
        metrics_enabled=_parse_bool(
            observability_raw.get("metrics_enabled", True), "observability.metrics_enabled"
        ),
    )

    return AppConfig(server=server, aws=aws, observability=observability)
