from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml

from .model import ServerConfig

log = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(ValueError):
    pass


def _parse_bool(value: object, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigError(f"{field_name} must be a boolean, got {value!r}")


def _parse_timeout(value: object, field_name: str) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{field_name} must be a number, got {value!r}") from None
    if timeout <= 0:
        raise ConfigError(f"{field_name} must be positive")
    return timeout


def _parse_base_url(value: object, field_name: str) -> str:
    url = str(value).strip()
    if not url.startswith(("http://", "https://")):
        raise ConfigError(f"{field_name} must be an http(s) URL")
    return url.rstrip("/")


def _parse_log_level(value: object, field_name: str) -> str:
    level = str(value).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(f"{field_name} must be one of {', '.join(sorted(_LOG_LEVELS))}")
    return level


def _read_yaml(path: str | Path) -> dict:
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigError(f"Config file not found: {path_obj}")

    try:
        data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping")
    return data


def _apply_file(config: ServerConfig, data: dict) -> None:
    known = set(ServerConfig.__slots__)
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    if "base_url" in data:
        config.base_url = _parse_base_url(data["base_url"], "base_url")
    if "user_agent" in data:
        config.user_agent = str(data["user_agent"])
    if "accept_language" in data:
        config.accept_language = str(data["accept_language"])
    if "timeout_sec" in data:
        config.timeout_sec = _parse_timeout(data["timeout_sec"], "timeout_sec")
    if "respect_robots_txt" in data:
        config.respect_robots_txt = _parse_bool(data["respect_robots_txt"], "respect_robots_txt")
    if "audit_dir" in data:
        config.audit_dir = str(data["audit_dir"] or "")
    if "log_level" in data:
        config.log_level = _parse_log_level(data["log_level"], "log_level")


def _apply_env(config: ServerConfig, environ: Mapping[str, str]) -> None:
    if "UPSOUND_BASE_URL" in environ:
        config.base_url = _parse_base_url(environ["UPSOUND_BASE_URL"], "UPSOUND_BASE_URL")
    if "UPSOUND_USER_AGENT" in environ:
        config.user_agent = environ["UPSOUND_USER_AGENT"]
    if "UPSOUND_ACCEPT_LANGUAGE" in environ:
        config.accept_language = environ["UPSOUND_ACCEPT_LANGUAGE"]
    if "UPSOUND_TIMEOUT_SEC" in environ:
        config.timeout_sec = _parse_timeout(environ["UPSOUND_TIMEOUT_SEC"], "UPSOUND_TIMEOUT_SEC")
    if "UPSOUND_IGNORE_ROBOTS_TXT" in environ:
        ignore = _parse_bool(environ["UPSOUND_IGNORE_ROBOTS_TXT"], "UPSOUND_IGNORE_ROBOTS_TXT")
        config.respect_robots_txt = not ignore
    if "UPSOUND_AUDIT_DIR" in environ:
        config.audit_dir = environ["UPSOUND_AUDIT_DIR"]
    if "UPSOUND_LOG_LEVEL" in environ:
        config.log_level = _parse_log_level(environ["UPSOUND_LOG_LEVEL"], "UPSOUND_LOG_LEVEL")


def load_config(
    path: str | Path | None = None,
    *,
    ignore_robots_txt: bool = False,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Build the server config from defaults, an optional YAML file and the environment.

    ``ignore_robots_txt`` is the process-start flag; when set it wins over
    both the file and the environment.
    """
    config = ServerConfig()
    if path:
        _apply_file(config, _read_yaml(path))
    _apply_env(config, os.environ if environ is None else environ)
    if ignore_robots_txt:
        config.respect_robots_txt = False
    log.debug("loaded config: %s", config)
    return config
