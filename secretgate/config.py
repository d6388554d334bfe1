import os
import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List, Mapping

import yaml
from dotenv import dotenv_values

logger = logging.getLogger("secret_gate.config")

ENV_PREFIX = "SECRETGATE_"
REQUIRED_KEYS = ("USERNAME", "PASSWORD", "SECRET_MESSAGE")
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
DEFAULT_ENV_FILE = ".env"

TRUTHY = {"1", "true", "yes", "on"}

class ConfigError(Exception):
    """Raised at startup when configuration is missing or malformed."""

    def __init__(self, message: str, missing: Optional[List[str]] = None):
        super().__init__(message)
        self.missing = missing or []

@dataclass(frozen=True)
class GateConfig:
    username: str
    password: str = field(repr=False)
    secret_message: str = field(repr=False)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    audit_log: Optional[str] = None
    debug: bool = False

    def summary(self) -> Dict[str, Any]:
        """Printable view of the config with secrets masked."""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": "*" * len(self.password),
            "secret_message": f"<{len(self.secret_message)} chars>",
            "audit_log": self.audit_log or "disabled",
            "debug": self.debug,
        }

def load_yaml_config(path: str) -> Dict[str, str]:
    """Reads a flat YAML mapping of configuration keys. Keys are upper-cased."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            # BaseLoader keeps every scalar a string: 0123 or yes stay as typed.
            data = yaml.load(f, Loader=yaml.BaseLoader) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

    return {str(k).upper(): "" if v is None else str(v) for k, v in data.items()}

def _resolve(name: str, layers: List[Mapping[str, Optional[str]]]) -> Optional[str]:
    # A prefixed name in any layer beats the bare name in every layer; later layers win otherwise.
    for key in (ENV_PREFIX + name, name):
        value = None
        for layer in layers:
            if layer.get(key) is not None:
                value = layer[key]
        if value is not None:
            return value
    return None

def _parse_port(raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        raise ConfigError(f"PORT must be an integer, got {raw!r}")
    if not 0 <= port <= 65535:
        raise ConfigError(f"PORT out of range: {port}")
    return port

def load_config(
    env_file: Optional[str] = DEFAULT_ENV_FILE,
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GateConfig:
    """
    Builds a GateConfig from (lowest to highest precedence) a YAML file,
    a dotenv file and the process environment, then validates it.

    `overrides` holds values from the command line and wins over everything;
    entries set to None are ignored.
    """
    environ = os.environ if environ is None else environ
    layers: List[Mapping[str, Optional[str]]] = []

    config_path = config_path or environ.get(ENV_PREFIX + "CONFIG")
    if config_path:
        layers.append(load_yaml_config(config_path))
        logger.debug("Loaded config file %s", config_path)

    if env_file and os.path.exists(env_file):
        layers.append(dotenv_values(env_file))
        logger.debug("Loaded dotenv file %s", env_file)
    elif env_file and env_file != DEFAULT_ENV_FILE:
        raise ConfigError(f"dotenv file not found: {env_file}")

    layers.append(environ)

    values = {name: _resolve(name, layers) for name in REQUIRED_KEYS + ("HOST", "PORT", "AUDIT_LOG", "DEBUG")}

    if overrides:
        values.update({k.upper(): str(v) for k, v in overrides.items() if v is not None})

    missing = [name for name in REQUIRED_KEYS if not (values[name] or "").strip()]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}", missing=missing)

    return GateConfig(
        username=values["USERNAME"],
        password=values["PASSWORD"],
        secret_message=values["SECRET_MESSAGE"],
        host=(values["HOST"] or "").strip() or DEFAULT_HOST,
        port=_parse_port(values["PORT"]),
        audit_log=(values["AUDIT_LOG"] or "").strip() or None,
        debug=(values["DEBUG"] or "").strip().lower() in TRUTHY,
    )
