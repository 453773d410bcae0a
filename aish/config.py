from __future__ import annotations

import getpass
import os
import socket
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_OS = "ubuntu"
DEFAULT_TEMPERATURE = 0.2

_TRUTHY = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


class SessionConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    os_name: str = DEFAULT_OS
    username: str = "root"
    hostname: str = "server"
    command: Optional[str] = None
    log_file: Optional[str] = None
    log_level: str = "INFO"
    temperature: float = DEFAULT_TEMPERATURE
    guard: bool = False


def _default_username() -> str:
    try:
        return getpass.getuser() or "root"
    except (KeyError, OSError):
        return "root"


def _default_hostname() -> str:
    try:
        return socket.gethostname() or "server"
    except OSError:
        return "server"


def _parse_temperature(raw: Optional[str]) -> float:
    if raw is None:
        return DEFAULT_TEMPERATURE
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"AISH_TEMPERATURE must be a number, got {raw!r}") from exc


def load_config(environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> SessionConfig:
    """Build the session configuration from the environment.

    Empty variables count as unset. Keyword overrides that are not None win
    over the environment; the command line passes its flags this way.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(name, "")
        return value if value.strip() else None

    values = {
        "api_key": get("OPENAI_API_KEY") or "",
        "base_url": get("OPENAI_BASE_URL") or DEFAULT_BASE_URL,
        "model": get("OPENAI_MODEL") or DEFAULT_MODEL,
        "os_name": get("PROMPT_OS") or DEFAULT_OS,
        "username": get("AISH_USERNAME") or _default_username(),
        "hostname": get("AISH_HOSTNAME") or _default_hostname(),
        "command": get("AISH_COMMAND"),
        "log_file": get("LOG_FILE"),
        "log_level": (get("LOG_LEVEL") or "INFO").upper(),
        "temperature": _parse_temperature(get("AISH_TEMPERATURE")),
        "guard": (get("AISH_GUARD") or "").strip().lower() in _TRUTHY,
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    values["base_url"] = values["base_url"].rstrip("/")
    return SessionConfig(**values)
