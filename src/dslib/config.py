"""YAML configuration loading for scope connections.

Example YAML configuration:
    scope:
      host: "192.168.50.78"
      port: 5555
      timeout: 1.0
      connect_timeout: 5.0
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from dslib.lan import DEVICE_PORT
from dslib.transport import DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ScopeConfig:
    """Connection settings for one scope.

    Attributes:
        host: Host name or IPv4 address of the scope.
        port: TCP port (5555 on the DS1000Z series).
        timeout: Default read timeout in seconds; 0 waits indefinitely.
        connect_timeout: Seconds to wait for the TCP connection.
    """

    host: str
    port: int = DEVICE_PORT
    timeout: float = DEFAULT_TIMEOUT
    connect_timeout: float = 5.0


def _number(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"scope.{key} must be a number, got {value!r}")
    if value < 0:
        raise ValueError(f"scope.{key} must be >= 0, got {value}")
    return float(value)


def parse_config(data: Any) -> ScopeConfig:
    """Build a :class:`ScopeConfig` from an already-loaded YAML document.

    Raises:
        ValueError: If the document is invalid or missing required fields.
    """
    if not isinstance(data, dict):
        raise ValueError("Config must be a YAML mapping")

    section = data.get("scope")
    if not isinstance(section, dict):
        raise ValueError("Missing required section: scope")

    host = section.get("host")
    if not host or not isinstance(host, str):
        raise ValueError("Missing required field: scope.host")

    port = section.get("port", DEVICE_PORT)
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ValueError(f"scope.port must be an integer in 1-65535, got {port!r}")

    return ScopeConfig(
        host=host,
        port=port,
        timeout=_number(section, "timeout", DEFAULT_TIMEOUT),
        connect_timeout=_number(section, "connect_timeout", 5.0),
    )


def load_config(path: str | Path) -> ScopeConfig:
    """Load scope connection settings from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Parsed scope configuration.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the config is invalid or missing required fields.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    return parse_config(data)
