"""Configuration helpers for the Robot API client and driver options."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_ROBOT_HOST = "robot-ws.your-server.de"
DEFAULT_DIST = "Ubuntu 14.04.2 LTS minimal"
DEFAULT_ARCH = "64"
DEFAULT_LANG = "en"

OPTION_PREFIX = "hetzner-"
REQUIRED_OPTIONS = ("ip-address", "login", "password")


def _read_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(value: str | None, default: float | None) -> float | None:
    if value is None:
        return default
    try:
        parsed = float(value)
        return parsed if parsed > 0 else default
    except ValueError:
        return default


@dataclass(frozen=True)
class RobotSettings:
    """Typed container for Robot API client configuration."""

    host: str = DEFAULT_ROBOT_HOST
    # None leaves requests waiting indefinitely
    timeout: float | None = None
    verify_ssl: bool = True
    dist: str = DEFAULT_DIST
    arch: str = DEFAULT_ARCH
    lang: str = DEFAULT_LANG

    @classmethod
    def from_env(cls) -> "RobotSettings":
        """Build settings using HETZNER_* environment variables."""

        host = (os.environ.get("HETZNER_ROBOT_HOST") or "").strip() or cls.host
        timeout = _read_float(os.environ.get("HETZNER_ROBOT_TIMEOUT"), cls.timeout)
        verify_ssl = _read_bool(os.environ.get("HETZNER_ROBOT_VERIFY_SSL"), cls.verify_ssl)

        return cls(
            host=host,
            timeout=timeout,
            verify_ssl=verify_ssl,
            dist=os.environ.get("HETZNER_INSTALL_DIST", cls.dist),
            arch=os.environ.get("HETZNER_INSTALL_ARCH", cls.arch),
            lang=os.environ.get("HETZNER_INSTALL_LANG", cls.lang),
        )

    def headers(self) -> dict[str, str]:
        """Build default headers for outbound requests."""

        return {
            "User-Agent": "hetzner-machine-driver/0.1",
            "Accept": "application/json",
        }

    def to_dict(self) -> dict[str, Any]:
        """Return a dict suitable for logging/debugging."""

        return {
            "host": self.host,
            "timeout": self.timeout,
            "verify_ssl": self.verify_ssl,
            "dist": self.dist,
            "arch": self.arch,
            "lang": self.lang,
        }


def read_option(options: Mapping[str, Any], name: str) -> str:
    """Return an option by bare name, falling back to its ``hetzner-`` form.

    Values are returned verbatim; credentials may carry significant whitespace.
    """

    value = options.get(name)
    if value is None or value == "":
        value = options.get(f"{OPTION_PREFIX}{name}")
    if value is None:
        return ""
    return str(value)

