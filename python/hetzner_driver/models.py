"""Data models shared by the driver and the Robot API client."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from .errors import ConfigError, MissingRequiredOption


@dataclass(frozen=True)
class MachineConfig:
    """Identifies one leased server and the credentials that manage it."""

    name: str
    ip_address: str
    login: str
    password: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ConfigError("hetzner driver requires a machine name")
        if not self.ip_address.strip():
            raise MissingRequiredOption("ip-address")
        if not self.login.strip():
            raise MissingRequiredOption("login")
        if not self.password.strip():
            raise MissingRequiredOption("password")

    def __repr__(self) -> str:
        return (
            f"MachineConfig(name={self.name!r}, ip_address={self.ip_address!r}, "
            f"login={self.login!r}, password='***')"
        )


class UploadedKey(BaseModel):
    """Public key record as registered with the Robot API."""

    fingerprint: str = Field(..., min_length=1, description="Key identifier used by /boot")
    name: str | None = None
    type: str | None = None
    size: int | None = None
    data: str | None = None


class KeyResponse(BaseModel):
    """Envelope returned by ``POST /key``."""

    key: UploadedKey
