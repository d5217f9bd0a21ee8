"""Custom exceptions for the Hetzner Robot driver."""

from __future__ import annotations

from typing import Any


class DriverError(RuntimeError):
    """Base error for driver operations."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConfigError(DriverError):
    """Raised when the machine configuration is incomplete or invalid."""


class MissingRequiredOption(ConfigError):
    """Raised when a required driver option is empty."""

    def __init__(self, option: str):
        super().__init__(f"hetzner driver requires the --hetzner-{option} option")
        self.option = option


class MissingIPAddress(DriverError):
    """Raised when the server IP address has not been configured."""

    def __init__(self, message: str = "IP address is not set"):
        super().__init__(message)


class NotImplementedOperation(DriverError):
    """Raised by lifecycle operations the Robot API does not expose."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: not yet implemented")
        self.operation = operation


class RobotRequestError(DriverError):
    """Raised for transport failures and non-success Robot API responses."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response: Any = None,
    ):
        super().__init__(message, status_code=status_code)
        self.response = response


class ProvisionError(DriverError):
    """Base error for a failed step of the create sequence."""


class KeyGenerationFailed(ProvisionError):
    """Raised when the local SSH key pair cannot be generated."""


class KeyReadFailed(ProvisionError):
    """Raised when the generated public key cannot be read back."""


class KeyUploadFailed(ProvisionError):
    """Raised when the public key cannot be registered with the Robot API."""


class InstallRequestFailed(ProvisionError):
    """Raised when the Robot API rejects the OS installation request."""


class ResetRequestFailed(ProvisionError):
    """Raised when the Robot API rejects the hardware reset request."""
