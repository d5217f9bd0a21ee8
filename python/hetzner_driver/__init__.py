"""Hetzner Robot machine driver."""

from .client import RobotClient
from .config import RobotSettings
from .driver import (
    DRIVER_NAME,
    BaseDriver,
    HetznerDriver,
    MachineDriver,
    MachineState,
    new_driver,
)
from .errors import (
    ConfigError,
    DriverError,
    InstallRequestFailed,
    KeyGenerationFailed,
    KeyReadFailed,
    KeyUploadFailed,
    MissingIPAddress,
    MissingRequiredOption,
    NotImplementedOperation,
    ProvisionError,
    ResetRequestFailed,
    RobotRequestError,
)
from .keys import KeyGenerator, SSHKeyGenerator
from .logger import configure_logging, get_logger
from .models import KeyResponse, MachineConfig, UploadedKey

__all__ = [
    # Driver
    "DRIVER_NAME",
    "BaseDriver",
    "HetznerDriver",
    "MachineDriver",
    "MachineState",
    "new_driver",
    # Client utilities
    "RobotClient",
    "RobotSettings",
    "KeyGenerator",
    "SSHKeyGenerator",
    # Models
    "KeyResponse",
    "MachineConfig",
    "UploadedKey",
    # Errors
    "DriverError",
    "ConfigError",
    "MissingRequiredOption",
    "MissingIPAddress",
    "NotImplementedOperation",
    "RobotRequestError",
    "ProvisionError",
    "KeyGenerationFailed",
    "KeyReadFailed",
    "KeyUploadFailed",
    "InstallRequestFailed",
    "ResetRequestFailed",
    # Logging
    "configure_logging",
    "get_logger",
]
