"""Machine driver for bare-metal servers managed through Hetzner Robot."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from .client import RobotClient
from .config import REQUIRED_OPTIONS, RobotSettings, read_option
from .errors import (
    InstallRequestFailed,
    KeyGenerationFailed,
    KeyReadFailed,
    KeyUploadFailed,
    MissingIPAddress,
    MissingRequiredOption,
    NotImplementedOperation,
    ResetRequestFailed,
    RobotRequestError,
)
from .keys import KeyGenerator, SSHKeyGenerator
from .logger import get_logger
from .models import MachineConfig

logger = get_logger(__name__)

DRIVER_NAME = "hetzner"
DOCKER_PORT = 2376


class MachineState(str, Enum):
    """Machine states reported to the host; Robot offers no status query."""

    RUNNING = "Running"


class MachineDriver(ABC):
    """Capability interface a provisioning host drives a machine through.

    Every operation returns a defined result for every implementation;
    unsupported ones raise :class:`NotImplementedOperation`.
    """

    @abstractmethod
    def driver_name(self) -> str: ...

    @abstractmethod
    def configure(self, options: Mapping[str, Any]) -> None: ...

    @abstractmethod
    def pre_create_check(self) -> None: ...

    @abstractmethod
    def create(self) -> None: ...

    @abstractmethod
    def get_ip(self) -> str: ...

    @abstractmethod
    def get_ssh_hostname(self) -> str: ...

    @abstractmethod
    def get_url(self) -> str: ...

    @abstractmethod
    def get_state(self) -> MachineState: ...

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @abstractmethod
    def restart(self) -> None: ...

    @abstractmethod
    def kill(self) -> None: ...

    @abstractmethod
    def remove(self) -> None: ...


class BaseDriver(MachineDriver):
    """State every driver shares: machine name, store directory and SSH details."""

    def __init__(
        self,
        machine_name: str,
        store_path: str | os.PathLike[str],
        *,
        ssh_user: str = "root",
        ssh_port: int = 22,
    ):
        self.machine_name = machine_name
        self.store_path = str(store_path)
        self.ip_address = ""
        self.ssh_user = ssh_user
        self.ssh_port = ssh_port

    def get_machine_name(self) -> str:
        return self.machine_name

    def get_ssh_username(self) -> str:
        return self.ssh_user

    def get_ssh_port(self) -> int:
        return self.ssh_port

    def get_ssh_key_path(self) -> str:
        return os.path.join(self.store_path, "id_rsa")


ClientFactory = Callable[[MachineConfig], RobotClient]


class HetznerDriver(BaseDriver):
    """Installs a base image on a leased server and resets it into the new system.

    ``create`` runs three Robot API calls in order: register a freshly
    generated public key, stage a Linux installation authorized for that key,
    and issue a hardware reset. Nothing is polled afterwards; success means
    the API accepted the requests, not that the server is up.
    """

    def __init__(
        self,
        machine_name: str,
        store_path: str | os.PathLike[str],
        *,
        key_generator: KeyGenerator | None = None,
        client_factory: ClientFactory | None = None,
        settings: RobotSettings | None = None,
        **kwargs: Any,
    ):
        super().__init__(machine_name, store_path, **kwargs)
        self.login = ""
        self.password = ""
        self.install_error: InstallRequestFailed | None = None
        self._settings = settings
        self._key_generator = key_generator or SSHKeyGenerator()
        self._client_factory = client_factory or self._default_client

    def _default_client(self, config: MachineConfig) -> RobotClient:
        return RobotClient(config.login, config.password, self._settings)

    def driver_name(self) -> str:
        return DRIVER_NAME

    def configure(self, options: Mapping[str, Any]) -> None:
        """Read ``ip-address``, ``login`` and ``password`` from host options."""

        self.ip_address = read_option(options, "ip-address")
        self.login = read_option(options, "login")
        self.password = read_option(options, "password")

        values = dict(zip(REQUIRED_OPTIONS, (self.ip_address, self.login, self.password)))
        for name, value in values.items():
            if not value.strip():
                raise MissingRequiredOption(name)

    def machine_config(self) -> MachineConfig:
        return MachineConfig(
            name=self.machine_name,
            ip_address=self.ip_address,
            login=self.login,
            password=self.password,
        )

    def pre_create_check(self) -> None:
        return None

    def create(self) -> None:
        config = self.machine_config()
        self.install_error = None
        with self._client_factory(config) as client:
            self._provision(config, client)

    def _provision(self, config: MachineConfig, client: RobotClient) -> None:
        fingerprint = self._create_key_pair(client)

        # http://wiki.hetzner.de/index.php/Robot_Webservice/en#POST_.2Fboot.2F.3Cserver-ip.3E.2Flinux
        try:
            client.install_linux(config.ip_address, fingerprint)
        except RobotRequestError as exc:
            error = InstallRequestFailed(
                f"unable to request OS installation: {exc}", status_code=exc.status_code
            )
            error.__cause__ = exc
            self.install_error = error
            logger.error("Install request for %s failed: %s", config.ip_address, exc)

        # http://wiki.hetzner.de/index.php/Robot_Webservice/en#POST_.2Freset.2F.3Cserver-ip.3E
        try:
            client.reset(config.ip_address)
        except RobotRequestError as exc:
            raise ResetRequestFailed(
                f"unable to reset server: {exc}", status_code=exc.status_code
            ) from exc

        if self.install_error is not None:
            logger.warning(
                "Server %s was reset although its install request failed", config.ip_address
            )
        else:
            logger.info("Installation staged and reset issued for %s", config.ip_address)

    def _create_key_pair(self, client: RobotClient) -> str:
        key_path = self.get_ssh_key_path()
        try:
            self._key_generator.generate(key_path)
        except Exception as exc:
            raise KeyGenerationFailed(f"unable to create key pair: {exc}") from exc

        try:
            public_key = Path(key_path + ".pub").read_text(encoding="utf-8")
        except OSError as exc:
            raise KeyReadFailed(f"unable to read public key: {exc}") from exc

        logger.debug("creating key pair: %s", self.machine_name)

        # http://wiki.hetzner.de/index.php/Robot_Webservice/en#POST_.2Fkey
        try:
            key = client.upload_key(self.machine_name, public_key)
        except RobotRequestError as exc:
            raise KeyUploadFailed(
                f"unable to upload public key: {exc}", status_code=exc.status_code
            ) from exc
        return key.fingerprint

    def get_ip(self) -> str:
        if not self.ip_address:
            raise MissingIPAddress()
        return self.ip_address

    def get_ssh_hostname(self) -> str:
        return self.get_ip()

    def get_url(self) -> str:
        if not self.ip_address:
            return ""
        return f"tcp://{self.ip_address}:{DOCKER_PORT}"

    def get_state(self) -> MachineState:
        return MachineState.RUNNING

    def start(self) -> None:
        raise NotImplementedOperation("start")

    def stop(self) -> None:
        raise NotImplementedOperation("stop")

    def restart(self) -> None:
        raise NotImplementedOperation("restart")

    def kill(self) -> None:
        raise NotImplementedOperation("kill")

    def remove(self) -> None:
        raise NotImplementedOperation("remove")


def new_driver(
    machine_name: str, store_path: str | os.PathLike[str], **kwargs: Any
) -> HetznerDriver:
    """Factory a host registers under :data:`DRIVER_NAME`."""

    return HetznerDriver(machine_name, store_path, **kwargs)
