"""SSH key pair generation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import paramiko

from .logger import get_logger

logger = get_logger(__name__)


class KeyGenerator(Protocol):
    """Writes a private key to ``path`` and its public half to ``path + ".pub"``."""

    def generate(self, path: str) -> None: ...


class SSHKeyGenerator:
    """Generates RSA key pairs with paramiko."""

    def __init__(self, bits: int = 2048, comment: str | None = None):
        self.bits = bits
        self.comment = comment

    def generate(self, path: str) -> None:
        private_path = Path(path)
        private_path.parent.mkdir(parents=True, exist_ok=True)

        key = paramiko.RSAKey.generate(bits=self.bits)
        key.write_private_key_file(str(private_path))

        public_line = f"{key.get_name()} {key.get_base64()}"
        if self.comment:
            public_line = f"{public_line} {self.comment}"
        public_path = private_path.with_name(private_path.name + ".pub")
        public_path.write_text(public_line + "\n", encoding="utf-8")

        logger.info("Generated %d-bit RSA key pair at %s", self.bits, private_path)
