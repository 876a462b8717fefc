from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from typing import Any, Protocol

from .cli_shared import OpError, UsageError

log = logging.getLogger(__name__)

DEFAULT_SIGNER_BIN = "terracli"
DEFAULT_KEYRING_BACKEND = "os"


class Signer(Protocol):
    def address(self) -> str: ...

    def sign(self, unsigned_tx: dict[str, Any], *, chain_id: str, account_number: int, sequence: int) -> dict[str, Any]: ...


class KeyringSigner:
    """Signs with a key held by the node CLI's keyring; no key material touches this process."""

    def __init__(self, key_name: str, *, binary: str = DEFAULT_SIGNER_BIN, keyring_backend: str = DEFAULT_KEYRING_BACKEND) -> None:
        self.key_name = key_name
        self.binary = binary
        self.keyring_backend = keyring_backend
        self._address: str | None = None

    def _run(self, args: list[str], *, label: str) -> str:
        cmd = [self.binary, *args, "--keyring-backend", self.keyring_backend]
        log.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise UsageError(f"signer binary not found: {self.binary} (set MIRROR_CLI_SIGNER_BIN)") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise OpError(f"{label} failed for key {self.key_name!r}: {detail}") from e
        except OSError as e:
            raise OpError(f"failed to run {self.binary}: {e}") from e
        return proc.stdout

    def address(self) -> str:
        if self._address is None:
            out = self._run(["keys", "show", self.key_name, "-a"], label="key lookup").strip()
            if not out:
                raise OpError(f"key lookup returned no address for {self.key_name!r}")
            self._address = out
        return self._address

    def sign(self, unsigned_tx: dict[str, Any], *, chain_id: str, account_number: int, sequence: int) -> dict[str, Any]:
        try:
            fd, path = tempfile.mkstemp(prefix="mirrorcli-unsigned-", suffix=".json")
        except OSError as e:
            raise OpError(f"cannot stage unsigned tx: {e}") from e
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(unsigned_tx, f)
            out = self._run(
                [
                    "tx",
                    "sign",
                    path,
                    "--from",
                    self.key_name,
                    "--chain-id",
                    chain_id,
                    "--account-number",
                    str(account_number),
                    "--sequence",
                    str(sequence),
                    "--offline",
                ],
                label="tx sign",
            )
        finally:
            os.unlink(path)
        try:
            signed = json.loads(out)
        except Exception as e:
            raise OpError(f"invalid signed tx from {self.binary}: {e}") from e
        if not isinstance(signed, dict):
            raise OpError(f"invalid signed tx from {self.binary}: expected object")
        return signed


class AddressOnlySigner:
    """Stands in for a key when ``--from`` is a bare address; only good for ``--generate-only``."""

    def __init__(self, address: str) -> None:
        self._address = address

    def address(self) -> str:
        return self._address

    def sign(self, unsigned_tx: dict[str, Any], *, chain_id: str, account_number: int, sequence: int) -> dict[str, Any]:
        raise UsageError("--from is an address; signing requires a key name (or pass --generate-only)")
