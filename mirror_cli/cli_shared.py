from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


class MirrorCliError(Exception):
    pass


class UsageError(MirrorCliError):
    pass


class OpError(MirrorCliError):
    pass


class PreconditionError(UsageError):
    pass


MIRROR_CLI_NETWORK = "MIRROR_CLI_NETWORK"
MIRROR_CLI_LCD_URL = "MIRROR_CLI_LCD_URL"
MIRROR_CLI_CHAIN_ID = "MIRROR_CLI_CHAIN_ID"
MIRROR_CLI_CONTRACTS = "MIRROR_CLI_CONTRACTS"
MIRROR_CLI_GAS = "MIRROR_CLI_GAS"
MIRROR_CLI_GAS_PRICES = "MIRROR_CLI_GAS_PRICES"
MIRROR_CLI_SIGNER_BIN = "MIRROR_CLI_SIGNER_BIN"
MIRROR_CLI_KEYRING_BACKEND = "MIRROR_CLI_KEYRING_BACKEND"

EXIT_OP_ERROR = 1
EXIT_USAGE_ERROR = 2

_ERROR_CONSOLE = Console(stderr=True)


@dataclass(frozen=True)
class GlobalOpts:
    network: str
    contracts_path: str = ""
    pretty: bool = True
    verbose: bool = False


def _rich_error(msg: str) -> None:
    _ERROR_CONSOLE.print(f"[bold red]error:[/bold red] {escape(msg)}", soft_wrap=True)


def _exit_code_for(err: MirrorCliError) -> int:
    if isinstance(err, UsageError):
        return EXIT_USAGE_ERROR
    return EXIT_OP_ERROR


def _env_or_none(*names: str) -> str | None:
    for n in names:
        v = (os.environ.get(n) or "").strip()
        if v:
            return v
    return None


def _bootstrap_env() -> None:
    # Discover and load .env without overriding already-exported values.
    load_dotenv()


def _configure_logging(*, verbose: bool) -> None:
    logger = logging.getLogger("mirror_cli")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _print_json(obj: Any, *, pretty: bool) -> None:
    if pretty:
        sys.stdout.write(json.dumps(obj, indent=2, sort_keys=True) + "\n")
    else:
        sys.stdout.write(json.dumps(obj, separators=(",", ":"), sort_keys=True) + "\n")


def _print_yaml(obj: Any) -> None:
    sys.stdout.write(yaml.safe_dump(obj, sort_keys=True, default_flow_style=False))


def _print_result(obj: Any, *, pretty: bool, as_yaml: bool) -> None:
    if as_yaml:
        _print_yaml(obj)
    else:
        _print_json(obj, pretty=pretty)


def _load_json_object(*, raw: str, label: str) -> dict[str, Any]:
    try:
        val = json.loads(raw)
    except Exception as e:
        raise UsageError(f"invalid {label}: {e}") from e
    if not isinstance(val, dict):
        raise UsageError(f"invalid {label}: expected JSON object")
    return val
