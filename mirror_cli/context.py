from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal
from pathlib import Path
from typing import Any, Mapping

from .bech32 import is_acc_address
from .cli_shared import (
    MIRROR_CLI_CHAIN_ID,
    MIRROR_CLI_CONTRACTS,
    MIRROR_CLI_GAS,
    MIRROR_CLI_GAS_PRICES,
    MIRROR_CLI_KEYRING_BACKEND,
    MIRROR_CLI_LCD_URL,
    MIRROR_CLI_SIGNER_BIN,
    GlobalOpts,
    UsageError,
    _env_or_none,
    _load_json_object,
)
from .signer import DEFAULT_KEYRING_BACKEND, DEFAULT_SIGNER_BIN, AddressOnlySigner, KeyringSigner, Signer

log = logging.getLogger(__name__)

DEFAULT_NETWORK = "columbus-4"
DEFAULT_GAS = 500000
DEFAULT_GAS_PRICES = "0.15uusd"

NETWORKS: dict[str, dict[str, str]] = {
    "columbus-4": {"chain_id": "columbus-4", "lcd_url": "https://lcd.terra.dev"},
    "tequila-0004": {"chain_id": "tequila-0004", "lcd_url": "https://tequila-lcd.terra.dev"},
}

_COIN_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([a-zA-Z][a-zA-Z0-9/]{1,127})$")


@dataclass(frozen=True)
class MenuOptions:
    """Menu-wide options shared by every sub-command of an exec or query menu."""

    chain_id: str | None = None
    lcd_url: str | None = None
    yaml: bool = False
    from_key: str | None = None
    generate_only: bool = False
    fee: str | None = None
    gas: int | None = None
    gas_prices: str | None = None
    memo: str = ""
    broadcast_mode: str = "block"
    account_number: int | None = None
    sequence: int | None = None


@dataclass(frozen=True)
class Fee:
    gas: int
    amount: tuple[tuple[str, int], ...]

    def to_data(self) -> dict[str, Any]:
        return {
            "amount": [{"denom": d, "amount": str(a)} for d, a in self.amount],
            "gas": str(self.gas),
        }


@dataclass(frozen=True)
class ExecutionContext:
    network: str
    chain_id: str
    lcd_url: str
    contracts_path: str = ""
    signer: Signer | None = None
    fee: Fee | None = None

    def load_contracts(self) -> dict[str, str]:
        return load_contracts(self.contracts_path, network=self.network)


def parse_coins(raw: str, *, label: str) -> list[tuple[str, Decimal]]:
    out: list[tuple[str, Decimal]] = []
    for part in str(raw or "").split(","):
        part = part.strip()
        if not part:
            continue
        m = _COIN_RE.match(part)
        if not m:
            raise UsageError(f"invalid {label}: {part!r} (expected e.g. 0.15uusd)")
        out.append((m.group(2), Decimal(m.group(1))))
    if not out:
        raise UsageError(f"invalid {label}: empty")
    return out


def compute_fee(*, gas: int, fee: str | None, gas_prices: str | None) -> Fee:
    if gas <= 0:
        raise UsageError(f"invalid gas: {gas} (must be positive)")
    if fee:
        coins = parse_coins(fee, label="--fee")
        amount: list[tuple[str, int]] = []
        for denom, value in coins:
            if value != value.to_integral_value():
                raise UsageError(f"invalid --fee: {value}{denom} (fee amounts are integers)")
            amount.append((denom, int(value)))
        return Fee(gas=gas, amount=tuple(amount))
    prices = parse_coins(gas_prices or DEFAULT_GAS_PRICES, label="--gas-prices")
    amount = [
        (denom, int((price * gas).to_integral_value(rounding=ROUND_CEILING)))
        for denom, price in prices
    ]
    log.debug("fee for gas=%d at %s: %s", gas, gas_prices or DEFAULT_GAS_PRICES, amount)
    return Fee(gas=gas, amount=tuple(amount))


def _default_contracts_path(network: str) -> Path:
    return Path("~/.mirrorcli").expanduser() / f"contracts-{network}.json"


def load_contracts(path: str, *, network: str) -> dict[str, str]:
    p = Path(path).expanduser() if path else _default_contracts_path(network)
    try:
        raw = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise UsageError(
            f"contracts file not found: {p} (pass --contracts or set {MIRROR_CLI_CONTRACTS})"
        ) from e
    except OSError as e:
        raise UsageError(f"failed to read contracts file {p}: {e}") from e
    doc = _load_json_object(raw=raw, label=f"contracts file {p}")
    # A file may hold several networks keyed by chain id.
    scoped = doc.get(network)
    if isinstance(scoped, dict):
        doc = scoped
    out: dict[str, str] = {}
    for name, addr in doc.items():
        if not isinstance(addr, str):
            continue
        if not is_acc_address(addr):
            raise UsageError(f"invalid address for contract {name!r} in {p}: {addr!r}")
        out[str(name)] = addr.lower()
    log.debug("loaded %d contract addresses from %s", len(out), p)
    return out


def _network_preset(network: str) -> Mapping[str, str]:
    preset = NETWORKS.get(network)
    if preset is None:
        known = ", ".join(sorted(NETWORKS))
        raise UsageError(f"unknown network {network!r} (known: {known})")
    return preset


def _signer_for(from_key: str) -> Signer:
    if is_acc_address(from_key):
        return AddressOnlySigner(from_key)
    return KeyringSigner(
        from_key,
        binary=_env_or_none(MIRROR_CLI_SIGNER_BIN) or DEFAULT_SIGNER_BIN,
        keyring_backend=_env_or_none(MIRROR_CLI_KEYRING_BACKEND) or DEFAULT_KEYRING_BACKEND,
    )


def _gas_from_env() -> int | None:
    raw = _env_or_none(MIRROR_CLI_GAS)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise UsageError(f"invalid {MIRROR_CLI_GAS}: {raw!r}") from e


def resolve_query_context(g: GlobalOpts, opts: MenuOptions) -> ExecutionContext:
    preset = _network_preset(g.network)
    return ExecutionContext(
        network=g.network,
        chain_id=opts.chain_id or _env_or_none(MIRROR_CLI_CHAIN_ID) or preset["chain_id"],
        lcd_url=opts.lcd_url or _env_or_none(MIRROR_CLI_LCD_URL) or preset["lcd_url"],
        contracts_path=g.contracts_path,
    )


def resolve_exec_context(g: GlobalOpts, opts: MenuOptions) -> ExecutionContext:
    base = resolve_query_context(g, opts)
    from_key = (opts.from_key or "").strip()
    if not from_key:
        raise UsageError("missing --from (key name to sign with, or an address with --generate-only)")
    gas = opts.gas if opts.gas is not None else (_gas_from_env() or DEFAULT_GAS)
    fee = compute_fee(
        gas=gas,
        fee=opts.fee,
        gas_prices=opts.gas_prices or _env_or_none(MIRROR_CLI_GAS_PRICES),
    )
    return ExecutionContext(
        network=base.network,
        chain_id=base.chain_id,
        lcd_url=base.lcd_url,
        contracts_path=base.contracts_path,
        signer=_signer_for(from_key),
        fee=fee,
    )
