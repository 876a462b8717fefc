"""Typed conversion of raw command-line tokens.

Every parser returns ``None`` for ``None`` so optional options stay optional
downstream; nothing here applies a default.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable

from .bech32 import is_acc_address
from .cli_shared import UsageError
from .sdk.base import Asset

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT128_MAX = 2**128 - 1

_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_UINT_RE = re.compile(r"^[0-9]+$")
_ASSET_RE = re.compile(r"^([0-9]+)([A-Za-z][A-Za-z0-9/]*)$")


class InvalidAddress(UsageError):
    pass


class InvalidInteger(UsageError):
    pass


class InvalidAmount(UsageError):
    pass


class InvalidDecimal(UsageError):
    pass


class InvalidChoice(UsageError):
    pass


class InvalidAsset(UsageError):
    pass


def parse_acc_address(raw: str | None) -> str | None:
    if raw is None:
        return None
    value = str(raw).strip()
    if not is_acc_address(value):
        raise InvalidAddress(f"invalid Terra account address: {raw!r}")
    return value.lower()


def parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    value = str(raw).strip()
    if not _INT_RE.match(value):
        raise InvalidInteger(f"invalid integer: {raw!r}")
    n = int(value, 10)
    if n < INT64_MIN or n > INT64_MAX:
        raise InvalidInteger(f"integer out of range: {raw!r}")
    return n


def parse_uint128(raw: str | None) -> int | None:
    if raw is None:
        return None
    value = str(raw).strip()
    if not _UINT_RE.match(value):
        raise InvalidAmount(f"invalid Uint128 amount: {raw!r} (expected a non-negative integer)")
    n = int(value, 10)
    if n > UINT128_MAX:
        raise InvalidAmount(f"Uint128 amount out of range: {raw!r}")
    return n


def parse_dec(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    value = str(raw).strip()
    try:
        d = Decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise InvalidDecimal(f"invalid decimal: {raw!r}") from e
    if not d.is_finite():
        raise InvalidDecimal(f"invalid decimal: {raw!r}")
    return d


def parse_asset(raw: str | None) -> Asset | None:
    """Parse ``<amount><denom>`` or ``<amount><token address>``, e.g. ``1000uusd``."""
    if raw is None:
        return None
    value = str(raw).strip()
    m = _ASSET_RE.match(value)
    if not m:
        raise InvalidAsset(f"invalid asset: {raw!r} (expected e.g. 1000uusd or 1000terra1...)")
    amount = parse_uint128(m.group(1))
    ident = m.group(2)
    if is_acc_address(ident):
        return Asset(amount=amount, token=ident.lower())
    if ident.lower().startswith("terra1"):
        raise InvalidAsset(f"invalid asset token address: {raw!r}")
    return Asset(amount=amount, denom=ident)


def format_dec(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return format(value, "f")


def format_uint128(value: int | None) -> str | None:
    if value is None:
        return None
    return str(value)


def require_one_of(value: str | None, allowed: Iterable[str], *, label: str) -> str | None:
    if value is None:
        return None
    options = list(allowed)
    if value not in options:
        listed = ", ".join(f"'{o}'" for o in options)
        raise InvalidChoice(f"invalid {label} '{value}'; MUST be one of: {listed}")
    return value


PARSERS: dict[str, Callable[[Any], Any]] = {
    "AccAddress": parse_acc_address,
    "int": parse_int,
    "Uint128": parse_uint128,
    "dec": parse_dec,
    "Asset": parse_asset,
}


def parser_for(type_name: str) -> Callable[[Any], Any] | None:
    return PARSERS.get(type_name)
