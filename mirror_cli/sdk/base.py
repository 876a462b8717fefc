from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from typing import Any, Protocol


class ContractQuerier(Protocol):
    def contract_query(self, contract: str, query_msg: dict[str, Any]) -> Any: ...


def strip_none(obj: Any) -> Any:
    """Drop ``None`` values from nested dicts so unset options never reach a contract."""
    if isinstance(obj, dict):
        return {k: strip_none(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list):
        return [strip_none(v) for v in obj]
    return obj


def b64_json(obj: dict[str, Any]) -> str:
    raw = json.dumps(strip_none(obj), separators=(",", ":"), sort_keys=True).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int

    def to_data(self) -> dict[str, str]:
        return {"denom": self.denom, "amount": str(self.amount)}


@dataclass(frozen=True)
class ContractCall:
    """One MsgExecuteContract, minus the sender which is only known at signing time."""

    contract: str
    execute_msg: dict[str, Any]
    coins: tuple[Coin, ...] = field(default_factory=tuple)

    def to_msg(self, sender: str) -> dict[str, Any]:
        return {
            "type": "wasm/MsgExecuteContract",
            "value": {
                "sender": sender,
                "contract": self.contract,
                "execute_msg": b64_json(self.execute_msg),
                "coins": [c.to_data() for c in self.coins],
            },
        }


class ContractClient:
    def __init__(self, lcd: ContractQuerier, address: str) -> None:
        self.lcd = lcd
        self.address = address

    def _call(self, msg: dict[str, Any], *, coins: tuple[Coin, ...] = ()) -> ContractCall:
        return ContractCall(contract=self.address, execute_msg=strip_none(msg), coins=coins)

    def _query(self, msg: dict[str, Any]) -> Any:
        return self.lcd.contract_query(self.address, strip_none(msg))


@dataclass(frozen=True)
class Asset:
    """An amount of either a CW20 token or a native denom."""

    amount: int
    token: str | None = None
    denom: str | None = None

    @property
    def is_native(self) -> bool:
        return self.denom is not None

    def info(self) -> dict[str, Any]:
        if self.is_native:
            return {"native_token": {"denom": self.denom}}
        return {"token": {"contract_addr": self.token}}

    def to_data(self) -> dict[str, Any]:
        return {"info": self.info(), "amount": str(self.amount)}

    def to_coin(self) -> Coin:
        return Coin(denom=str(self.denom), amount=self.amount)
