from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient, b64_json


class Cw20Token(ContractClient):
    def transfer(self, recipient: str, amount: int) -> ContractCall:
        return self._call({"transfer": {"recipient": recipient, "amount": str(amount)}})

    def send(self, contract: str, amount: int, msg: dict[str, Any] | None = None) -> ContractCall:
        return self._call(
            {
                "send": {
                    "contract": contract,
                    "amount": str(amount),
                    "msg": b64_json(msg) if msg is not None else None,
                }
            }
        )

    def burn(self, amount: int) -> ContractCall:
        return self._call({"burn": {"amount": str(amount)}})

    def get_balance(self, address: str) -> Any:
        return self._query({"balance": {"address": address}})

    def get_token_info(self) -> Any:
        return self._query({"token_info": {}})
