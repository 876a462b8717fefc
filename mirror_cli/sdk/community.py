from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient


class MirrorCommunity(ContractClient):
    def spend(self, recipient: str, amount: int) -> ContractCall:
        return self._call({"spend": {"recipient": recipient, "amount": str(amount)}})

    def update_config(self, *, owner: str | None = None, spend_limit: int | None = None) -> ContractCall:
        return self._call(
            {
                "update_config": {
                    "owner": owner,
                    "spend_limit": str(spend_limit) if spend_limit is not None else None,
                }
            }
        )

    def get_config(self) -> Any:
        return self._query({"config": {}})
