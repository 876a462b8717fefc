from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient
from .token import Cw20Token


class MirrorStaking(ContractClient):
    def bond(self, lp_token: str, asset_token: str, amount: int) -> ContractCall:
        return Cw20Token(self.lcd, lp_token).send(self.address, amount, {"bond": {"asset_token": asset_token}})

    def unbond(self, asset_token: str, amount: int) -> ContractCall:
        return self._call({"unbond": {"asset_token": asset_token, "amount": str(amount)}})

    def withdraw(self, asset_token: str | None = None) -> ContractCall:
        return self._call({"withdraw": {"asset_token": asset_token}})

    def get_config(self) -> Any:
        return self._query({"config": {}})

    def get_pool_info(self, asset_token: str) -> Any:
        return self._query({"pool_info": {"asset_token": asset_token}})

    def get_reward_info(self, staker: str, asset_token: str | None = None) -> Any:
        return self._query({"reward_info": {"staker": staker, "asset_token": asset_token}})
