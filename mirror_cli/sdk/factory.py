from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient


class MirrorFactory(ContractClient):
    def update_config(self, *, owner: str | None = None, token_code_id: int | None = None) -> ContractCall:
        return self._call({"update_config": {"owner": owner, "token_code_id": token_code_id}})

    def whitelist(
        self,
        name: str,
        symbol: str,
        oracle_feeder: str,
        *,
        auction_discount: str,
        min_collateral_ratio: str,
        weight: int | None = None,
    ) -> ContractCall:
        return self._call(
            {
                "whitelist": {
                    "name": name,
                    "symbol": symbol,
                    "oracle_feeder": oracle_feeder,
                    "params": {
                        "auction_discount": auction_discount,
                        "min_collateral_ratio": min_collateral_ratio,
                        "weight": weight,
                    },
                }
            }
        )

    def update_weight(self, asset_token: str, weight: int) -> ContractCall:
        return self._call({"update_weight": {"asset_token": asset_token, "weight": weight}})

    def distribute(self) -> ContractCall:
        return self._call({"distribute": {}})

    def revoke_asset(self, asset_token: str, end_price: str) -> ContractCall:
        return self._call({"revoke_asset": {"asset_token": asset_token, "end_price": end_price}})

    def migrate_asset(self, name: str, symbol: str, from_token: str, end_price: str) -> ContractCall:
        return self._call(
            {
                "migrate_asset": {
                    "name": name,
                    "symbol": symbol,
                    "from_token": from_token,
                    "end_price": end_price,
                }
            }
        )

    def get_config(self) -> Any:
        return self._query({"config": {}})

    def get_distribution_info(self) -> Any:
        return self._query({"distribution_info": {}})
