from __future__ import annotations

from typing import Any

from ..cli_shared import UsageError
from .base import Asset, ContractCall, ContractClient
from .token import Cw20Token


class MirrorMint(ContractClient):
    """Collateralized debt positions. Position indexes travel as Uint128 strings."""

    def update_config(
        self,
        *,
        owner: str | None = None,
        oracle: str | None = None,
        collector: str | None = None,
        token_code_id: int | None = None,
        protocol_fee_rate: str | None = None,
    ) -> ContractCall:
        return self._call(
            {
                "update_config": {
                    "owner": owner,
                    "oracle": oracle,
                    "collector": collector,
                    "token_code_id": token_code_id,
                    "protocol_fee_rate": protocol_fee_rate,
                }
            }
        )

    def update_asset(
        self,
        asset_token: str,
        *,
        auction_discount: str | None = None,
        min_collateral_ratio: str | None = None,
    ) -> ContractCall:
        return self._call(
            {
                "update_asset": {
                    "asset_token": asset_token,
                    "auction_discount": auction_discount,
                    "min_collateral_ratio": min_collateral_ratio,
                }
            }
        )

    def _send_token(self, asset: Asset, hook: dict[str, Any]) -> ContractCall:
        return Cw20Token(self.lcd, str(asset.token)).send(self.address, asset.amount, hook)

    def open_position(self, collateral: Asset, asset_token: str, collateral_ratio: str) -> ContractCall:
        asset_info = {"token": {"contract_addr": asset_token}}
        if collateral.is_native:
            return self._call(
                {
                    "open_position": {
                        "collateral": collateral.to_data(),
                        "asset_info": asset_info,
                        "collateral_ratio": collateral_ratio,
                    }
                },
                coins=(collateral.to_coin(),),
            )
        return self._send_token(
            collateral,
            {"open_position": {"asset_info": asset_info, "collateral_ratio": collateral_ratio}},
        )

    def deposit(self, position_idx: int, collateral: Asset) -> ContractCall:
        if collateral.is_native:
            return self._call(
                {"deposit": {"position_idx": str(position_idx), "collateral": collateral.to_data()}},
                coins=(collateral.to_coin(),),
            )
        return self._send_token(collateral, {"deposit": {"position_idx": str(position_idx)}})

    def withdraw(self, position_idx: int, collateral: Asset) -> ContractCall:
        return self._call({"withdraw": {"position_idx": str(position_idx), "collateral": collateral.to_data()}})

    def mint(self, position_idx: int, asset: Asset) -> ContractCall:
        return self._call({"mint": {"position_idx": str(position_idx), "asset": asset.to_data()}})

    def burn(self, position_idx: int, asset: Asset) -> ContractCall:
        if asset.is_native:
            raise UsageError(f"burn takes a minted asset token, not native {asset.denom!r}")
        return self._send_token(asset, {"burn": {"position_idx": str(position_idx)}})

    def auction(self, position_idx: int, asset: Asset) -> ContractCall:
        if asset.is_native:
            raise UsageError(f"auction takes a minted asset token, not native {asset.denom!r}")
        return self._send_token(asset, {"auction": {"position_idx": str(position_idx)}})

    def get_config(self) -> Any:
        return self._query({"config": {}})

    def get_asset_config(self, asset_token: str) -> Any:
        return self._query({"asset_config": {"asset_token": asset_token}})

    def get_position(self, position_idx: int) -> Any:
        return self._query({"position": {"position_idx": str(position_idx)}})

    def get_positions(
        self,
        owner_addr: str | None = None,
        asset_token: str | None = None,
        start_after: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> Any:
        return self._query(
            {
                "positions": {
                    "owner_addr": owner_addr,
                    "asset_token": asset_token,
                    "start_after": str(start_after) if start_after is not None else None,
                    "limit": limit,
                    "order_by": order_by,
                }
            }
        )

    def get_next_position_idx(self) -> Any:
        return self._query({"next_position_idx": {}})
