from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient

ORDER_BY = ("asc", "desc")


class MirrorOracle(ContractClient):
    def feed_price(self, prices: list[tuple[str, str]]) -> ContractCall:
        return self._call({"feed_price": {"prices": [[asset, price] for asset, price in prices]}})

    def register_asset(self, asset_token: str, feeder: str) -> ContractCall:
        return self._call({"register_asset": {"asset_token": asset_token, "feeder": feeder}})

    def update_config(self, *, owner: str | None = None, base_asset: str | None = None) -> ContractCall:
        return self._call({"update_config": {"owner": owner, "base_asset": base_asset}})

    def get_config(self) -> Any:
        return self._query({"config": {}})

    def get_feeder(self, asset_token: str) -> Any:
        return self._query({"feeder": {"asset_token": asset_token}})

    def get_price(self, base_asset: str, quote_asset: str) -> Any:
        return self._query({"price": {"base_asset": base_asset, "quote_asset": quote_asset}})

    def get_prices(
        self,
        start_after: str | None = None,
        limit: int | None = None,
        order_by: str | None = None,
    ) -> Any:
        return self._query({"prices": {"start_after": start_after, "limit": limit, "order_by": order_by}})
