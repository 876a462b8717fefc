from __future__ import annotations

from typing import Any

from .base import ContractCall, ContractClient


class MirrorCollector(ContractClient):
    def convert(self, asset_token: str) -> ContractCall:
        return self._call({"convert": {"asset_token": asset_token}})

    def distribute(self) -> ContractCall:
        return self._call({"distribute": {}})

    def get_config(self) -> Any:
        return self._query({"config": {}})
