from __future__ import annotations

from typing import Callable, Mapping, Union

from ..cli_shared import UsageError
from .base import ContractQuerier
from .collector import MirrorCollector
from .community import MirrorCommunity
from .factory import MirrorFactory
from .gov import MirrorGov
from .mint import MirrorMint
from .oracle import MirrorOracle
from .staking import MirrorStaking
from .token import Cw20Token

# Either the address book itself or a loader called on first use.
ContractBook = Union[Mapping[str, str], Callable[[], Mapping[str, str]]]


class Mirror:
    """Per-invocation handle over the Mirror contracts named in the address book."""

    def __init__(self, lcd: ContractQuerier, contracts: ContractBook) -> None:
        self.lcd = lcd
        self._contracts_source = contracts
        self._contracts: dict[str, str] | None = None

    @property
    def contracts(self) -> dict[str, str]:
        if self._contracts is None:
            src = self._contracts_source
            self._contracts = dict(src() if callable(src) else src)
        return self._contracts

    def _address(self, name: str) -> str:
        addr = str(self.contracts.get(name) or "").strip()
        if not addr:
            raise UsageError(f"missing contract address for {name!r} (add it to the contracts file)")
        return addr

    @property
    def mirror_token(self) -> str:
        return self._address("mirror_token")

    @property
    def gov(self) -> MirrorGov:
        return MirrorGov(self.lcd, self._address("gov"))

    @property
    def staking(self) -> MirrorStaking:
        return MirrorStaking(self.lcd, self._address("staking"))

    @property
    def factory(self) -> MirrorFactory:
        return MirrorFactory(self.lcd, self._address("factory"))

    @property
    def mint(self) -> MirrorMint:
        return MirrorMint(self.lcd, self._address("mint"))

    @property
    def oracle(self) -> MirrorOracle:
        return MirrorOracle(self.lcd, self._address("oracle"))

    @property
    def collector(self) -> MirrorCollector:
        return MirrorCollector(self.lcd, self._address("collector"))

    @property
    def community(self) -> MirrorCommunity:
        return MirrorCommunity(self.lcd, self._address("community"))

    def token(self, address: str) -> Cw20Token:
        return Cw20Token(self.lcd, address)
