from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import ContractCall, ContractClient
from .token import Cw20Token

VOTE_OPTIONS = ("yes", "no")
POLL_STATES = ("in_progress", "passed", "rejected", "executed")


@dataclass(frozen=True)
class PollExecuteMsg:
    contract: str
    msg: str

    def to_data(self) -> dict[str, str]:
        return {"contract": self.contract, "msg": self.msg}


class MirrorGov(ContractClient):
    def update_config(
        self,
        *,
        owner: str | None = None,
        effective_delay: int | None = None,
        expiration_period: int | None = None,
        proposal_deposit: str | None = None,
        quorum: str | None = None,
        threshold: str | None = None,
        voting_period: int | None = None,
    ) -> ContractCall:
        return self._call(
            {
                "update_config": {
                    "owner": owner,
                    "effective_delay": effective_delay,
                    "expiration_period": expiration_period,
                    "proposal_deposit": proposal_deposit,
                    "quorum": quorum,
                    "threshold": threshold,
                    "voting_period": voting_period,
                }
            }
        )

    def cast_vote(self, poll_id: int, vote: str, amount: int) -> ContractCall:
        return self._call({"cast_vote": {"poll_id": poll_id, "vote": vote, "amount": str(amount)}})

    def create_poll(
        self,
        mirror_token: str,
        deposit: int,
        title: str,
        description: str,
        link: str | None = None,
        execute_msg: PollExecuteMsg | None = None,
    ) -> ContractCall:
        # Polls are opened by sending the deposit through the MIR token.
        return Cw20Token(self.lcd, mirror_token).send(
            self.address,
            deposit,
            {
                "create_poll": {
                    "title": title,
                    "description": description,
                    "link": link,
                    "execute_msg": execute_msg.to_data() if execute_msg else None,
                }
            },
        )

    def execute_poll(self, poll_id: int) -> ContractCall:
        return self._call({"execute_poll": {"poll_id": poll_id}})

    def end_poll(self, poll_id: int) -> ContractCall:
        return self._call({"end_poll": {"poll_id": poll_id}})

    def expire_poll(self, poll_id: int) -> ContractCall:
        return self._call({"expire_poll": {"poll_id": poll_id}})

    def stake_voting_tokens(self, mirror_token: str, amount: int) -> ContractCall:
        return Cw20Token(self.lcd, mirror_token).send(self.address, amount, {"stake_voting_tokens": {}})

    def withdraw_voting_tokens(self, amount: int | None = None) -> ContractCall:
        return self._call(
            {"withdraw_voting_tokens": {"amount": str(amount) if amount is not None else None}}
        )

    def get_config(self) -> Any:
        return self._query({"config": {}})

    def get_state(self) -> Any:
        return self._query({"state": {}})

    def get_poll(self, poll_id: int) -> Any:
        return self._query({"poll": {"poll_id": poll_id}})

    def get_polls(
        self,
        filter: str | None = None,
        start_after: int | None = None,
        limit: int | None = None,
    ) -> Any:
        return self._query({"polls": {"filter": filter, "start_after": start_after, "limit": limit}})

    def get_staker(self, address: str) -> Any:
        return self._query({"staker": {"address": address}})

    def get_voters(self, poll_id: int, start_after: str | None = None, limit: int | None = None) -> Any:
        return self._query({"voters": {"poll_id": poll_id, "start_after": start_after, "limit": limit}})
