from .base import Asset, Coin, ContractCall, strip_none
from .gov import POLL_STATES, VOTE_OPTIONS, PollExecuteMsg
from .mirror import Mirror
from .oracle import ORDER_BY

__all__ = [
    "Asset",
    "Coin",
    "ContractCall",
    "Mirror",
    "ORDER_BY",
    "POLL_STATES",
    "PollExecuteMsg",
    "VOTE_OPTIONS",
    "strip_none",
]
