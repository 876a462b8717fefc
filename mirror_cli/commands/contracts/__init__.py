from __future__ import annotations

from typing import Callable

from ...contract_menu import CommandRegistry
from . import collector, community, factory, gov, mint, oracle, staking, token

# Mirror contracts, then the generic CW20 token commands.
CONTRACT_MODULES = [collector, community, factory, gov, mint, oracle, staking, token]


def register_all(registry: CommandRegistry, modules: list | None = None) -> CommandRegistry:
    for mod in CONTRACT_MODULES if modules is None else modules:
        register: Callable[[CommandRegistry], None] = mod.register
        register(registry)
    return registry


def default_registry() -> CommandRegistry:
    return register_all(CommandRegistry())
