from __future__ import annotations

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)


def bond(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.staking.bond(opts.lp_token, opts.asset_token, opts.amount),
    )


def unbond(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.staking.unbond(opts.asset_token, opts.amount))


def withdraw(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.staking.withdraw(opts.asset_token))


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.staking.get_config())


def get_pool_info(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.staking.get_pool_info(opts.asset_token))


def get_reward_info(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(
        menu,
        lambda mirror: mirror.staking.get_reward_info(opts.staker, opts.asset_token),
    )


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("staking", "Mirror Staking contract functions")
    (
        exec_menu.command("bond <asset-token> <amount>")
        .description(
            "Bond LP tokens for an asset's staking pool",
            {
                "asset-token": "(AccAddress) asset token of the pool",
                "amount": "(Uint128) amount of LP tokens to bond",
            },
        )
        .required_option("--lp-token <AccAddress>", "*LP token contract of the pool")
        .action(bond)
    )
    (
        exec_menu.command("unbond <asset-token> <amount>")
        .description(
            "Unbond LP tokens from an asset's staking pool",
            {
                "asset-token": "(AccAddress) asset token of the pool",
                "amount": "(Uint128) amount of LP tokens to unbond",
            },
        )
        .action(unbond)
    )
    (
        exec_menu.command("withdraw [asset-token]")
        .description(
            "Withdraw staking rewards",
            {"asset-token": "(AccAddress) pool to withdraw from (default: all pools)"},
        )
        .action(withdraw)
    )

    query_menu = registry.create_query_menu("staking", "Mirror Staking contract queries")
    query_menu.command("config").description("Query Mirror Staking contract config").action(get_config)
    (
        query_menu.command("pool-info <asset-token>")
        .description("Query staking pool info", {"asset-token": "(AccAddress) asset token of the pool"})
        .action(get_pool_info)
    )
    (
        query_menu.command("reward-info <staker>")
        .description("Query staker reward info", {"staker": "(AccAddress) staker address"})
        .option("--asset-token <AccAddress>", "restrict to one pool")
        .action(get_reward_info)
    )
