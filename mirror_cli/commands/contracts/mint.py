from __future__ import annotations

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)
from ...parse_input import format_dec, require_one_of
from ...sdk import ORDER_BY


def update_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.mint.update_config(
            owner=opts.owner,
            oracle=opts.oracle,
            collector=opts.collector,
            token_code_id=opts.token_code_id,
            protocol_fee_rate=format_dec(opts.protocol_fee_rate),
        ),
    )


def update_asset(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.mint.update_asset(
            opts.asset_token,
            auction_discount=format_dec(opts.auction_discount),
            min_collateral_ratio=format_dec(opts.min_collateral_ratio),
        ),
    )


def open_position(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.mint.open_position(
            opts.collateral,
            opts.asset_token,
            format_dec(opts.collateral_ratio),
        ),
    )


def deposit(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.mint.deposit(opts.position_idx, opts.collateral))


def withdraw(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.mint.withdraw(opts.position_idx, opts.collateral))


def mint(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.mint.mint(opts.position_idx, opts.asset))


def burn(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.mint.burn(opts.position_idx, opts.asset))


def auction(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.mint.auction(opts.position_idx, opts.asset))


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.mint.get_config())


def get_asset_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.mint.get_asset_config(opts.asset_token))


def get_position(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.mint.get_position(opts.position_idx))


def get_positions(menu: MenuInvocation, opts: ParsedOptions) -> None:
    require_one_of(opts.order_by, ORDER_BY, label="order")
    handle_query_command(
        menu,
        lambda mirror: mirror.mint.get_positions(
            opts.owner,
            opts.asset_token,
            opts.start_after,
            opts.limit,
            opts.order_by,
        ),
    )


def get_next_position_idx(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.mint.get_next_position_idx())


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("mint", "Mirror Mint contract functions")
    (
        exec_menu.command("update-config")
        .description("Update Mirror Mint config")
        .option("--owner <AccAddress>", "New owner address")
        .option("--oracle <AccAddress>", "New oracle contract")
        .option("--collector <AccAddress>", "New collector contract")
        .option("--token-code-id <int>", "New code id for asset tokens")
        .option("--protocol-fee-rate <dec>", "New protocol fee rate")
        .action(update_config)
    )
    (
        exec_menu.command("update-asset <asset-token>")
        .description("Update an asset's mint parameters", {"asset-token": "(AccAddress) asset token"})
        .option("--auction-discount <dec>", "New liquidation auction discount")
        .option("--min-collateral-ratio <dec>", "New minimum collateral ratio")
        .action(update_asset)
    )
    (
        exec_menu.command("open-position <collateral> <asset-token> <collateral-ratio>")
        .description(
            "Open a collateralized debt position",
            {
                "collateral": "(Asset) collateral, e.g. 1000000uusd or 100terra1...",
                "asset-token": "(AccAddress) mAsset to mint",
                "collateral-ratio": "(dec) initial collateral ratio",
            },
        )
        .action(open_position)
    )
    (
        exec_menu.command("deposit <position-idx> <collateral>")
        .description(
            "Deposit collateral into a position",
            {
                "position-idx": "(Uint128) position index",
                "collateral": "(Asset) collateral to add",
            },
        )
        .action(deposit)
    )
    (
        exec_menu.command("withdraw <position-idx> <collateral>")
        .description(
            "Withdraw collateral from a position",
            {
                "position-idx": "(Uint128) position index",
                "collateral": "(Asset) collateral to remove",
            },
        )
        .action(withdraw)
    )
    (
        exec_menu.command("mint <position-idx> <asset>")
        .description(
            "Mint more of a position's mAsset",
            {
                "position-idx": "(Uint128) position index",
                "asset": "(Asset) amount of mAsset to mint",
            },
        )
        .action(mint)
    )
    (
        exec_menu.command("burn <position-idx> <asset>")
        .description(
            "Burn mAsset to repay a position",
            {
                "position-idx": "(Uint128) position index",
                "asset": "(Asset) amount of mAsset to burn",
            },
        )
        .action(burn)
    )
    (
        exec_menu.command("auction <position-idx> <asset>")
        .description(
            "Buy collateral from an under-collateralized position",
            {
                "position-idx": "(Uint128) position index",
                "asset": "(Asset) amount of mAsset to pay",
            },
        )
        .action(auction)
    )

    query_menu = registry.create_query_menu("mint", "Mirror Mint contract queries")
    query_menu.command("config").description("Query Mirror Mint contract config").action(get_config)
    (
        query_menu.command("asset-config <asset-token>")
        .description("Query an asset's mint parameters", {"asset-token": "(AccAddress) asset token"})
        .action(get_asset_config)
    )
    (
        query_menu.command("position <position-idx>")
        .description("Query a position", {"position-idx": "(Uint128) position index"})
        .action(get_position)
    )
    (
        query_menu.command("positions")
        .description("Query positions")
        .option("--owner <AccAddress>", "owner of the positions")
        .option("--asset-token <AccAddress>", "restrict to one mAsset")
        .option("--start-after <Uint128>", "position index to start after")
        .option("--limit <int>", "max results")
        .option("--order-by <string>", "asc or desc")
        .action(get_positions)
    )
    (
        query_menu.command("next-position-idx")
        .description("Query the next position index")
        .action(get_next_position_idx)
    )
