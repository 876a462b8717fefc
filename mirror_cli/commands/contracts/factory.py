from __future__ import annotations

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)
from ...parse_input import format_dec


def update_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.factory.update_config(owner=opts.owner, token_code_id=opts.token_code_id),
    )


def whitelist(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.factory.whitelist(
            opts.name,
            opts.symbol,
            opts.oracle_feeder,
            auction_discount=format_dec(opts.auction_discount),
            min_collateral_ratio=format_dec(opts.min_collateral_ratio),
            weight=opts.weight,
        ),
    )


def update_weight(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.factory.update_weight(opts.asset_token, opts.weight))


def distribute(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.factory.distribute())


def revoke_asset(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.factory.revoke_asset(opts.asset_token, format_dec(opts.end_price)),
    )


def migrate_asset(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.factory.migrate_asset(
            opts.name,
            opts.symbol,
            opts.from_token,
            format_dec(opts.end_price),
        ),
    )


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.factory.get_config())


def get_distribution_info(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.factory.get_distribution_info())


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("factory", "Mirror Factory contract functions")
    (
        exec_menu.command("update-config")
        .description("Update Mirror Factory config")
        .option("--owner <AccAddress>", "New owner address")
        .option("--token-code-id <int>", "New code id for asset tokens")
        .action(update_config)
    )
    (
        exec_menu.command("whitelist <name> <symbol> <oracle-feeder>")
        .description(
            "Whitelist a new mAsset",
            {
                "name": "name of the asset, e.g. \"Mirrored Apple\"",
                "symbol": "symbol of the asset, e.g. mAAPL",
                "oracle-feeder": "(AccAddress) address allowed to feed prices",
            },
        )
        .required_option("--auction-discount <dec>", "*Liquidation auction discount")
        .required_option("--min-collateral-ratio <dec>", "*Minimum collateral ratio")
        .option("--weight <int>", "Reward distribution weight")
        .action(whitelist)
    )
    (
        exec_menu.command("update-weight <asset-token> <weight>")
        .description(
            "Change an asset's reward distribution weight",
            {
                "asset-token": "(AccAddress) asset token",
                "weight": "(int) new weight",
            },
        )
        .action(update_weight)
    )
    exec_menu.command("distribute").description("Distribute minted MIR to the staking pools").action(distribute)
    (
        exec_menu.command("revoke-asset <asset-token> <end-price>")
        .description(
            "Delist an asset and freeze its price",
            {
                "asset-token": "(AccAddress) asset token",
                "end-price": "(dec) final oracle price",
            },
        )
        .action(revoke_asset)
    )
    (
        exec_menu.command("migrate-asset <name> <symbol> <from-token> <end-price>")
        .description(
            "Replace an asset after a corporate event",
            {
                "name": "name of the new asset",
                "symbol": "symbol of the new asset",
                "from-token": "(AccAddress) asset token being migrated",
                "end-price": "(dec) final price of the old asset",
            },
        )
        .action(migrate_asset)
    )

    query_menu = registry.create_query_menu("factory", "Mirror Factory contract queries")
    query_menu.command("config").description("Query Mirror Factory contract config").action(get_config)
    (
        query_menu.command("distribution-info")
        .description("Query reward distribution weights")
        .action(get_distribution_info)
    )
