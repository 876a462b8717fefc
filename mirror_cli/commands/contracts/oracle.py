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


def feed_price(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.oracle.feed_price([(opts.asset_token, format_dec(opts.price))]),
    )


def register_asset(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.oracle.register_asset(opts.asset_token, opts.feeder))


def update_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.oracle.update_config(owner=opts.owner, base_asset=opts.base_asset),
    )


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.oracle.get_config())


def get_feeder(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.oracle.get_feeder(opts.asset_token))


def get_price(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.oracle.get_price(opts.base_asset, opts.quote_asset))


def get_prices(menu: MenuInvocation, opts: ParsedOptions) -> None:
    require_one_of(opts.order_by, ORDER_BY, label="order")
    handle_query_command(
        menu,
        lambda mirror: mirror.oracle.get_prices(opts.start_after, opts.limit, opts.order_by),
    )


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("oracle", "Mirror Oracle contract functions")
    (
        exec_menu.command("feed-price <asset-token> <price>")
        .description(
            "Feed a price for a registered asset",
            {
                "asset-token": "(AccAddress) asset token",
                "price": "(dec) price in the base asset",
            },
        )
        .action(feed_price)
    )
    (
        exec_menu.command("register-asset <asset-token> <feeder>")
        .description(
            "Register an asset and its price feeder",
            {
                "asset-token": "(AccAddress) asset token",
                "feeder": "(AccAddress) address allowed to feed prices",
            },
        )
        .action(register_asset)
    )
    (
        exec_menu.command("update-config")
        .description("Update Mirror Oracle config")
        .option("--owner <AccAddress>", "New owner address")
        .option("--base-asset <string>", "New base asset denom")
        .action(update_config)
    )

    query_menu = registry.create_query_menu("oracle", "Mirror Oracle contract queries")
    query_menu.command("config").description("Query Mirror Oracle contract config").action(get_config)
    (
        query_menu.command("feeder <asset-token>")
        .description("Query the price feeder of an asset", {"asset-token": "(AccAddress) asset token"})
        .action(get_feeder)
    )
    (
        query_menu.command("price <base-asset> <quote-asset>")
        .description(
            "Query the price of an asset pair",
            {
                "base-asset": "(string) base asset (token address or denom)",
                "quote-asset": "(string) quote asset (token address or denom)",
            },
        )
        .action(get_price)
    )
    (
        query_menu.command("prices")
        .description("Query all asset prices")
        .option("--start-after <string>", "asset token to start query from")
        .option("--limit <int>", "max results to return")
        .option("--order-by <string>", "result order ('asc', 'desc')")
        .action(get_prices)
    )
