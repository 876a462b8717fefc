from __future__ import annotations

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)


def convert(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.collector.convert(opts.asset_token))


def distribute(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.collector.distribute())


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.collector.get_config())


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("collector", "Mirror Collector contract functions")
    (
        exec_menu.command("convert <asset-token>")
        .description("Convert collected fees of an asset to MIR", {"asset-token": "(AccAddress) asset token"})
        .action(convert)
    )
    exec_menu.command("distribute").description("Send collected MIR to governance").action(distribute)

    query_menu = registry.create_query_menu("collector", "Mirror Collector contract queries")
    query_menu.command("config").description("Query Mirror Collector contract config").action(get_config)
