from __future__ import annotations

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)


def spend(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.community.spend(opts.recipient, opts.amount))


def update_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.community.update_config(owner=opts.owner, spend_limit=opts.spend_limit),
    )


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.community.get_config())


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("community", "Mirror Community contract functions")
    (
        exec_menu.command("spend <recipient> <amount>")
        .description(
            "Spend MIR from the community pool",
            {
                "recipient": "(AccAddress) recipient address",
                "amount": "(Uint128) amount of MIR tokens to send",
            },
        )
        .action(spend)
    )
    (
        exec_menu.command("update-config")
        .description("Update Mirror Community config")
        .option("--owner <AccAddress>", "New owner address")
        .option("--spend-limit <Uint128>", "New spend limit")
        .action(update_config)
    )

    query_menu = registry.create_query_menu("community", "Mirror Community contract queries")
    query_menu.command("config").description("Query Mirror Community contract config").action(get_config)
