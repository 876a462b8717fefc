from __future__ import annotations

import json

from ...cli_shared import UsageError
from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)


def _hook_msg(raw: str | None) -> dict | None:
    if raw is None:
        return None
    try:
        msg = json.loads(raw)
    except ValueError as e:
        raise UsageError(f"invalid --msg: {e}") from e
    if not isinstance(msg, dict):
        raise UsageError("invalid --msg: expected JSON object")
    return msg


def transfer(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.token(opts.token).transfer(opts.recipient, opts.amount))


def send(menu: MenuInvocation, opts: ParsedOptions) -> None:
    msg = _hook_msg(opts.msg)
    handle_exec_command(menu, lambda mirror: mirror.token(opts.token).send(opts.contract, opts.amount, msg))


def burn(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.token(opts.token).burn(opts.amount))


def get_balance(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.token(opts.token).get_balance(opts.address))


def get_info(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.token(opts.token).get_token_info())


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("token", "CW20 token contract functions")
    (
        exec_menu.command("transfer <token> <recipient> <amount>")
        .description(
            "Transfer tokens",
            {
                "token": "(AccAddress) token contract",
                "recipient": "(AccAddress) recipient address",
                "amount": "(Uint128) amount to transfer",
            },
        )
        .action(transfer)
    )
    (
        exec_menu.command("send <token> <contract> <amount>")
        .description(
            "Send tokens to a contract, optionally with a hook message",
            {
                "token": "(AccAddress) token contract",
                "contract": "(AccAddress) receiving contract",
                "amount": "(Uint128) amount to send",
            },
        )
        .option("--msg <json>", "hook message for the receiving contract")
        .action(send)
    )
    (
        exec_menu.command("burn <token> <amount>")
        .description(
            "Burn tokens",
            {"token": "(AccAddress) token contract", "amount": "(Uint128) amount to burn"},
        )
        .action(burn)
    )

    query_menu = registry.create_query_menu("token", "CW20 token contract queries")
    (
        query_menu.command("balance <token> <address>")
        .description(
            "Query token balance",
            {"token": "(AccAddress) token contract", "address": "(AccAddress) holder address"},
        )
        .action(get_balance)
    )
    (
        query_menu.command("info <token>")
        .description("Query token info", {"token": "(AccAddress) token contract"})
        .action(get_info)
    )
