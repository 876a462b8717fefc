from __future__ import annotations

import base64

from ...contract_menu import (
    CommandRegistry,
    MenuInvocation,
    ParsedOptions,
    handle_exec_command,
    handle_query_command,
)
from ...parse_input import format_dec, format_uint128, require_one_of
from ...sdk import POLL_STATES, VOTE_OPTIONS, PollExecuteMsg


def update_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.gov.update_config(
            owner=opts.owner,
            effective_delay=opts.effective_delay,
            expiration_period=opts.expiration_period,
            proposal_deposit=format_uint128(opts.proposal_deposit),
            quorum=format_dec(opts.quorum),
            threshold=format_dec(opts.threshold),
            voting_period=opts.voting_period,
        ),
    )


def cast_vote(menu: MenuInvocation, opts: ParsedOptions) -> None:
    require_one_of(opts.vote_option, VOTE_OPTIONS, label="vote option")
    handle_exec_command(
        menu,
        lambda mirror: mirror.gov.cast_vote(opts.poll_id, opts.vote_option, opts.amount),
    )


def poll_execute_msg(execute_to: str | None, execute_msg: str | None) -> PollExecuteMsg | None:
    if execute_to is None or execute_msg is None:
        return None
    return PollExecuteMsg(
        contract=execute_to,
        msg=base64.b64encode(execute_msg.encode("utf-8")).decode("ascii"),
    )


def create_poll(menu: MenuInvocation, opts: ParsedOptions) -> None:
    execute_msg = poll_execute_msg(opts.execute_to, opts.execute_msg)
    handle_exec_command(
        menu,
        lambda mirror: mirror.gov.create_poll(
            mirror.mirror_token,
            opts.deposit,
            opts.title,
            opts.desc,
            opts.link,
            execute_msg,
        ),
    )


def execute_poll(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.gov.execute_poll(opts.poll_id))


def end_poll(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.gov.end_poll(opts.poll_id))


def expire_poll(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.gov.expire_poll(opts.poll_id))


def stake(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(
        menu,
        lambda mirror: mirror.gov.stake_voting_tokens(mirror.mirror_token, opts.amount),
    )


def unstake(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_exec_command(menu, lambda mirror: mirror.gov.withdraw_voting_tokens(opts.amount))


def get_config(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.gov.get_config())


def get_poll(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.gov.get_poll(opts.poll_id))


def get_polls(menu: MenuInvocation, opts: ParsedOptions) -> None:
    require_one_of(opts.filter, POLL_STATES, label="filter")
    handle_query_command(
        menu,
        lambda mirror: mirror.gov.get_polls(opts.filter, opts.start_after, opts.limit),
    )


def get_staker(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.gov.get_staker(opts.address))


def get_state(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(menu, lambda mirror: mirror.gov.get_state())


def get_voters(menu: MenuInvocation, opts: ParsedOptions) -> None:
    handle_query_command(
        menu,
        lambda mirror: mirror.gov.get_voters(opts.poll_id, opts.start_after, opts.limit),
    )


def register(registry: CommandRegistry) -> None:
    exec_menu = registry.create_exec_menu("gov", "Mirror Gov contract functions")
    (
        exec_menu.command("update-config")
        .description("Update Mirror Gov config")
        .option("--owner <AccAddress>", "New owner address")
        .option("--effective-delay <int>", "New effective delay")
        .option("--expiration-period <int>", "New expiration period")
        .option("--proposal-deposit <Uint128>", "New min proposal deposit")
        .option("--quorum <dec>", "New quorum %")
        .option("--threshold <dec>", "New threshold %")
        .option("--voting-period <int>", "New voting period (sec)")
        .action(update_config)
    )
    (
        exec_menu.command("cast-vote <poll-id> <vote-option> <amount>")
        .description(
            "Vote in an active poll",
            {
                "poll-id": "(int) Poll ID",
                "vote-option": "(string) 'yes' or 'no'",
                "amount": "(Uint128) amount of staked MIR voting power to allocate",
            },
        )
        .action(cast_vote)
    )
    (
        exec_menu.command("create-poll")
        .description("Create a new poll")
        .required_option("--title <string>", "*Title of poll")
        .required_option("--desc <string>", "*Poll description")
        .required_option("--deposit <Uint128>", "*deposit amount of MIR tokens")
        .option("--link <url>", "URL with more information")
        .option("--execute-to <AccAddress>", "contract to execute on (specify message with --execute-msg)")
        .option("--execute-msg <json>", "message to execute")
        .paired("--execute-to", "--execute-msg")
        .action(create_poll)
    )
    (
        exec_menu.command("execute-poll <poll-id>")
        .description("Executes the poll", {"poll-id": "(int) poll id"})
        .action(execute_poll)
    )
    (
        exec_menu.command("end-poll <poll-id>")
        .description("Ends a poll", {"poll-id": "(int) poll id"})
        .action(end_poll)
    )
    (
        exec_menu.command("expire-poll <poll-id>")
        .description("Expires a poll", {"poll-id": "(int) poll id"})
        .action(expire_poll)
    )
    (
        exec_menu.command("stake <amount>")
        .description("Stake MIR tokens in governance", {"amount": "(Uint128) amount of MIR tokens to stake"})
        .action(stake)
    )
    (
        exec_menu.command("unstake [amount]")
        .description(
            "Unstake MIR tokens in governance",
            {"amount": "(Uint128) amount of MIR tokens to unstake (default: all)"},
        )
        .action(unstake)
    )

    query_menu = registry.create_query_menu("gov", "Mirror Gov contract queries")
    query_menu.command("config").description("Query Mirror Gov contract config").action(get_config)
    (
        query_menu.command("poll <poll-id>")
        .description("Query poll", {"poll-id": "(int) poll id"})
        .action(get_poll)
    )
    (
        query_menu.command("polls")
        .description("Query all polls")
        .option("--filter <string>", "poll state to filter ('in_progress', 'passed', 'rejected', 'executed')")
        .option("--start-after <int>", "poll ID to start query from")
        .option("--limit <int>", "max results to return")
        .action(get_polls)
    )
    (
        query_menu.command("staker <address>")
        .description("Query MIR staker", {"address": "(AccAddress) staker address to query"})
        .action(get_staker)
    )
    query_menu.command("state").description("Query Mirror Gov state").action(get_state)
    (
        query_menu.command("voters <poll-id>")
        .description("Query voters for a poll", {"poll-id": "(int) poll id"})
        .option("--start-after <string>", "voter address to start query from")
        .option("--limit <int>", "max results to return")
        .action(get_voters)
    )
