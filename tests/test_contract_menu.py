from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

import mirror_cli.contract_menu as contract_menu
from mirror_cli.bech32 import encode_acc_address
from mirror_cli.cli import build_cli
from mirror_cli.cli_shared import PreconditionError
from mirror_cli.contract_menu import (
    CommandRegistry,
    ParsedOptions,
    build_unsigned_tx,
    handle_exec_command,
    handle_query_command,
    iter_commands,
    normalize_receipt,
)
from mirror_cli.parse_input import InvalidAmount
from mirror_cli.sdk import ContractCall

runner = CliRunner()

ADDR = encode_acc_address(b"\x21" * 20)
TARGET = encode_acc_address(b"\x22" * 20)


def _toy_registry(seen: list) -> CommandRegistry:
    registry = CommandRegistry()
    exec_menu = registry.create_exec_menu("toy", "Toy contract functions")

    def _send(menu, opts):
        seen.append(opts)
        handle_exec_command(menu, lambda mirror: ContractCall(contract=TARGET, execute_msg={"send": {"amount": str(opts.amount)}}))

    (
        exec_menu.command("send <amount> [note]")
        .description("Send", {"amount": "(Uint128) amount"})
        .option("--to <AccAddress>", "recipient")
        .option("--to-msg <json>", "hook")
        .paired("--to", "--to-msg")
        .action(_send)
    )

    query_menu = registry.create_query_menu("toy", "Toy contract queries")

    def _echo(menu, opts):
        seen.append(opts)
        handle_query_command(menu, lambda mirror: {"id": opts.id, "nested": {"k": [1, 2]}})

    query_menu.command("echo <id>").description("Echo", {"id": "(int) id"}).action(_echo)
    return registry


def test_builder_freezes_into_spec():
    registry = _toy_registry([])
    menu = registry.menus_of("exec")[0]
    spec = menu.get("send")
    assert [a.name for a in spec.arguments] == ["amount", "note"]
    assert spec.arguments[0].type_name == "Uint128"
    assert spec.arguments[1].required is False
    assert spec.arguments[1].type_name == "string"
    assert [o.flag for o in spec.options] == ["--to", "--to-msg"]
    assert spec.options[0].type_name == "AccAddress"
    assert spec.paired == (("--to", "--to-msg"),)


def test_spec_parse_produces_typed_read_only_options():
    spec = _toy_registry([]).menus_of("exec")[0].get("send")
    opts = spec.parse({"amount": "10", "note": None, "to": None, "to_msg": None})
    assert isinstance(opts, ParsedOptions)
    assert opts.amount == 10
    assert opts.note is None
    assert opts["to"] is None
    with pytest.raises(AttributeError):
        opts.amount = 11
    with pytest.raises(AttributeError):
        opts.missing


def test_spec_parse_rejects_bad_types_and_half_pairs():
    spec = _toy_registry([]).menus_of("exec")[0].get("send")
    with pytest.raises(InvalidAmount):
        spec.parse({"amount": "-5"})
    with pytest.raises(PreconditionError, match="both --to and --to-msg must be supplied if either is"):
        spec.parse({"amount": "5", "to": ADDR})


def test_duplicate_command_and_menu_are_rejected():
    registry = _toy_registry([])
    menu = registry.menus_of("query")[0]
    with pytest.raises(ValueError):
        menu.command("echo <id>").action(lambda m, o: None)
    with pytest.raises(ValueError):
        registry.create_query_menu("toy", "again")


def test_invalid_declarations_are_rejected():
    registry = CommandRegistry()
    menu = registry.create_exec_menu("bad", "Bad")
    with pytest.raises(ValueError):
        menu.command("x [a] <b>")
    with pytest.raises(ValueError):
        menu.command("x <a>").description("x", {"b": "(int) nope"})
    with pytest.raises(ValueError):
        menu.command("x").option("--from <key>", "shadows the menu option")
    with pytest.raises(ValueError):
        menu.command("x").option("--a <int>").paired("--a", "--b")


def test_registry_is_frozen_after_build():
    registry = _toy_registry([])
    build_cli(registry)
    with pytest.raises(RuntimeError):
        registry.create_exec_menu("late", "Late")
    with pytest.raises(RuntimeError):
        registry.menus_of("exec")[0].command("late")


def test_query_prints_payload_and_passes_typed_options():
    seen: list = []
    cli = build_cli(_toy_registry(seen))
    result = runner.invoke(cli, ["query", "toy", "echo", "5"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"id": 5, "nested": {"k": [1, 2]}}
    assert seen[0].id == 5


def test_query_yaml_output():
    cli = build_cli(_toy_registry([]))
    result = runner.invoke(cli, ["query", "toy", "echo", "5", "--yaml"])
    assert result.exit_code == 0, result.output
    assert "id: 5" in result.stdout


def test_parse_error_fails_before_handler():
    seen: list = []
    cli = build_cli(_toy_registry(seen))
    result = runner.invoke(cli, ["query", "toy", "echo", "five"])
    assert result.exit_code == 2
    assert "invalid integer: 'five'" in result.output
    assert seen == []


def test_exec_generate_only_prints_unsigned_tx():
    cli = build_cli(_toy_registry([]))
    result = runner.invoke(
        cli,
        ["exec", "toy", "send", "10", "--from", ADDR, "--generate-only", "--memo", "hi", "--gas", "200000"],
    )
    assert result.exit_code == 0, result.output
    tx = json.loads(result.stdout)
    assert tx["type"] == "core/StdTx"
    assert tx["value"]["memo"] == "hi"
    assert tx["value"]["fee"] == {"amount": [{"denom": "uusd", "amount": "30000"}], "gas": "200000"}
    (msg,) = tx["value"]["msg"]
    assert msg["value"]["sender"] == ADDR
    assert msg["value"]["contract"] == TARGET


def test_exec_requires_from():
    cli = build_cli(_toy_registry([]))
    result = runner.invoke(cli, ["exec", "toy", "send", "10", "--generate-only"])
    assert result.exit_code == 2
    assert "--from" in result.output


def test_exec_with_address_cannot_sign(monkeypatch):
    class _Lcd:
        def __init__(self, url, chain_id):
            pass

        def account_info(self, address):
            return 1, 2

    monkeypatch.setattr(contract_menu, "LCDClient", _Lcd)
    cli = build_cli(_toy_registry([]))
    result = runner.invoke(cli, ["exec", "toy", "send", "10", "--from", ADDR])
    assert result.exit_code == 2
    assert "signing requires a key name" in result.output


def test_normalize_receipt_and_unsigned_tx_shape():
    receipt = normalize_receipt({"txhash": "AB", "height": "12", "gas_used": "5", "gas_wanted": "9", "logs": None})
    assert receipt == {
        "txhash": "AB",
        "height": 12,
        "code": 0,
        "codespace": "",
        "raw_log": "",
        "gas_wanted": 9,
        "gas_used": 5,
        "logs": [],
    }
    tx = build_unsigned_tx([], fee={"amount": [], "gas": "1"}, memo="")
    assert tx["value"]["signatures"] is None


def test_every_registered_command_has_help_text():
    from mirror_cli.commands.contracts import default_registry

    seen = set()
    for menu, spec in iter_commands(default_registry()):
        assert spec.description.strip(), f"missing help text for {menu.kind} {menu.name} {spec.name}"
        click_cmd = menu.to_click().commands[spec.name]
        assert "--yaml" in {flag for p in click_cmd.params for flag in getattr(p, "opts", [])}
        seen.add((menu.kind, menu.name))
    assert ("exec", "gov") in seen and ("query", "token") in seen
