from __future__ import annotations

import base64
import json

import pytest
from click.testing import CliRunner

import mirror_cli.contract_menu as contract_menu
from mirror_cli.bech32 import encode_acc_address
from mirror_cli.cli import build_cli
from mirror_cli.commands.contracts import default_registry

runner = CliRunner()


def _addr(n: int) -> str:
    return encode_acc_address(bytes([n]) * 20)


CONTRACTS = {
    "gov": _addr(0x51),
    "mirror_token": _addr(0x52),
    "staking": _addr(0x53),
    "oracle": _addr(0x54),
    "collector": _addr(0x55),
    "community": _addr(0x56),
}
SENDER = _addr(0x60)
ASSET = _addr(0x61)
LP = _addr(0x62)
OTHER = _addr(0x63)


class _QueryLCD:
    queries: list = []

    def __init__(self, url, chain_id) -> None:
        pass

    def contract_query(self, contract, query_msg):
        _QueryLCD.queries.append((contract, query_msg))
        return {"ok": True}


@pytest.fixture()
def contracts_file(monkeypatch, tmp_path):
    _QueryLCD.queries = []
    monkeypatch.setattr(contract_menu, "LCDClient", _QueryLCD)
    p = tmp_path / "contracts.json"
    p.write_text(json.dumps(CONTRACTS), encoding="utf-8")
    return str(p)


def _exec(contracts_path: str, *args: str):
    result = runner.invoke(
        build_cli(default_registry()),
        ["--contracts", contracts_path, "exec", *args, "--from", SENDER, "--generate-only"],
    )
    return result


def _decoded_msgs(result) -> list[tuple[str, dict]]:
    assert result.exit_code == 0, result.output
    tx = json.loads(result.stdout)
    out = []
    for msg in tx["value"]["msg"]:
        value = msg["value"]
        out.append((value["contract"], json.loads(base64.b64decode(value["execute_msg"]))))
    return out


def _query(contracts_path: str, *args: str):
    return runner.invoke(build_cli(default_registry()), ["--contracts", contracts_path, "query", *args])


def test_staking_bond_sends_lp_tokens_with_hook(contracts_file):
    ((contract, msg),) = _decoded_msgs(_exec(contracts_file, "staking", "bond", ASSET, "100", "--lp-token", LP))
    assert contract == LP
    assert msg["send"]["contract"] == CONTRACTS["staking"]
    assert msg["send"]["amount"] == "100"
    assert json.loads(base64.b64decode(msg["send"]["msg"])) == {"bond": {"asset_token": ASSET}}


def test_staking_bond_requires_lp_token(contracts_file):
    result = _exec(contracts_file, "staking", "bond", ASSET, "100")
    assert result.exit_code == 2
    assert "--lp-token" in result.output


def test_staking_withdraw_all_pools(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "staking", "withdraw")) == [
        (CONTRACTS["staking"], {"withdraw": {}})
    ]


def test_staking_unbond(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "staking", "unbond", ASSET, "7")) == [
        (CONTRACTS["staking"], {"unbond": {"asset_token": ASSET, "amount": "7"}})
    ]


def test_oracle_feed_price_keeps_decimal_text(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "oracle", "feed-price", ASSET, "1234.500")) == [
        (CONTRACTS["oracle"], {"feed_price": {"prices": [[ASSET, "1234.500"]]}})
    ]


def test_oracle_feed_price_rejects_bad_decimal(contracts_file):
    result = _exec(contracts_file, "oracle", "feed-price", ASSET, "1.2.3")
    assert result.exit_code == 2


def test_collector_commands(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "collector", "convert", ASSET)) == [
        (CONTRACTS["collector"], {"convert": {"asset_token": ASSET}})
    ]
    assert _decoded_msgs(_exec(contracts_file, "collector", "distribute")) == [
        (CONTRACTS["collector"], {"distribute": {}})
    ]


def test_community_update_config_drops_unset_fields(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "community", "update-config", "--spend-limit", "5000")) == [
        (CONTRACTS["community"], {"update_config": {"spend_limit": "5000"}})
    ]


def test_community_spend(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "community", "spend", OTHER, "25")) == [
        (CONTRACTS["community"], {"spend": {"recipient": OTHER, "amount": "25"}})
    ]


def test_token_send_with_hook(contracts_file):
    ((contract, msg),) = _decoded_msgs(
        _exec(contracts_file, "token", "send", ASSET, OTHER, "9", "--msg", '{"deposit": {}}')
    )
    assert contract == ASSET
    assert msg["send"]["contract"] == OTHER
    assert json.loads(base64.b64decode(msg["send"]["msg"])) == {"deposit": {}}


def test_token_send_rejects_non_object_hook(contracts_file):
    result = _exec(contracts_file, "token", "send", ASSET, OTHER, "9", "--msg", "[1]")
    assert result.exit_code == 2
    assert "invalid --msg: expected JSON object" in result.output


def test_token_transfer_and_burn(contracts_file):
    assert _decoded_msgs(_exec(contracts_file, "token", "transfer", ASSET, OTHER, "3")) == [
        (ASSET, {"transfer": {"recipient": OTHER, "amount": "3"}})
    ]
    assert _decoded_msgs(_exec(contracts_file, "token", "burn", ASSET, "3")) == [(ASSET, {"burn": {"amount": "3"}})]


def test_oracle_prices_rejects_unknown_order(contracts_file, monkeypatch):
    def _unreachable(*args, **kwargs):
        raise AssertionError("context resolved for a rejected order")

    monkeypatch.setattr(contract_menu, "resolve_query_context", _unreachable)
    result = _query(contracts_file, "oracle", "prices", "--order-by", "random")
    assert result.exit_code == 2
    assert "invalid order 'random'; MUST be one of: 'asc', 'desc'" in result.output
    assert _QueryLCD.queries == []


@pytest.mark.parametrize(
    "args, expected",
    [
        (["oracle", "price", "mTSLA", "uusd"], ("oracle", {"price": {"base_asset": "mTSLA", "quote_asset": "uusd"}})),
        (["oracle", "prices", "--limit", "2", "--order-by", "desc"], ("oracle", {"prices": {"limit": 2, "order_by": "desc"}})),
        (["staking", "pool-info", ASSET], ("staking", {"pool_info": {"asset_token": ASSET}})),
        (["staking", "reward-info", SENDER], ("staking", {"reward_info": {"staker": SENDER}})),
        (["collector", "config"], ("collector", {"config": {}})),
        (["community", "config"], ("community", {"config": {}})),
    ],
)
def test_queries_reach_the_named_contract(contracts_file, args, expected):
    result = _query(contracts_file, *args)
    assert result.exit_code == 0, result.output
    name, msg = expected
    assert _QueryLCD.queries == [(CONTRACTS[name], msg)]
    assert json.loads(result.stdout) == {"ok": True}


def test_token_balance_queries_given_token(contracts_file):
    result = _query(contracts_file, "token", "balance", ASSET, SENDER)
    assert result.exit_code == 0, result.output
    assert _QueryLCD.queries == [(ASSET, {"balance": {"address": SENDER}})]
