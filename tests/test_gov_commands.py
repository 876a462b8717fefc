from __future__ import annotations

import base64
import json

import pytest
from click.testing import CliRunner

import mirror_cli.contract_menu as contract_menu
from mirror_cli.bech32 import encode_acc_address
from mirror_cli.cli import build_cli
from mirror_cli.commands.contracts import default_registry
from mirror_cli.sdk import ContractCall, PollExecuteMsg

runner = CliRunner()

GOV = encode_acc_address(b"\x01" * 20)
MIR = encode_acc_address(b"\x02" * 20)
SENDER = encode_acc_address(b"\x09" * 20)
TARGET = encode_acc_address(b"\x0a" * 20)

POLL_PAYLOAD = {"id": 5, "status": "in_progress", "yes_votes": "10", "no_votes": "0"}


class _FakeGov:
    def __init__(self, calls: list) -> None:
        self._calls = calls

    def __getattr__(self, name: str):
        def _method(*args, **kwargs):
            self._calls.append((name, args, kwargs))
            if name.startswith("get_"):
                return POLL_PAYLOAD
            return ContractCall(contract=GOV, execute_msg={name: {}})

        return _method


class _FakeMirror:
    created = 0
    calls: list = []

    def __init__(self, lcd, contracts) -> None:
        _FakeMirror.created += 1
        self.lcd = lcd
        self.mirror_token = MIR
        self.gov = _FakeGov(_FakeMirror.calls)


@pytest.fixture()
def fake_mirror(monkeypatch):
    _FakeMirror.created = 0
    _FakeMirror.calls = []
    monkeypatch.setattr(contract_menu, "Mirror", _FakeMirror)
    return _FakeMirror


def _invoke(args: list[str]):
    return runner.invoke(build_cli(default_registry()), args)


def _exec(*args: str):
    return _invoke(["exec", "gov", *args, "--from", SENDER, "--generate-only"])


def test_stake_parses_amount_and_uses_configured_token(fake_mirror):
    result = _exec("stake", "1000000")
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("stake_voting_tokens", (MIR, 1000000), {})]
    tx = json.loads(result.stdout)
    assert tx["value"]["msg"][0]["value"]["contract"] == GOV


def test_stake_rejects_non_numeric_amount_without_calling(fake_mirror):
    result = _exec("stake", "abc")
    assert result.exit_code == 2
    assert "invalid Uint128 amount: 'abc'" in result.output
    assert fake_mirror.calls == []
    assert fake_mirror.created == 0


def test_cast_vote_passes_typed_values(fake_mirror):
    result = _exec("cast-vote", "3", "no", "250")
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("cast_vote", (3, "no", 250), {})]


def test_cast_vote_rejects_unknown_option_before_any_call(fake_mirror):
    result = _exec("cast-vote", "3", "maybe", "250")
    assert result.exit_code == 2
    assert "invalid vote option 'maybe'; MUST be one of: 'yes', 'no'" in result.output
    assert fake_mirror.calls == []
    assert fake_mirror.created == 0


def _create_poll(*extra: str):
    return _exec("create-poll", "--title", "T", "--desc", "D", "--deposit", "100", *extra)


def test_create_poll_requires_both_execute_options(fake_mirror):
    for extra in (["--execute-to", TARGET], ["--execute-msg", '{"a":1}']):
        result = _create_poll(*extra)
        assert result.exit_code == 2
        assert "both --execute-to and --execute-msg must be supplied if either is" in result.output
    assert fake_mirror.calls == []


def test_create_poll_builds_execute_payload(fake_mirror):
    result = _create_poll("--execute-to", TARGET, "--execute-msg", '{"a":1}', "--link", "https://x.test")
    assert result.exit_code == 0, result.output
    ((name, args, _kwargs),) = fake_mirror.calls
    assert name == "create_poll"
    assert args[:5] == (MIR, 100, "T", "D", "https://x.test")
    execute_msg = args[5]
    assert execute_msg == PollExecuteMsg(contract=TARGET, msg=base64.b64encode(b'{"a":1}').decode("ascii"))


def test_create_poll_without_execute_options_omits_payload(fake_mirror):
    result = _create_poll()
    assert result.exit_code == 0, result.output
    ((_name, args, _kwargs),) = fake_mirror.calls
    assert args == (MIR, 100, "T", "D", None, None)


def test_create_poll_requires_title(fake_mirror):
    result = _exec("create-poll", "--desc", "D", "--deposit", "100")
    assert result.exit_code == 2
    assert "--title" in result.output
    assert fake_mirror.calls == []


def test_update_config_formats_amounts_and_decimals(fake_mirror):
    result = _exec("update-config", "--quorum", "0.1", "--proposal-deposit", "500", "--voting-period", "80000")
    assert result.exit_code == 0, result.output
    ((name, _args, kwargs),) = fake_mirror.calls
    assert name == "update_config"
    assert kwargs == {
        "owner": None,
        "effective_delay": None,
        "expiration_period": None,
        "proposal_deposit": "500",
        "quorum": "0.1",
        "threshold": None,
        "voting_period": 80000,
    }


def test_update_config_rejects_bad_owner(fake_mirror):
    result = _exec("update-config", "--owner", "terra1bogus")
    assert result.exit_code == 2
    assert "invalid Terra account address" in result.output
    assert fake_mirror.calls == []


def test_unstake_amount_is_optional(fake_mirror):
    result = _exec("unstake")
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("withdraw_voting_tokens", (None,), {})]


@pytest.mark.parametrize("command", ["execute-poll", "end-poll", "expire-poll"])
def test_poll_lifecycle_commands(fake_mirror, command):
    result = _exec(command, "12")
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [(command.replace("-", "_"), (12,), {})]


def test_query_poll_prints_payload_unmodified(fake_mirror):
    result = _invoke(["query", "gov", "poll", "5"])
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("get_poll", (5,), {})]
    assert json.loads(result.stdout) == POLL_PAYLOAD


def test_query_polls_passes_filter_and_paging(fake_mirror):
    result = _invoke(["query", "gov", "polls", "--filter", "passed", "--start-after", "4", "--limit", "2"])
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("get_polls", ("passed", 4, 2), {})]


def test_query_polls_rejects_unknown_filter_before_any_call(fake_mirror, monkeypatch):
    def _unreachable(*args, **kwargs):
        raise AssertionError("context resolved for a rejected filter")

    monkeypatch.setattr(contract_menu, "resolve_query_context", _unreachable)
    result = _invoke(["query", "gov", "polls", "--filter", "expired"])
    assert result.exit_code == 2
    assert "invalid filter 'expired'" in result.output
    assert fake_mirror.calls == []
    assert fake_mirror.created == 0


def test_query_voters_keeps_start_after_raw(fake_mirror):
    result = _invoke(["query", "gov", "voters", "5", "--start-after", SENDER, "--limit", "3"])
    assert result.exit_code == 0, result.output
    assert fake_mirror.calls == [("get_voters", (5, SENDER, 3), {})]


def test_query_staker_validates_address(fake_mirror):
    result = _invoke(["query", "gov", "staker", "nope"])
    assert result.exit_code == 2
    assert fake_mirror.calls == []


def test_plain_json_output(fake_mirror):
    result = _invoke(["--plain-json", "query", "gov", "state"])
    assert result.exit_code == 0, result.output
    assert result.stdout == json.dumps(POLL_PAYLOAD, separators=(",", ":"), sort_keys=True) + "\n"
