from __future__ import annotations

from decimal import Decimal

import pytest

from mirror_cli.bech32 import encode_acc_address
from mirror_cli.cli_shared import UsageError
from mirror_cli.parse_input import (
    INT64_MAX,
    UINT128_MAX,
    InvalidAddress,
    InvalidAmount,
    InvalidAsset,
    InvalidChoice,
    InvalidDecimal,
    InvalidInteger,
    format_dec,
    parse_acc_address,
    parse_asset,
    parse_dec,
    parse_int,
    parse_uint128,
    parser_for,
    require_one_of,
)
from mirror_cli.sdk import Asset

ADDR = encode_acc_address(b"\x11" * 20)


@pytest.mark.parametrize("parser", [parse_acc_address, parse_int, parse_uint128, parse_dec, parse_asset])
def test_parsers_pass_none_through(parser):
    assert parser(None) is None


@pytest.mark.parametrize("raw,expected", [("0", 0), ("42", 42), ("-7", -7), ("+3", 3), (str(INT64_MAX), INT64_MAX)])
def test_parse_int_accepts_base10(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.5", "0x10", "1e3", "12abc", str(INT64_MAX + 1)])
def test_parse_int_rejects_non_numeric_and_overflow(raw):
    with pytest.raises(InvalidInteger):
        parse_int(raw)


def test_parse_uint128_accepts_non_negative_integers():
    assert parse_uint128("1000000") == 1000000
    assert parse_uint128("0") == 0
    assert parse_uint128(str(UINT128_MAX)) == UINT128_MAX


@pytest.mark.parametrize("raw", ["-1", "abc", "1.0", "", " ", str(UINT128_MAX + 1)])
def test_parse_uint128_rejects_negative_and_non_numeric(raw):
    with pytest.raises(InvalidAmount):
        parse_uint128(raw)


def test_parse_dec_and_format_without_exponent():
    assert parse_dec("0.1") == Decimal("0.1")
    assert format_dec(parse_dec("0.50")) == "0.50"
    assert format_dec(parse_dec("1e-3")) == "0.001"
    assert format_dec(None) is None


@pytest.mark.parametrize("raw", ["abc", "", "NaN", "Infinity", "1..2"])
def test_parse_dec_rejects_malformed(raw):
    with pytest.raises(InvalidDecimal):
        parse_dec(raw)


def test_parse_acc_address():
    assert parse_acc_address(ADDR) == ADDR
    with pytest.raises(InvalidAddress):
        parse_acc_address("terra1notanaddress")


def test_parse_acc_address_normalizes_upper_case():
    assert parse_acc_address(ADDR.upper()) == ADDR
    assert parse_acc_address(f"  {ADDR.upper()} ") == ADDR


def test_validation_errors_are_usage_errors():
    for err in (InvalidAddress, InvalidInteger, InvalidAmount, InvalidDecimal, InvalidChoice, InvalidAsset):
        assert issubclass(err, UsageError)


def test_require_one_of_lists_allowed_values():
    assert require_one_of("yes", ("yes", "no"), label="vote option") == "yes"
    assert require_one_of(None, ("yes", "no"), label="vote option") is None
    with pytest.raises(InvalidChoice) as e:
        require_one_of("maybe", ("yes", "no"), label="vote option")
    assert str(e.value) == "invalid vote option 'maybe'; MUST be one of: 'yes', 'no'"


def test_parser_for_known_and_raw_types():
    assert parser_for("int") is parse_int
    assert parser_for("Uint128") is parse_uint128
    assert parser_for("string") is None
    assert parser_for("json") is None


def test_parse_asset_native_and_token():
    assert parse_asset("1000uusd") == Asset(amount=1000, denom="uusd")
    assert parse_asset(f"25{ADDR}") == Asset(amount=25, token=ADDR)
    assert parse_asset(f"25{ADDR.upper()}") == Asset(amount=25, token=ADDR)
    assert parse_asset("7uusd").to_data() == {"info": {"native_token": {"denom": "uusd"}}, "amount": "7"}
    assert parse_asset(f"7{ADDR}").to_data() == {"info": {"token": {"contract_addr": ADDR}}, "amount": "7"}


@pytest.mark.parametrize("raw", ["uusd", "1000", "-5uusd", "1.5uusd", "10terra1notanaddress"])
def test_parse_asset_rejects_malformed(raw):
    with pytest.raises(InvalidAsset):
        parse_asset(raw)
