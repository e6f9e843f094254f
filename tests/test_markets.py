from __future__ import annotations

import json
from pathlib import Path

import pytest

from competitor_intel.markets import (
    DEFAULT_MARKET_PROFILE,
    MarketProfile,
    load_market_profiles,
    resolve_market,
)


def test_bundled_profiles_include_colombia_defaults() -> None:
    profiles = load_market_profiles()
    colombia = profiles["CO"]
    assert colombia == DEFAULT_MARKET_PROFILE
    assert {"MX", "PE", "ES"} <= set(profiles)


def test_missing_numeric_fields_inherit_defaults(tmp_path: Path) -> None:
    config = tmp_path / "markets.json"
    config.write_text(
        json.dumps({"markets": [{"code": "BO", "name": "Bolivia", "currency": "BOB"}]}),
        encoding="utf-8",
    )

    bolivia = load_market_profiles(config_path=str(config))["BO"]

    assert bolivia.price_min == DEFAULT_MARKET_PROFILE.price_min
    assert bolivia.margin_threshold == DEFAULT_MARKET_PROFILE.margin_threshold
    assert bolivia.outlier_ratio == DEFAULT_MARKET_PROFILE.outlier_ratio
    assert bolivia.price_decimals == 0


def test_every_bundled_market_has_its_own_price_window() -> None:
    for code, profile in load_market_profiles().items():
        if code == "CO":
            continue
        assert (profile.price_min, profile.price_max) != (
            DEFAULT_MARKET_PROFILE.price_min,
            DEFAULT_MARKET_PROFILE.price_max,
        ), code
        assert profile.price_min < profile.price_max
        assert profile.margin_threshold == profile.price_min


def test_cent_markets_load_decimal_conventions() -> None:
    profiles = load_market_profiles()
    panama = profiles["PA"]
    assert (panama.price_min, panama.price_max) == (4, 130)
    assert panama.price_decimals == 2
    assert panama.decimal_separator == "."
    assert profiles["PE"].currency_symbol == "S/"
    assert profiles["ES"].decimal_separator == ","
    assert profiles["CL"].price_decimals == 0


def test_custom_config_file(tmp_path: Path) -> None:
    config = tmp_path / "markets.json"
    config.write_text(
        json.dumps(
            {
                "markets": [
                    {"code": "mx", "name": "Mexico", "currency": "mxn", "price_min": "200", "price_max": 9000},
                    {"code": "", "currency": "USD"},
                    "garbage",
                ]
            }
        ),
        encoding="utf-8",
    )

    profiles = load_market_profiles(config_path=str(config))

    assert list(profiles) == ["MX"]
    assert profiles["MX"].currency == "MXN"
    assert profiles["MX"].price_min == 200
    assert profiles["MX"].price_max == 9000


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_market_profiles(config_path=str(tmp_path / "missing.json"))


def test_markets_must_be_a_list(tmp_path: Path) -> None:
    config = tmp_path / "markets.json"
    config.write_text(json.dumps({"markets": {"CO": {}}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_market_profiles(config_path=str(config))


def test_resolve_market_is_case_insensitive_and_falls_back() -> None:
    profiles = {
        "CO": DEFAULT_MARKET_PROFILE,
        "MX": MarketProfile(code="MX", name="Mexico", currency="MXN", thousands_separator=","),
    }
    assert resolve_market(" mx ", profiles=profiles).code == "MX"
    assert resolve_market("ZZ", profiles=profiles).code == "CO"
    assert resolve_market(None, profiles=profiles).code == "CO"
    assert resolve_market("ZZ", profiles={}).code == DEFAULT_MARKET_PROFILE.code


def test_price_formatting_uses_market_conventions() -> None:
    mexico = MarketProfile(code="MX", name="Mexico", currency="MXN", thousands_separator=",")
    assert DEFAULT_MARKET_PROFILE.format_price(89900) == "$89.900"
    assert DEFAULT_MARKET_PROFILE.format_price(-11685.4) == "-$11.685"
    assert mexico.format_price(1299) == "$1,299"


def test_price_window_is_inclusive() -> None:
    assert DEFAULT_MARKET_PROFILE.in_price_window(15000)
    assert DEFAULT_MARKET_PROFILE.in_price_window(500000)
    assert not DEFAULT_MARKET_PROFILE.in_price_window(14999)
    assert not DEFAULT_MARKET_PROFILE.in_price_window(500001)


def test_price_formatting_with_cents() -> None:
    profiles = load_market_profiles()
    assert profiles["PA"].format_price(39.99) == "$39.99"
    assert profiles["PA"].format_price(4) == "$4.00"
    assert profiles["MX"].format_price(1299) == "$1,299.00"
    assert profiles["ES"].format_price(1299.5) == "€1.299,50"
    assert profiles["PE"].format_price(-2.6) == "-S/2.60"
