from decimal import Decimal

import pytest

from beanledger.amount import (
    ToleranceConfig,
    amount_equal,
    infer_tolerance,
    parse_amount,
    parse_tolerance_config,
)
from beanledger.model import Amount


@pytest.mark.parametrize(
    "amounts, currency, config, want",
    [
        (["24.45", "100.00"], "USD", ToleranceConfig(), "0.005"),
        (["10.22626", "5.12345"], "RGAGX", ToleranceConfig(), "0.000005"),
        (["384.6"], "USD", ToleranceConfig(), "0.05"),
        (["100.00", "50.123"], "USD", ToleranceConfig(), "0.0005"),
        (
            ["100.00"],
            "USD",
            ToleranceConfig(defaults={"*": Decimal("0.005")}, multiplier=Decimal("0.6")),
            "0.006",
        ),
        ([], "USD", ToleranceConfig(), "0.005"),
        (["0.00", "0.000"], "USD", ToleranceConfig(), "0.005"),
        (["100", "200"], "USD", ToleranceConfig(), "0.5"),
        (
            [],
            "USD",
            ToleranceConfig(
                defaults={"USD": Decimal("0.003"), "*": Decimal("0.005")},
                multiplier=Decimal("0.5"),
            ),
            "0.003",
        ),
    ],
    ids=[
        "standard 2 decimals",
        "high precision 5 decimals",
        "single decimal",
        "mixed precision uses smallest",
        "custom multiplier",
        "no amounts - use default",
        "all zero amounts - use default",
        "integer amounts",
        "currency-specific default",
    ],
)
def test_infer_tolerance(amounts, currency, config, want):
    got = infer_tolerance([Decimal(a) for a in amounts], currency, config)
    assert got == Decimal(want)


def test_infer_tolerance_without_config():
    assert infer_tolerance([Decimal("24.45")], "USD", None) == Decimal("0.005")


def test_parse_tolerance_config_empty_options():
    config = parse_tolerance_config({})
    assert config.multiplier == Decimal("0.5")
    assert config.defaults["*"] == Decimal("0.005")
    assert config.infer_from_cost is False


def test_parse_tolerance_config_custom_multiplier():
    config = parse_tolerance_config({"tolerance_multiplier": "0.6"})
    assert config.multiplier == Decimal("0.6")


def test_parse_tolerance_config_wildcard_default():
    config = parse_tolerance_config({"inferred_tolerance_default": "*:0.001"})
    assert config.defaults["*"] == Decimal("0.001")


def test_parse_tolerance_config_currency_default():
    config = parse_tolerance_config({"inferred_tolerance_default": "USD:0.003"})
    assert config.defaults["USD"] == Decimal("0.003")
    assert config.defaults["*"] == Decimal("0.005")


def test_parse_tolerance_config_infer_from_cost():
    assert parse_tolerance_config({"infer_tolerance_from_cost": "TRUE"}).infer_from_cost is True
    assert parse_tolerance_config({"infer_tolerance_from_cost": "false"}).infer_from_cost is False


def test_parse_tolerance_config_all_options():
    config = parse_tolerance_config(
        {
            "tolerance_multiplier": "0.75",
            "inferred_tolerance_default": "EUR:0.002",
            "infer_tolerance_from_cost": "TRUE",
        }
    )
    assert config.multiplier == Decimal("0.75")
    assert config.defaults["EUR"] == Decimal("0.002")
    assert config.infer_from_cost is True


@pytest.mark.parametrize(
    "options",
    [
        {"tolerance_multiplier": "not-a-number"},
        {"inferred_tolerance_default": "USD0.003"},
        {"inferred_tolerance_default": "USD:not-a-number"},
    ],
    ids=["invalid multiplier", "no colon", "invalid tolerance value"],
)
def test_parse_tolerance_config_errors(options):
    with pytest.raises(ValueError):
        parse_tolerance_config(options)


@pytest.mark.parametrize(
    "defaults, currency, want",
    [
        (
            {"USD": Decimal("0.003"), "EUR": Decimal("0.002"), "*": Decimal("0.005")},
            "USD",
            "0.003",
        ),
        ({"USD": Decimal("0.003"), "*": Decimal("0.005")}, "CAD", "0.005"),
        ({"USD": Decimal("0.003")}, "EUR", "0.005"),
    ],
    ids=["currency-specific default", "wildcard default", "no wildcard - final fallback"],
)
def test_default_tolerance(defaults, currency, want):
    config = ToleranceConfig(defaults=defaults, multiplier=Decimal("0.5"))
    assert config.default_tolerance(currency) == Decimal(want)


def test_new_tolerance_config_defaults():
    config = ToleranceConfig()
    assert config.multiplier == Decimal("0.5")
    assert config.defaults["*"] == Decimal("0.005")
    assert config.infer_from_cost is False


def test_default_configs_do_not_share_defaults():
    first = ToleranceConfig()
    first.defaults["USD"] = Decimal("0.003")
    assert "USD" not in ToleranceConfig().defaults


def test_parse_amount():
    assert parse_amount(Amount("-50.25", "USD")) == Decimal("-50.25")


def test_parse_amount_errors():
    with pytest.raises(ValueError, match="nil"):
        parse_amount(None)
    with pytest.raises(ValueError, match="invalid amount value"):
        parse_amount(Amount("abc", "USD"))
    with pytest.raises(ValueError):
        parse_amount(Amount("NaN", "USD"))


def test_amount_equal_within_tolerance():
    tolerance = Decimal("0.005")
    assert amount_equal(Decimal("100.00"), Decimal("100.004"), tolerance) is True
    assert amount_equal(Decimal("100.00"), Decimal("100.005"), tolerance) is True
    assert amount_equal(Decimal("100.00"), Decimal("100.006"), tolerance) is False
    assert amount_equal(Decimal("100.006"), Decimal("100.00"), tolerance) is False