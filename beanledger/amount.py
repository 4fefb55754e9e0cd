"""Decimal amounts and balance tolerances."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional

from beanledger.model import Amount

_FALLBACK_TOLERANCE = Decimal("0.005")
_NUMBER = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _to_decimal(text: str) -> Decimal:
    if not _NUMBER.fullmatch(text):
        raise ValueError(f"can't convert {text!r} to decimal")
    return Decimal(text)


def parse_amount(amount: Optional[Amount]) -> Decimal:
    """Return the decimal value of an amount; raise ValueError if absent or invalid."""
    if amount is None:
        raise ValueError("amount is nil")
    try:
        return _to_decimal(amount.value)
    except ValueError as exc:
        raise ValueError(f"invalid amount value {amount.value!r}: {exc}") from exc


def _default_tolerances() -> Dict[str, Decimal]:
    return {"*": Decimal("0.005")}


@dataclass
class ToleranceConfig:
    """Tolerance defaults per currency ("*" is the wildcard) and the inference multiplier."""

    defaults: Dict[str, Decimal] = field(default_factory=_default_tolerances)
    multiplier: Decimal = Decimal("0.5")
    infer_from_cost: bool = False

    def default_tolerance(self, currency: str) -> Decimal:
        """Currency-specific default, else the wildcard, else 0.005."""
        if currency in self.defaults:
            return self.defaults[currency]
        if "*" in self.defaults:
            return self.defaults["*"]
        return _FALLBACK_TOLERANCE


def parse_tolerance_config(options: Mapping[str, str]) -> ToleranceConfig:
    """Build a ToleranceConfig from ledger options; raise ValueError on bad values."""
    config = ToleranceConfig()

    if "tolerance_multiplier" in options:
        val = options["tolerance_multiplier"]
        try:
            config.multiplier = _to_decimal(val)
        except ValueError as exc:
            raise ValueError(f"invalid tolerance_multiplier {val!r}: {exc}") from exc

    if "inferred_tolerance_default" in options:
        val = options["inferred_tolerance_default"]
        parts = val.split(":", 1)
        if len(parts) != 2:
            raise ValueError(
                f"invalid inferred_tolerance_default format {val!r}, "
                "expected CURRENCY:TOLERANCE"
            )
        currency, tolerance_text = (part.strip() for part in parts)
        try:
            config.defaults[currency] = _to_decimal(tolerance_text)
        except ValueError as exc:
            raise ValueError(f"invalid tolerance value in {val!r}: {exc}") from exc

    if "infer_tolerance_from_cost" in options:
        config.infer_from_cost = options["infer_tolerance_from_cost"].upper() == "TRUE"

    return config


def infer_tolerance(
    amounts: Iterable[Decimal],
    currency: str,
    config: Optional[ToleranceConfig] = None,
) -> Decimal:
    """Tolerance from the most precise non-zero amount: 10**exponent * multiplier."""
    if config is None:
        config = ToleranceConfig()
    exponents = [amount.as_tuple().exponent for amount in amounts if not amount.is_zero()]
    if not exponents:
        return config.default_tolerance(currency)
    return Decimal(1).scaleb(min(exponents)) * config.multiplier


def amount_equal(a: Decimal, b: Decimal, tolerance: Decimal) -> bool:
    """True if ``a`` and ``b`` differ by at most ``tolerance``."""
    return abs(a - b) <= tolerance