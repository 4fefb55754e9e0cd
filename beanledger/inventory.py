"""Lot-tracking inventory of commodities held in an account."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

_ZERO = Decimal(0)


def _format_decimal(value: Decimal) -> str:
    """Plain notation without trailing zeros (100.00 -> "100")."""
    return format(value.normalize(), "f")


class InventoryError(Exception):
    """Raised when an inventory reduction cannot be carried out."""


@dataclass(frozen=True)
class LotSpec:
    """Identifies a lot: per-unit cost, acquisition date and label."""

    cost: Optional[Decimal] = None
    cost_currency: str = ""
    date: Optional[datetime.date] = None
    label: str = ""

    def is_empty(self) -> bool:
        """True for the empty specification ``{}``."""
        return (
            self.cost is None
            and not self.cost_currency
            and self.date is None
            and not self.label
        )

    def __str__(self) -> str:
        parts = []
        if self.cost is not None:
            parts.append(f"{_format_decimal(self.cost)} {self.cost_currency}".rstrip())
        if self.date is not None:
            parts.append(self.date.isoformat())
        if self.label:
            parts.append(f'"{self.label}"')
        return "{" + ", ".join(parts) + "}"


@dataclass(eq=False)
class Lot:
    """An amount of one commodity held under one lot specification."""

    commodity: str
    amount: Decimal
    spec: Optional[LotSpec] = None

    def __str__(self) -> str:
        text = f"{_format_decimal(self.amount)} {self.commodity}"
        if self.spec is not None and not self.spec.is_empty():
            text += f" {self.spec}"
        return text


def _specs_match(a: Optional[LotSpec], b: Optional[LotSpec]) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return a == b


def _fifo_key(lot: Lot):
    if lot.spec is None or lot.spec.date is None:
        return (0, 0)
    return (1, lot.spec.date.toordinal())


def _lifo_key(lot: Lot):
    if lot.spec is None or lot.spec.date is None:
        return (1, 0)
    return (0, -lot.spec.date.toordinal())


class Inventory:
    """Lots of commodities, keyed by commodity, in insertion order."""

    def __init__(self) -> None:
        self._lots: Dict[str, List[Lot]] = {}

    def add(self, commodity: str, amount: Decimal) -> None:
        """Add an amount without cost basis."""
        self.add_lot(commodity, amount, None)

    def add_lot(self, commodity: str, amount: Decimal, spec: Optional[LotSpec]) -> None:
        """Add to the lot matching ``spec``, or start a new lot."""
        for lot in self._lots.get(commodity, []):
            if _specs_match(lot.spec, spec):
                lot.amount += amount
                return
        self._lots.setdefault(commodity, []).append(Lot(commodity, amount, spec))

    def get(self, commodity: str) -> Decimal:
        """Total amount of a commodity across all its lots."""
        return sum((lot.amount for lot in self._lots.get(commodity, [])), _ZERO)

    def lots(self, commodity: str) -> List[Lot]:
        """The lots held for a commodity."""
        return list(self._lots.get(commodity, []))

    def reduce_lot(
        self,
        commodity: str,
        amount: Decimal,
        spec: Optional[LotSpec],
        booking_method: str,
    ) -> None:
        """Reduce by a negative ``amount``, by lot or by booking method."""
        if amount >= 0:
            raise InventoryError(
                f"reduce amount must be negative, got {_format_decimal(amount)}"
            )
        reduce_amount = abs(amount)

        if spec is not None and spec.is_empty():
            self._reduce_with_booking(commodity, reduce_amount, booking_method)
        elif spec is not None and spec.cost is not None:
            self._reduce_specific_lot(commodity, reduce_amount, spec)
        else:
            self.add_lot(commodity, amount, None)

    def _reduce_specific_lot(self, commodity: str, amount: Decimal, spec: LotSpec) -> None:
        for lot in self._lots.get(commodity, []):
            if _specs_match(lot.spec, spec):
                if lot.amount < amount:
                    raise InventoryError(
                        f"insufficient amount in lot {spec}: have "
                        f"{_format_decimal(lot.amount)}, need {_format_decimal(amount)}"
                    )
                lot.amount -= amount
                if lot.amount.is_zero():
                    self._remove_lot(commodity, lot)
                return
        raise InventoryError(f"lot not found: {commodity} {spec}")

    def _reduce_with_booking(self, commodity: str, amount: Decimal, booking_method: str) -> None:
        lots = self._lots.get(commodity, [])
        if not lots:
            raise InventoryError(f"no lots available for {commodity}")

        if booking_method == "NONE":
            lots.append(Lot(commodity, -amount, None))
            return
        if booking_method == "AVERAGE":
            self._reduce_with_average(commodity, amount)
            return
        if booking_method == "FIFO":
            ordered = sorted(lots, key=_fifo_key)
        elif booking_method == "LIFO":
            ordered = sorted(lots, key=_lifo_key)
        elif booking_method == "STRICT":
            raise ValueError("STRICT booking with empty spec {} must be rejected before reduction")
        else:
            raise ValueError(f"unsupported booking method {booking_method!r}")

        remaining = amount
        for lot in ordered:
            if remaining.is_zero():
                break
            if lot.amount >= remaining:
                lot.amount -= remaining
                if lot.amount.is_zero():
                    self._remove_lot(commodity, lot)
                remaining = _ZERO
            else:
                remaining -= lot.amount
                lot.amount = _ZERO
                self._remove_lot(commodity, lot)

        if not remaining.is_zero():
            raise InventoryError(
                f"insufficient total amount for {commodity}: "
                f"need {_format_decimal(remaining)} more"
            )

    def _reduce_with_average(self, commodity: str, amount: Decimal) -> None:
        lots = self._lots.get(commodity, [])
        total_amount = _ZERO
        total_cost = _ZERO
        cost_currency = ""
        has_costed = False
        for lot in lots:
            total_amount += lot.amount
            if lot.spec is not None and lot.spec.cost is not None:
                has_costed = True
                cost_currency = lot.spec.cost_currency
                total_cost += lot.amount * lot.spec.cost

        if total_amount < amount:
            raise InventoryError(
                f"insufficient total amount for {commodity}: have "
                f"{_format_decimal(total_amount)}, need {_format_decimal(amount)}"
            )

        remaining = total_amount - amount
        self._lots.pop(commodity, None)
        if remaining.is_zero():
            return

        avg_spec = None
        if has_costed and not total_cost.is_zero() and not total_amount.is_zero():
            avg_spec = LotSpec(cost=total_cost / total_amount, cost_currency=cost_currency)
        self.add_lot(commodity, remaining, avg_spec)

    def _remove_lot(self, commodity: str, target: Lot) -> None:
        kept = [lot for lot in self._lots.get(commodity, []) if lot is not target]
        if kept:
            self._lots[commodity] = kept
        else:
            self._lots.pop(commodity, None)

    def is_empty(self) -> bool:
        return not self._lots

    def currencies(self) -> List[str]:
        """All commodities held."""
        return list(self._lots)

    def __str__(self) -> str:
        return "{" + ", ".join(str(lot) for lots in self._lots.values() for lot in lots) + "}"