"""Core entities without I/O for pizza topping combinations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Order:
    """A single pizza order as an ordered, possibly duplicated topping list."""

    toppings: tuple[str, ...]


@dataclass(frozen=True)
class HashedOrder:
    """An order annotated with its order-agnostic fingerprint."""

    order: Order
    fingerprint: int

    @property
    def toppings(self) -> tuple[str, ...]:
        return self.order.toppings


@dataclass
class ComboSummary:
    """One distinct topping combination and how many orders matched it.

    ``toppings`` is the list of the first order seen with this fingerprint and
    is never replaced; only ``count`` changes.
    """

    fingerprint: int
    toppings: tuple[str, ...]
    count: int = 1


@dataclass(frozen=True)
class RankedRow:
    """Display-only wrapper pairing a summary with its 1-based rank."""

    rank: int
    summary: ComboSummary

    @property
    def count(self) -> int:
        return self.summary.count

    @property
    def display_toppings(self) -> tuple[str, ...]:
        return tuple(sorted(self.summary.toppings))

    @property
    def description(self) -> str:
        return " - ".join(self.display_toppings)

    def to_mapping(self) -> dict[str, object]:
        return {
            "rank": self.rank,
            "toppings": list(self.display_toppings),
            "count": self.count,
            "fingerprint": self.summary.fingerprint,
        }
