"""Group orders by fingerprint and count each topping combination."""

from __future__ import annotations

import logging
from typing import Iterable

from ..domain.models import ComboSummary, HashedOrder, Order
from .combo_key import StringHash, fnv1a_32, order_agnostic_hash

_LOG = logging.getLogger(__name__)


class InvalidOrderInputError(ValueError):
    """Raised when the order list or an order's toppings are malformed."""


def validate_orders(orders: Iterable[Order] | None) -> list[Order]:
    """
    Fail fast on missing orders or toppings instead of treating them as empty.

    The order sequence and every topping list are materialized exactly once,
    so one-shot iterables are counted in full. Orders whose toppings were not
    already a tuple are rebuilt around the materialized copy.
    """

    if orders is None:
        raise InvalidOrderInputError("Order list is missing.")
    validated: list[Order] = []
    for index, order in enumerate(list(orders)):
        if order is None:
            raise InvalidOrderInputError(f"Order {index} is missing.")
        toppings = order.toppings
        if toppings is None:
            raise InvalidOrderInputError(f"Order {index} has no topping list.")
        if isinstance(toppings, (str, bytes)):
            raise InvalidOrderInputError(
                f"Order {index} has a single string instead of a topping list."
            )
        materialized = tuple(toppings)
        for topping in materialized:
            if not isinstance(topping, str):
                raise InvalidOrderInputError(
                    f"Order {index} contains a non-text topping."
                )
        if toppings is not materialized:
            order = Order(toppings=materialized)
        validated.append(order)
    return validated


def create_hashed_orders(
    orders: Iterable[Order] | None, string_hash: StringHash = fnv1a_32
) -> list[HashedOrder]:
    """Validate ``orders`` and annotate each with its fingerprint."""

    validated = validate_orders(orders)
    return [
        HashedOrder(
            order=order,
            fingerprint=order_agnostic_hash(order.toppings, string_hash),
        )
        for order in validated
    ]


def tally_combos(hashed_orders: Iterable[HashedOrder]) -> list[ComboSummary]:
    """
    Count orders per fingerprint in a single pass.

    The first order seen for a fingerprint supplies the representative
    toppings; later matches only bump the count. Summaries are returned in
    first-seen order.
    """

    summaries: dict[int, ComboSummary] = {}
    total = 0
    for hashed in hashed_orders:
        total += 1
        summary = summaries.get(hashed.fingerprint)
        if summary is None:
            summaries[hashed.fingerprint] = ComboSummary(
                fingerprint=hashed.fingerprint,
                toppings=tuple(hashed.toppings),
                count=1,
            )
        else:
            summary.count += 1

    _LOG.debug("Tallied %d orders into %d combinations", total, len(summaries))
    return list(summaries.values())
