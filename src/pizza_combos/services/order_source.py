"""Load the pizza order feed from HTTP or disk and decode it into orders.

Transport, HTTP status and JSON decode failures are propagated unmodified;
this module never retries.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import requests

from ..domain.models import Order
from . import schema_registry

_LOG = logging.getLogger(__name__)

ORDERS_SCHEMA = "orders_v0.1"


class HttpSession(Protocol):
    """The subset of :class:`requests.Session` used by the fetcher."""

    def get(self, url: str, **kwargs: Any) -> requests.Response: ...


def fetch_orders_document(
    url: str,
    *,
    timeout: float,
    session: HttpSession | None = None,
) -> Any:
    """Download the order feed and return the decoded JSON document."""

    client = session or requests.Session()
    _LOG.debug("Fetching order feed from %s", url)
    response = client.get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


def load_orders_document(path: Path) -> Any:
    """Read the order feed from a local JSON file."""

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def decode_orders(document: Any) -> list[Order]:
    """Validate the feed shape and convert each record into an :class:`Order`."""

    schema_registry.validate(ORDERS_SCHEMA, document)
    orders = [Order(toppings=tuple(record["toppings"])) for record in document]
    _LOG.debug("Decoded %d orders", len(orders))
    return orders
