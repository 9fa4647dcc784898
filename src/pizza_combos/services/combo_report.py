"""Compose hashing, tallying and ranking into a single report."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from ..domain.models import Order, RankedRow
from . import schema_registry
from .combo_key import get_topping_hasher
from .combo_ranking import format_report_lines, rank_combos, report_title
from .combo_tally import create_hashed_orders, tally_combos
from .report_limits import DEFAULT_REPORT_CONFIG, ReportConfig

_LOG = logging.getLogger(__name__)

REPORT_SCHEMA = "combo_report_v0.1"


@dataclass(frozen=True)
class ComboReport:
    """Ranked result of one pipeline run."""

    rows: tuple[RankedRow, ...]
    total_orders: int
    distinct_combos: int
    hash_name: str
    limit: int

    def lines(self) -> list[str]:
        """Return the banner-wrapped text rendering."""

        return format_report_lines(self.rows, title=report_title(self.limit))

    def to_mapping(self) -> dict[str, object]:
        return {
            "operation": "top_combos",
            "hash_function": self.hash_name,
            "total_orders": self.total_orders,
            "distinct_combos": self.distinct_combos,
            "limit": self.limit,
            "combos": [row.to_mapping() for row in self.rows],
        }


def summarize_orders(
    orders: Iterable[Order] | None,
    config: ReportConfig = DEFAULT_REPORT_CONFIG,
) -> ComboReport:
    """Run orders through fingerprinting, tallying and ranking."""

    string_hash = get_topping_hasher(config.hash_name)
    hashed_orders = create_hashed_orders(orders, string_hash)
    summaries = tally_combos(hashed_orders)
    rows = rank_combos(summaries, limit=config.top_n)
    _LOG.debug(
        "Ranked %d of %d combinations using %s",
        len(rows),
        len(summaries),
        config.hash_name,
    )
    return ComboReport(
        rows=tuple(rows),
        total_orders=len(hashed_orders),
        distinct_combos=len(summaries),
        hash_name=config.hash_name,
        limit=config.top_n,
    )


def build_report_payload(report: ComboReport) -> dict[str, object]:
    """Return the JSON payload for ``report`` after checking its contract."""

    payload = report.to_mapping()
    schema_registry.validate(REPORT_SCHEMA, payload)
    return payload
