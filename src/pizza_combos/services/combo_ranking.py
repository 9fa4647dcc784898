"""Rank tallied combinations and render them as aligned text rows."""

from __future__ import annotations

import logging
from typing import Sequence

from ..domain.models import ComboSummary, RankedRow
from .report_limits import DEFAULT_TOP_N

_LOG = logging.getLogger(__name__)

BANNER = "*" * 41
"""Delimiter line printed around the report."""


def report_title(limit: int = DEFAULT_TOP_N) -> str:
    return f"Top {limit} pizza toppings"


def stable_combo_sort_key(summary: ComboSummary) -> int:
    """Descending-count key; ``sorted`` keeps first-seen order for ties."""

    return -summary.count


def rank_combos(
    summaries: Sequence[ComboSummary], limit: int = DEFAULT_TOP_N
) -> list[RankedRow]:
    """Return at most ``limit`` rows ordered by count, highest first."""

    if limit < 1:
        raise ValueError("Ranking limit must be at least 1.")
    ordered = sorted(summaries, key=stable_combo_sort_key)
    if len(ordered) > limit:
        _LOG.debug(
            "Truncating %d combinations to the top %d", len(ordered), limit
        )
        ordered = ordered[:limit]
    return [
        RankedRow(rank=index, summary=summary)
        for index, summary in enumerate(ordered, 1)
    ]


def format_report_rows(rows: Sequence[RankedRow]) -> list[str]:
    """Render ranked rows as ``"{rank}. {toppings} = {count}"`` with aligned columns."""

    if not rows:
        return []

    rank_width = len(str(len(rows)))
    count_width = max(len(str(row.count)) for row in rows)
    labels = [f"{str(row.rank).rjust(rank_width)}. {row.description}" for row in rows]
    label_width = max(len(label) for label in labels)

    return [
        f"{label.ljust(label_width)} = {str(row.count).rjust(count_width)}"
        for label, row in zip(labels, rows)
    ]


def format_report_lines(
    rows: Sequence[RankedRow], title: str | None = None
) -> list[str]:
    """Wrap the formatted rows with the header and footer banners."""

    header = [BANNER, title or report_title(), BANNER]
    return header + format_report_rows(rows) + [BANNER]
