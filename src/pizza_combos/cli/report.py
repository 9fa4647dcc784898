"""Command line entry point printing the most popular topping combinations."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import requests

from ..domain.models import Order
from ..services.combo_key import HASH_REGISTRY, get_topping_hasher
from ..services.combo_report import build_report_payload, summarize_orders
from ..services.combo_tally import InvalidOrderInputError
from ..services.order_source import (
    HttpSession,
    decode_orders,
    fetch_orders_document,
    load_orders_document,
)
from ..services.report_limits import MAX_TOP_N, ReportConfig
from ..services.schema_registry import SchemaValidationError
from . import reason_codes

_LOG = logging.getLogger(__name__)


def _bounded_limit(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("limit must be an integer") from exc
    if not 1 <= value <= MAX_TOP_N:
        raise argparse.ArgumentTypeError(f"limit must be between 1 and {MAX_TOP_N}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pizza-combos",
        description="Report the most frequently ordered pizza topping combinations.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url",
        help="Order feed URL (defaults to PIZZA_COMBOS_ORDERS_URL).",
    )
    source.add_argument(
        "--file",
        type=Path,
        help="Read the order feed from a local JSON file instead of HTTP.",
    )
    parser.add_argument(
        "--limit",
        type=_bounded_limit,
        help="Number of combinations to report (defaults to PIZZA_COMBOS_TOP_N).",
    )
    parser.add_argument(
        "--hash",
        dest="hash_name",
        choices=sorted(HASH_REGISTRY),
        help="Stable string hash used for topping fingerprints.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the report as JSON instead of aligned text.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline progress to stderr.",
    )
    return parser.parse_args(argv)


def load_orders(
    args: argparse.Namespace,
    config: ReportConfig,
    session: HttpSession | None = None,
) -> list[Order]:
    """Read the feed from the selected source and decode it."""

    document: Any
    if args.file is not None:
        document = load_orders_document(args.file)
    else:
        document = fetch_orders_document(
            config.orders_url, timeout=config.fetch_timeout, session=session
        )
    return decode_orders(document)


def _report_error(reason: str, detail: str) -> int:
    sys.stderr.write(f"error: {reason}: {detail}\n")
    return 1


def main(
    argv: Sequence[str] | None = None, session: HttpSession | None = None
) -> int:
    """Run the report and return the process exit status."""

    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = ReportConfig.from_env().with_overrides(
        top_n=args.limit, orders_url=args.url, hash_name=args.hash_name
    )

    try:
        get_topping_hasher(config.hash_name)
    except ValueError as exc:
        return _report_error(reason_codes.INVALID_CONFIG, str(exc))

    try:
        orders = load_orders(args, config, session=session)
        report = summarize_orders(orders, config)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        _LOG.debug("Order feed decode failed: %s", exc)
        return _report_error(
            reason_codes.DECODE_FAILED, "Order feed is not valid UTF-8 JSON."
        )
    except (InvalidOrderInputError, SchemaValidationError) as exc:
        _LOG.debug("Order feed validation failed: %s", exc)
        return _report_error(
            reason_codes.INVALID_INPUT, "Order feed failed validation."
        )
    except (requests.RequestException, OSError) as exc:
        _LOG.debug("Order feed retrieval failed: %s", exc)
        return _report_error(
            reason_codes.FETCH_FAILED, "Unable to retrieve the order feed."
        )

    if args.json:
        sys.stdout.write(json.dumps(build_report_payload(report), ensure_ascii=False))
        sys.stdout.write("\n")
    else:
        for line in report.lines():
            sys.stdout.write(f"{line}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
