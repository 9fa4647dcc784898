"""Configurable limits and defaults for the topping combination report."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from .combo_key import DEFAULT_HASH_NAME

DEFAULT_TOP_N = 20
"""Number of ranked combinations reported by default."""

MAX_TOP_N = 1000
"""Upper bound applied to configured ranking limits."""

DEFAULT_ORDERS_URL = "http://files.olo.com/pizzas.json"
"""Location of the published order feed."""

DEFAULT_FETCH_TIMEOUT = 30.0
"""Seconds allowed for the order feed request."""

TOP_N_ENV = "PIZZA_COMBOS_TOP_N"
ORDERS_URL_ENV = "PIZZA_COMBOS_ORDERS_URL"
FETCH_TIMEOUT_ENV = "PIZZA_COMBOS_FETCH_TIMEOUT"
HASH_ENV = "PIZZA_COMBOS_HASH"


def _env_int(
    name: str,
    default: int,
    *,
    min_value: int = 0,
    max_value: int | None = None,
) -> int:
    """Return a bounded integer limit sourced from the environment."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    if parsed < min_value:
        return default
    if max_value is not None and parsed > max_value:
        return max_value
    return parsed


def _env_float(name: str, default: float) -> float:
    """Return a positive float sourced from the environment."""

    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    if parsed <= 0:
        return default
    return parsed


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if not raw or not raw.strip():
        return default
    return raw.strip()


@dataclass(frozen=True)
class ReportConfig:
    """Container describing every configurable report setting."""

    top_n: int
    orders_url: str
    fetch_timeout: float
    hash_name: str

    @classmethod
    def from_env(cls) -> "ReportConfig":
        """Return a config using the configured environment variables."""

        return cls(
            top_n=_env_int(TOP_N_ENV, DEFAULT_TOP_N, min_value=1, max_value=MAX_TOP_N),
            orders_url=_env_str(ORDERS_URL_ENV, DEFAULT_ORDERS_URL),
            fetch_timeout=_env_float(FETCH_TIMEOUT_ENV, DEFAULT_FETCH_TIMEOUT),
            hash_name=_env_str(HASH_ENV, DEFAULT_HASH_NAME).lower(),
        )

    def with_overrides(self, **changes: object) -> "ReportConfig":
        """Return a copy with every non-None override applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


DEFAULT_REPORT_CONFIG = ReportConfig(
    DEFAULT_TOP_N,
    DEFAULT_ORDERS_URL,
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_HASH_NAME,
)
