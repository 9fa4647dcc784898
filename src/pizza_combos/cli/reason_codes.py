"""Reason codes reported by the command line on failure."""

from __future__ import annotations

INVALID_INPUT = "invalid_input"
"""The order feed or an order within it failed validation."""

FETCH_FAILED = "fetch_failed"
"""The order feed could not be retrieved."""

DECODE_FAILED = "decode_failed"
"""The order feed was retrieved but is not valid UTF-8 JSON."""

INVALID_CONFIG = "invalid_config"
"""A configured setting, such as the topping hash name, is not supported."""
