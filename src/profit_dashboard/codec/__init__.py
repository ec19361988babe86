# -*- coding: utf-8 -*-
"""Amount parsing and display formatting."""

from profit_dashboard.codec.number_codec import (
    ZERO,
    canonical_text,
    format_grouped,
    format_limited,
    parse_amount,
)

__all__ = [
    "ZERO",
    "canonical_text",
    "format_grouped",
    "format_limited",
    "parse_amount",
]
