# -*- coding: utf-8 -*-
"""Utility modules."""

from profit_dashboard.utils.dates import (
    local_day_bounds,
    local_now,
    parse_record_date,
    start_of_local_day,
)
from profit_dashboard.utils.validation import is_blank, strip_handle

__all__ = [
    "is_blank",
    "local_day_bounds",
    "local_now",
    "parse_record_date",
    "start_of_local_day",
    "strip_handle",
]
