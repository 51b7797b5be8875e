"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, today_iso
from utils.currency import format_currency, to_cents
from utils.request_context import (
    get_request_id,
    set_request_id,
    clear_request_id,
    request_context,
)
