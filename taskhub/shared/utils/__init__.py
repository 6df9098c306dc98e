"""Shared utilities: datetime and id generators."""

from taskhub.shared.utils.datetime import ensure_utc, utc_now
from taskhub.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
