"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. create_app() switches it off when
RATE_LIMIT_ENABLED is false.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from taskhub.core.config import get_settings


def actor_or_remote_address(request: Request) -> str:
    """Rate-limit key: the forwarded actor id when present, else the client address."""
    actor_id = request.headers.get(get_settings().actor_header_name)
    if actor_id:
        return f"actor:{actor_id.strip()}"
    return get_remote_address(request)


limiter = Limiter(key_func=actor_or_remote_address)

WRITE_ENDPOINT_LIMIT = "120/minute"

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
