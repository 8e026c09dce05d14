"""
Rate limiting using slowapi.

Requests are keyed by client IP. Every route gets the default limit through
SlowAPIMiddleware; write endpoints that fan out (invitation emails, comment
threads) carry tighter per-route limits.

Rate Limits:
- Invitation creation: 20 per minute
- Comment creation: 60 per minute
- Default: 100 requests per minute
"""

import ipaddress
import logging

from starlette.requests import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from infrastructure.config.settings import settings

logger = logging.getLogger(__name__)


def _public_ip(value: str) -> str | None:
    """Return *value* if it is a valid, non-private IP address."""
    try:
        addr = ipaddress.ip_address(value.strip())
    except ValueError:
        return None
    if addr.is_private or addr.is_loopback or addr.is_link_local:
        # Spoofable through X-Forwarded-For
        return None
    return str(addr)


def _get_real_ip(request: Request) -> str:
    """Client IP from proxy headers, falling back to the connection address.

    Behind a reverse proxy every request would otherwise share the proxy's
    bucket. Private and loopback values in the headers are ignored.
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # First entry is the original client
        candidate = _public_ip(forwarded.split(",")[0])
        if candidate:
            return candidate
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        candidate = _public_ip(real_ip)
        if candidate:
            return candidate
    return get_remote_address(request)


# Format: "count/period" where period can be: second, minute, hour, day
RATE_LIMITS = {
    "invitation_create": "20/minute",
    "comment_create": "60/minute",
    "default": "100/minute",
}

_storage_uri = settings.redis_url if settings.redis_url else "memory://"

if not settings.redis_url and settings.is_production:
    logger.warning(
        "Rate limiter using in-memory storage; limits are per worker. Set REDIS_URL."
    )

limiter = Limiter(
    key_func=_get_real_ip,
    storage_uri=_storage_uri,
    default_limits=[RATE_LIMITS["default"]],
)


def get_rate_limit(endpoint: str) -> str:
    """
    Rate limit string for an endpoint identifier.

    Example:
        >>> get_rate_limit("comment_create")
        "60/minute"
        >>> get_rate_limit("unknown")
        "100/minute"
    """
    return RATE_LIMITS.get(endpoint, RATE_LIMITS["default"])
