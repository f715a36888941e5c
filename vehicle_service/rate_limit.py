"""Rate limiting global / Global rate limiter.

Utilise slowapi pour limiter les requetes par appelant (header gateway) ou par IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from vehicle_service.config import settings


def caller_key(request: Request) -> str:
    """Cle de limitation / Rate-limit key: trusted caller identity, else client IP."""
    subject = request.headers.get("x-user-subject")
    if subject:
        return f"subject:{subject.strip()}"
    return get_remote_address(request)


limiter = Limiter(
    key_func=caller_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    enabled=settings.RATE_LIMIT_ENABLED,
)
