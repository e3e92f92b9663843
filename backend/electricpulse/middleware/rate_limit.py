"""Rate limiting (slowapi), keyed on client address."""
from slowapi import Limiter
from slowapi.util import get_remote_address

from electricpulse.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

AUTH_LIMIT = f"{settings.AUTH_RATE_LIMIT_PER_MINUTE}/minute"
