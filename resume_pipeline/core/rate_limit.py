from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from resume_pipeline.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-client limit for a route; ``settings.rate_limit`` unless ``limit`` is given.

    Uploads default to the stricter budget since each one is an LLM call.
    """
    if settings.rate_limit_enabled:
        return limiter.limit(limit or settings.rate_limit)

    def passthrough(func):
        return func

    return passthrough
