"""Per-IP rate limiting middleware using Redis with a Lua script."""

import logging
import random
import time
from typing import Callable

from fastapi import Request, Response
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from catalog.core.redis import get_redis

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window rate limit per client IP.

    Requests are allowed through when Redis cannot be reached.
    """

    # Atomic sliding-window check: trim, count, then record the request
    RATE_LIMIT_SCRIPT = """
    local key = KEYS[1]
    local now = tonumber(ARGV[1])
    local window = tonumber(ARGV[2])
    local limit = tonumber(ARGV[3])
    local request_id = ARGV[4]
    local window_start = now - window

    redis.call('ZREMRANGEBYSCORE', key, 0, window_start)

    local count = redis.call('ZCARD', key)

    if count < limit then
        redis.call('ZADD', key, now, request_id)
        redis.call('EXPIRE', key, window + 1)
        return {1, 0}
    else
        local oldest = redis.call('ZRANGE', key, 0, 0, 'WITHSCORES')
        local retry_after = 1
        if oldest and #oldest >= 2 then
            retry_after = math.ceil(oldest[2] + window - now) + 1
            if retry_after < 1 then retry_after = 1 end
        end
        return {0, retry_after}
    end
    """

    def __init__(self, app, ip_limit: int = 100, window: int = 1):
        super().__init__(app)
        self.ip_limit = ip_limit
        self.window = window
        self._rate_limit_script = None

    async def _get_rate_limit_script(self, redis):
        if self._rate_limit_script is None:
            self._rate_limit_script = redis.register_script(self.RATE_LIMIT_SCRIPT)
        return self._rate_limit_script

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client_ip = request.client.host if request.client else "unknown"

        try:
            redis = await get_redis()
            allowed, retry_after = await self._check_rate_limit_lua(
                redis, f"ratelimit:ip:{client_ip}", self.ip_limit
            )
        except RedisError as e:
            logger.warning(f"Rate limit check skipped, Redis unavailable: {e}")
            return await call_next(request)

        if not allowed:
            return JSONResponse(
                status_code=429,
                content={"success": False, "error": "Too many requests from this IP"},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    async def _check_rate_limit_lua(self, redis, key: str, limit: int) -> tuple[bool, int]:
        """Run the sliding-window script.

        Returns:
            Tuple of (allowed, retry_after_seconds)
        """
        now = time.time()
        # Unique member so concurrent requests never share a score entry
        request_id = f"{now}:{random.randint(0, 999999)}"

        script = await self._get_rate_limit_script(redis)
        result = await script(
            keys=[key],
            args=[now, self.window, limit, request_id],
        )

        return bool(result[0]), int(result[1])
