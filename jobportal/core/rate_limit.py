"""
Simple in-memory rate limiter for the password reset endpoints.
"""
import logging
import time
from collections import defaultdict
from typing import Dict
from fastapi import Request, HTTPException, status

logger = logging.getLogger(__name__)

# {bucket: [timestamps]} where bucket is "<scope>:<ip>"
rate_limit_store: Dict[str, list] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(request: Request, scope: str, max_requests: int = 5, window_seconds: int = 60) -> None:
    """
    Check if client has exceeded the rate limit for ``scope``.

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    bucket = f"{scope}:{get_client_ip(request)}"
    now = time.time()

    cutoff = now - window_seconds
    rate_limit_store[bucket] = [
        timestamp for timestamp in rate_limit_store[bucket]
        if timestamp > cutoff
    ]

    request_count = len(rate_limit_store[bucket])
    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for {bucket} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded. Maximum {max_requests} requests per {window_seconds} seconds."
        )

    rate_limit_store[bucket].append(now)


def rate_limited(scope: str, max_requests: int = 5, window_seconds: int = 60):
    """Route dependency applying ``check_rate_limit`` under ``scope``."""
    def dependency(request: Request) -> None:
        check_rate_limit(request, scope, max_requests, window_seconds)
    return dependency
