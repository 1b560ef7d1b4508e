from __future__ import annotations

from collections import defaultdict, deque
from threading import Lock
import time
from typing import Deque

from fastapi import HTTPException, Request, status


class SlidingWindowLimiter:
    def __init__(self) -> None:
        self._buckets: dict[str, Deque[float]] = defaultdict(deque)
        self._lock = Lock()

    def _prune(self, bucket: Deque[float], window_seconds: int, now: float) -> None:
        earliest = now - window_seconds
        while bucket and bucket[0] < earliest:
            bucket.popleft()

    def retry_after(self, *, key: str, limit: int, window_seconds: int) -> int | None:
        """Seconds until ``key`` may try again, or ``None`` while under ``limit``."""
        now = time.time()
        with self._lock:
            bucket = self._buckets[key]
            self._prune(bucket, window_seconds, now)
            if len(bucket) < limit:
                return None
            return max(1, int(bucket[0] + window_seconds - now))

    def hit(self, key: str) -> None:
        with self._lock:
            self._buckets[key].append(time.time())

    def reset(self, key: str) -> None:
        with self._lock:
            self._buckets.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()


_limiter = SlidingWindowLimiter()


def _request_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_key(request: Request, scope: str, identity: str | None = None) -> str:
    return f"{scope}|{_request_ip(request)}|{(identity or '').strip().lower()}"


def ensure_not_limited(*, key: str, scope: str, limit: int, window_seconds: int) -> None:
    retry_after = _limiter.retry_after(key=key, limit=limit, window_seconds=window_seconds)
    if retry_after is None:
        return
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many requests for {scope}. Try again in {retry_after} second(s).",
        headers={"Retry-After": str(retry_after)},
    )


def record_attempt(key: str) -> None:
    _limiter.hit(key)


def reset_attempts(key: str) -> None:
    _limiter.reset(key)


def clear_rate_limiter() -> None:
    _limiter.clear()
