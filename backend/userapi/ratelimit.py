"""Per-address request admission (sliding window rate limiter)."""
from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Callable, Iterable

from flask import Flask, Response, g, jsonify, request
from loguru import logger

DEFAULT_MESSAGE = "Too many requests, please try again later."


@dataclass(frozen=True, slots=True)
class Decision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0


class RateLimiter:
    """In-memory limiter keyed by caller address.

    Each key keeps the timestamps of its admitted requests inside the current
    window. A request is admitted while fewer than ``max_requests`` hits are
    younger than ``window_seconds``. Counters are per process and are lost
    on restart.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 15 * 60,
        *,
        message: str = DEFAULT_MESSAGE,
        exempt_blueprints: Iterable[str] = ("docs",),
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self.exempt_blueprints = frozenset(exempt_blueprints)
        self._clock = clock
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()
        self._last_cleanup = clock()
        self._cleanup_interval = 60.0  # seconds

    def init_app(self, app: Flask) -> None:
        app.extensions["rate_limiter"] = self
        app.before_request(self._before_request)
        app.after_request(self._after_request)

    def hit(self, key: str) -> Decision:
        """Record one request for ``key`` and decide whether to admit it."""
        now = self._clock()
        window_start = now - self.window_seconds
        with self._lock:
            self._cleanup_old_keys(now)
            hits = self._hits[key]
            while hits and hits[0] <= window_start:
                hits.popleft()
            if len(hits) >= self.max_requests:
                retry_after = max(0, int(self.window_seconds - (now - hits[0])))
                return Decision(False, self.max_requests, 0, retry_after)
            hits.append(now)
            return Decision(True, self.max_requests, self.max_requests - len(hits))

    def _cleanup_old_keys(self, now: float) -> None:
        """Drop keys whose hits have all expired; caller holds the lock."""
        if now - self._last_cleanup < self._cleanup_interval:
            return
        self._last_cleanup = now
        window_start = now - self.window_seconds
        stale = [k for k, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in stale:
            del self._hits[key]

    def _before_request(self) -> Response | None:
        if request.blueprint in self.exempt_blueprints:
            return None
        key = request.remote_addr or "anonymous"
        decision = self.hit(key)
        g.rate_limit = decision
        if decision.allowed:
            return None
        logger.warning("Rate limit exceeded for {} on {} {}", key, request.method, request.path)
        resp = jsonify({"error": "too_many_requests", "message": self.message})
        resp.status_code = 429
        resp.headers["Retry-After"] = str(decision.retry_after)
        return resp

    def _after_request(self, response: Response) -> Response:
        decision: Decision | None = g.get("rate_limit")
        if decision is not None:
            response.headers["X-RateLimit-Limit"] = str(decision.limit)
            response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response
