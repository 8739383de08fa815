"""
Client-side throttle for AI structurer calls.

Allows at most MAX_REQUESTS per WINDOW_SECONDS. Exceeding the window, or the
provider still answering with a rate limit after the retries, blocks every AI
call until the block expires; analyze_cv() then goes straight to the rule-based
parser.
"""

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, TypeVar

from resume_engine.core.errors import RateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_REQUESTS = 10
WINDOW_SECONDS = 60.0
BLOCK_SECONDS = 30 * 60.0
MAX_RETRIES = 2
BASE_DELAY_SECONDS = 2.0


class AIRateLimiter:
    def __init__(
        self,
        max_requests: int = MAX_REQUESTS,
        window_seconds: float = WINDOW_SECONDS,
        block_seconds: float = BLOCK_SECONDS,
        max_retries: int = MAX_RETRIES,
        base_delay: float = BASE_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.block_seconds = block_seconds
        self.max_retries = max_retries
        self.base_delay = base_delay
        self._clock = clock
        self._sleep = sleep
        self._requests: Deque[float] = deque()
        self._blocked_until: Optional[float] = None

    @property
    def blocked(self) -> bool:
        if self._blocked_until is None:
            return False
        if self._clock() >= self._blocked_until:
            logger.info("AI rate limit block expired, resetting")
            self.reset()
            return False
        return True

    @property
    def remaining_block_seconds(self) -> float:
        if not self.blocked:
            return 0.0
        return self._blocked_until - self._clock()

    @property
    def requests_in_window(self) -> int:
        self._drop_expired()
        return len(self._requests)

    def block(self, seconds: Optional[float] = None) -> None:
        """Stop all AI calls for `seconds` (the provider's retry_after), or block_seconds."""
        duration = seconds if seconds and seconds > 0 else self.block_seconds
        logger.warning(f"Blocking AI calls for {duration:.0f}s")
        self._blocked_until = self._clock() + duration

    def reset(self) -> None:
        self._requests.clear()
        self._blocked_until = None

    def _drop_expired(self) -> None:
        cutoff = self._clock() - self.window_seconds
        while self._requests and self._requests[0] <= cutoff:
            self._requests.popleft()

    def acquire(self) -> None:
        """
        Reserve a request slot.

        Raises:
            RateLimitError: while blocked, or when the window is full (which
                also starts a block)
        """
        if self.blocked:
            raise RateLimitError("AI calls are blocked by the rate limiter", self.remaining_block_seconds)

        self._drop_expired()
        if len(self._requests) >= self.max_requests:
            self.block()
            raise RateLimitError(
                f"More than {self.max_requests} AI requests in {self.window_seconds:.0f}s",
                self.block_seconds,
            )
        self._requests.append(self._clock())

    async def call(self, fn: Callable[[], Awaitable[T]]) -> T:
        """
        Run `fn` under the limit, retrying provider rate limits with
        exponential backoff (base_delay, 2 * base_delay, ...).

        A rate limit that survives every retry blocks further calls for the
        provider's retry_after. Other errors propagate untouched.
        """
        self.acquire()
        attempt = 0
        while True:
            try:
                return await fn()
            except RateLimitError as e:
                if attempt >= self.max_retries:
                    self.block(e.retry_after)
                    raise
                delay = self.base_delay * 2 ** attempt
                attempt += 1
                logger.info(f"AI rate limited, retrying in {delay:.1f}s (attempt {attempt}/{self.max_retries})")
                await self._sleep(delay)
