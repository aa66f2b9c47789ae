from collections import deque
from time import monotonic

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from accounts.shared import Logger
from accounts.shared.http import ErrorType

logger = Logger(__name__).get_logger()


class RateLimit(BaseHTTPMiddleware):
    """Rate Limit middleware for FastApi endpoints
    Based loosely on sliding window rate limiting.
    Compares against the client IP.
    """

    def __init__(
        self,
        app,
        dispatch=None,
        timeout_period_s: float = 10,
        max_per_second: int = 50,
    ):
        super().__init__(app, dispatch)

        # Params
        self.__max_per_second = max_per_second
        self.__timeout_period_s = timeout_period_s

        # Checks
        self.__bucket: dict[str, deque[float]] = {}
        self.__timeout_club: dict[str, float] = {}

        # Time
        self.__now = monotonic()

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Skip rate limiting for OPTIONS requests (CORS preflight)
        if request.method == "OPTIONS" or request.client is None:
            return await call_next(request)

        self.__now = monotonic()
        if not self.__check(request.client.host):
            return JSONResponse(
                status_code=429,
                content={
                    "error": ErrorType.TOO_MANY_REQUESTS.value,
                    "message": "Too many requests.",
                },
            )

        return await call_next(request)

    def __check(self, key: str) -> bool:
        # if property is in timeout; then reject
        # record the connection timestamp
        # lazily prune old records
        # after pruning, if records exceeds
        # `max_per_second` then reject

        if self.__in_timeout(key):
            return False

        queue = self.__bucket.setdefault(key, deque())
        queue.append(self.__now)

        while self.__now - queue[0] > 1:
            queue.popleft()

        if len(queue) > self.__max_per_second:
            logger.warning("Rate limiting %s for %ss", key, self.__timeout_period_s)
            self.__timeout_club[key] = self.__now
            return False

        return True

    def __in_timeout(self, key: str) -> bool:
        if key not in self.__timeout_club:
            return False

        if self.__now - self.__timeout_club[key] > self.__timeout_period_s:
            del self.__timeout_club[key]
            return False

        return True
