import logging
from contextlib import contextmanager

from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from accounts.shared.http.errors import ApiError, ErrorType
from accounts.shared.logger import Logger

__all__ = ["server_error_handler"]

logger = Logger(__name__, level=logging.DEBUG).get_logger()


def _is_timeout(error: OperationalError) -> bool:
    # sqlite reports an expired busy timeout as "database is locked"
    message = str(error.orig).lower()
    return "locked" in message or "timeout" in message or "timed out" in message


@contextmanager
def server_error_handler(stacklevel=1):
    """Translate store failures that escape the adapter into API errors."""
    # Go 3 levels up to escape @contextmanager methods and current function
    stack_level = 2 + stacklevel
    kw = {"stacklevel": stack_level}
    try:
        yield

    except PoolTimeoutError as e:
        logger.error("Store connection pool timed out: %s", e, **kw)
        raise ApiError(ErrorType.STORE_TIMEOUT, "Store did not respond in time") from e

    except OperationalError as e:
        if _is_timeout(e):
            logger.error("Store operation timed out: %s", e, **kw)
            raise ApiError(
                ErrorType.STORE_TIMEOUT, "Store did not respond in time"
            ) from e
        logger.error("Store operation failed: %s", e, **kw)
        raise ApiError(ErrorType.SERVER_ERROR, "Failed to process request") from e

    except SQLAlchemyError as e:
        logger.error("Failed to process request: %s", e, **kw)
        raise ApiError(ErrorType.SERVER_ERROR, "Failed to process request") from e
