from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from time import monotonic

from accounts.shared.logger import Logger

logger = Logger(__name__).get_logger()


@dataclass
class ThrottleEntry:
    failures: int
    expires_at: float


class LoginThrottle:
    """Failed login counter keyed by account email.

    An identifier is blocked once it has ``max_attempts`` recorded failures.
    Every failure or success pushes the entry's expiry ``reset_window``
    seconds into the future; expired entries are dropped lazily when touched
    and in bulk by ``sweep``, so a blocked account unlocks itself after the
    window and a successful login leaves only a zeroed entry behind until then.

    State lives in process memory and is lost on restart.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        reset_window: float = 30 * 60,
        sweep_interval: float = 60,
        clock: Callable[[], float] = monotonic,
    ):
        # Params
        self.__max_attempts = max_attempts
        self.__reset_window = reset_window
        self.__sweep_interval = sweep_interval
        self.__clock = clock

        # Checks
        self.__entries: dict[str, ThrottleEntry] = {}
        self.__lock = Lock()

        # Time
        self.__last_sweep = clock()

    @property
    def max_attempts(self) -> int:
        return self.__max_attempts

    def check_allowed(self, identifier: str) -> bool:
        with self.__lock:
            entry = self.__live_entry(identifier, self.__clock())
            return entry is None or entry.failures < self.__max_attempts

    def record_failure(self, identifier: str) -> int:
        """Count one failed attempt and return the running total."""
        with self.__lock:
            now = self.__clock()
            entry = self.__live_entry(identifier, now)
            if entry is None:
                entry = self.__entries[identifier] = ThrottleEntry(0, now)

            entry.failures += 1
            entry.expires_at = now + self.__reset_window
            failures = entry.failures

            self.__maybe_sweep(now)

        if failures == self.__max_attempts:
            logger.warning("Locking out %s after %d failed logins", identifier, failures)
        return failures

    def record_success(self, identifier: str):
        with self.__lock:
            now = self.__clock()
            self.__entries[identifier] = ThrottleEntry(0, now + self.__reset_window)
            self.__maybe_sweep(now)

    def failures(self, identifier: str) -> int:
        with self.__lock:
            entry = self.__live_entry(identifier, self.__clock())
            return 0 if entry is None else entry.failures

    def sweep(self) -> int:
        """Remove every expired entry and return how many were dropped."""
        with self.__lock:
            return self.__sweep(self.__clock())

    def __contains__(self, identifier: str) -> bool:
        with self.__lock:
            return self.__live_entry(identifier, self.__clock()) is not None

    def __len__(self) -> int:
        with self.__lock:
            return len(self.__entries)

    # Callers must hold the lock for everything below

    def __live_entry(self, identifier: str, now: float) -> ThrottleEntry | None:
        entry = self.__entries.get(identifier)
        if entry is not None and entry.expires_at <= now:
            del self.__entries[identifier]
            return None
        return entry

    def __maybe_sweep(self, now: float):
        if now - self.__last_sweep >= self.__sweep_interval:
            self.__sweep(now)

    def __sweep(self, now: float) -> int:
        expired = [key for key, entry in self.__entries.items() if entry.expires_at <= now]
        for key in expired:
            del self.__entries[key]
        self.__last_sweep = now
        if expired:
            logger.debug("Swept %d expired throttle entries", len(expired))
        return len(expired)
