import time
from typing import Callable, Protocol


class RateLimitStore(Protocol):
    """Key/value store holding the last request timestamp per user."""

    def get(self, key: str) -> float | None:
        ...

    def set(self, key: str, value: float) -> None:
        ...


class InMemoryRateLimitStore:
    def __init__(self) -> None:
        self._values: dict[str, float] = {}

    def get(self, key: str) -> float | None:
        return self._values.get(key)

    def set(self, key: str, value: float) -> None:
        self._values[key] = value


class RateLimiter:
    """Allows one request per user inside ``window_ms``.

    Rejected requests do not refresh the timestamp, so a user who keeps
    retrying is let through once the first window has passed.
    """

    def __init__(
        self,
        store: RateLimitStore,
        *,
        window_ms: int = 5000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.window_sec = max(0, int(window_ms)) / 1000
        self._clock = clock

    def is_limited(self, user_id: str) -> bool:
        now = self._clock()
        last = self.store.get(user_id)
        if last is not None and now - last < self.window_sec:
            return True
        self.store.set(user_id, now)
        return False
