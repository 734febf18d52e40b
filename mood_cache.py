from collections import OrderedDict
from typing import Any, Callable, List, NamedTuple, Optional
import logging
import threading
import time

logger = logging.getLogger(__name__)


class CacheEntry(NamedTuple):
    recommendations: Optional[List[Any]]
    timestamp: float  # seconds since the epoch


class CacheHit(NamedTuple):
    recommendations: List[Any]
    timestamp: float
    age_ms: float


class MoodCache:
    """LRU cache of recommendation lists keyed by mood.

    With the default capacity of 1 the cache is a single slot: storing a new
    mood evicts whatever mood was cached before.
    """

    def __init__(self, capacity: int = 1, clock: Callable[[], float] = time.time):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._last_mood: Optional[str] = None
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    @property
    def last_mood(self) -> Optional[str]:
        """The mood stored most recently, or None if nothing was stored yet."""
        with self._lock:
            return self._last_mood

    def lookup(self, mood: str, ttl_ms: float, now: Optional[float] = None) -> Optional[CacheHit]:
        """Return the cached recommendations for mood if they are younger than ttl_ms."""
        now = self.now() if now is None else now
        with self._lock:
            entry = self._entries.get(mood)
            if entry is None or entry.recommendations is None:
                return None
            age_ms = (now - entry.timestamp) * 1000
            if age_ms >= ttl_ms:
                return None
            self._entries.move_to_end(mood)
            return CacheHit(entry.recommendations, entry.timestamp, age_ms)

    def store(self, mood: str, recommendations: List[Any], now: Optional[float] = None) -> bool:
        """Cache recommendations for mood and return whether the mood changed."""
        now = self.now() if now is None else now
        with self._lock:
            mood_changed = self._last_mood is not None and self._last_mood != mood
            self._entries[mood] = CacheEntry(recommendations, now)
            self._entries.move_to_end(mood)
            while len(self._entries) > self.capacity:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cached recommendations for mood '{evicted}'")
            self._last_mood = mood
            return mood_changed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._last_mood = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, mood: str) -> bool:
        with self._lock:
            return mood in self._entries
