# riddlebox/puzzles/cache.py
"""
Once-per-calendar-day memoization of served puzzles.

Keys are `<type>:<YYYY-MM-DD>` in the configured local time zone, with an
optional slot suffix (`logic:2024-06-01:p3`). A slot expires at the next
local midnight unless a TTL in seconds is configured. Two requests that
miss at the same moment both compute; the last write keeps the slot.
"""

from __future__ import annotations

import datetime as dt
import logging
import threading
from typing import Any, Callable, Dict, Optional, Tuple, Union

import pytz
from sqlalchemy.exc import SQLAlchemyError

from riddlebox.extensions import db

from .models import DailyCacheSlot
from .records import PuzzleResult, utcnow

logger = logging.getLogger(__name__)

DEFAULT_TZ = "America/Denver"

Clock = Callable[[], dt.datetime]


def _aware(ts: dt.datetime) -> dt.datetime:
    # sqlite hands back naive datetimes
    return ts if ts.tzinfo else ts.replace(tzinfo=dt.timezone.utc)


class MemoryCacheBackend:
    """Process-local slots. Fine for a single worker and for tests."""

    def __init__(self):
        self._slots: Dict[str, Tuple[Any, dt.datetime]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Tuple[Any, dt.datetime]]:
        with self._lock:
            return self._slots.get(key)

    def set(self, key: str, value: Any, expires_at: dt.datetime) -> None:
        with self._lock:
            self._slots[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._slots.pop(key, None) is not None

    def purge(self, now: dt.datetime) -> int:
        with self._lock:
            stale = [k for k, (_, expires_at) in self._slots.items() if _aware(expires_at) <= now]
            for k in stale:
                del self._slots[k]
        return len(stale)


class DatabaseCacheBackend:
    """Slots in the `daily_cache_slots` table, shared by every worker."""

    def get(self, key: str) -> Optional[Tuple[PuzzleResult, dt.datetime]]:
        try:
            row = db.session.get(DailyCacheSlot, key)
        except SQLAlchemyError:
            logger.exception("[puzzles] cache read failed for %s", key)
            db.session.rollback()
            return None
        if row is None:
            return None
        try:
            value = PuzzleResult.from_dict(row.payload)
        except (KeyError, TypeError, ValueError):
            logger.warning("[puzzles] dropping unreadable cache slot %s", key)
            return None
        return value, _aware(row.expires_at)

    def set(self, key: str, value: PuzzleResult, expires_at: dt.datetime) -> None:
        try:
            db.session.merge(DailyCacheSlot(key=key, payload=value.to_dict(), expires_at=expires_at))
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] cache write failed for %s", key)

    def delete(self, key: str) -> bool:
        try:
            deleted = DailyCacheSlot.query.filter_by(key=key).delete()
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] cache delete failed for %s", key)
            return False
        return bool(deleted)

    def purge(self, now: dt.datetime) -> int:
        try:
            stale = DailyCacheSlot.query.filter(DailyCacheSlot.expires_at <= now)
            deleted = stale.delete(synchronize_session=False)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("[puzzles] cache purge failed")
            return 0
        return deleted


class DailyCache:
    def __init__(self, backend=None, tz: Union[str, dt.tzinfo] = DEFAULT_TZ,
                 clock: Optional[Clock] = None, ttl: Optional[int] = None):
        self.backend = backend if backend is not None else MemoryCacheBackend()
        self.tz = pytz.timezone(tz) if isinstance(tz, str) else tz
        self.clock = clock or utcnow
        self.ttl = ttl

    def now(self) -> dt.datetime:
        return _aware(self.clock())

    def today(self) -> dt.date:
        return self.now().astimezone(self.tz).date()

    def key_for(self, content_type: str, slot: Optional[str] = None) -> str:
        key = f"{content_type}:{self.today().isoformat()}"
        return f"{key}:{slot}" if slot else key

    def expires_at(self) -> dt.datetime:
        if self.ttl:
            return self.now() + dt.timedelta(seconds=self.ttl)
        tomorrow = self.today() + dt.timedelta(days=1)
        midnight = dt.datetime.combine(tomorrow, dt.time.min)
        if hasattr(self.tz, "localize"):
            midnight = self.tz.localize(midnight)
        else:
            midnight = midnight.replace(tzinfo=self.tz)
        return midnight.astimezone(dt.timezone.utc)

    def get(self, key: str) -> Optional[Any]:
        entry = self.backend.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if _aware(expires_at) <= self.now():
            self.backend.delete(key)
            return None
        return value

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Tuple[Any, bool]:
        """Return (value, cached). `compute` runs only on a miss."""
        hit = self.get(key)
        if hit is not None:
            logger.debug("[puzzles] cache hit %s", key)
            return hit, True
        value = compute()
        # past days' keys are never read again, so expired slots go on every write
        purged = self.backend.purge(self.now())
        if purged:
            logger.debug("[puzzles] purged %d expired cache slots", purged)
        self.backend.set(key, value, self.expires_at())
        return value, False

    def invalidate(self, key: str) -> bool:
        removed = self.backend.delete(key)
        if removed:
            logger.info("[puzzles] invalidated cache slot %s", key)
        return removed


def cache_from_config(cfg: Dict[str, Any], clock: Optional[Clock] = None) -> DailyCache:
    kind = (cfg.get("DAILY_CACHE_BACKEND") or "memory").lower()
    backend = DatabaseCacheBackend() if kind == "database" else MemoryCacheBackend()
    return DailyCache(
        backend=backend,
        tz=cfg.get("TIME_ZONE") or DEFAULT_TZ,
        clock=clock,
        ttl=cfg.get("DAILY_CACHE_TTL") or None,
    )
