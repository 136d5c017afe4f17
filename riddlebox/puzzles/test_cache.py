import datetime as dt
import itertools

from riddlebox.puzzles.cache import DailyCache, DatabaseCacheBackend, MemoryCacheBackend, cache_from_config
from riddlebox.puzzles.records import PuzzleRecord, PuzzleResult


def _counter():
    values = itertools.count(1)
    return lambda: next(values)


def test_second_call_same_day_returns_first_value(clock):
    cache = DailyCache(clock=clock)
    compute = _counter()
    key = cache.key_for("riddle")

    first, cached_first = cache.get_or_compute(key, compute)
    clock.advance(hours=3)
    second, cached_second = cache.get_or_compute(key, compute)

    assert (first, cached_first) == (1, False)
    assert (second, cached_second) == (1, True)


def test_keys_follow_the_local_calendar_day(clock):
    cache = DailyCache(tz="America/Denver", clock=clock)
    assert cache.key_for("riddle") == "riddle:2024-06-01"
    assert cache.key_for("logic", "p3") == "logic:2024-06-01:p3"

    # 23:00 in Denver is already the next day in UTC
    clock.now = dt.datetime(2024, 6, 2, 5, 0, tzinfo=dt.timezone.utc)
    assert cache.key_for("riddle") == "riddle:2024-06-01"


def test_slot_expires_at_local_midnight(clock):
    cache = DailyCache(tz="America/Denver", clock=clock)
    assert cache.expires_at() == dt.datetime(2024, 6, 2, 6, 0, tzinfo=dt.timezone.utc)


def test_day_rollover_computes_again(clock):
    cache = DailyCache(clock=clock)
    compute = _counter()

    cache.get_or_compute(cache.key_for("riddle"), compute)
    clock.advance(days=1)
    value, cached = cache.get_or_compute(cache.key_for("riddle"), compute)

    assert cache.key_for("riddle") == "riddle:2024-06-02"
    assert (value, cached) == (2, False)


def test_expired_slot_is_dropped_even_under_the_old_key(clock):
    backend = MemoryCacheBackend()
    cache = DailyCache(backend=backend, clock=clock)
    key = cache.key_for("riddle")
    cache.get_or_compute(key, _counter())

    clock.advance(days=1)
    assert cache.get(key) is None
    assert backend.get(key) is None


def test_ttl_overrides_end_of_day(clock):
    cache = DailyCache(clock=clock, ttl=60)
    compute = _counter()
    key = cache.key_for("riddle")

    cache.get_or_compute(key, compute)
    clock.advance(seconds=30)
    assert cache.get_or_compute(key, compute) == (1, True)
    clock.advance(seconds=31)
    assert cache.get_or_compute(key, compute) == (2, False)


def test_invalidate(clock):
    cache = DailyCache(clock=clock)
    compute = _counter()
    key = cache.key_for("riddle")
    cache.get_or_compute(key, compute)

    assert cache.invalidate(key) is True
    assert cache.invalidate(key) is False
    assert cache.get_or_compute(key, compute) == (2, False)


def test_database_backend_round_trip(app, clock):
    cache = DailyCache(backend=DatabaseCacheBackend(), clock=clock)
    record = PuzzleRecord(question="What has keys?", answer="piano", hint="music",
                          explanation="keys for music", type="riddle", theme="music",
                          source="generated", id=4)
    result = PuzzleResult(record=record, ai_generated=True, fallback=False, unique=True,
                          theme="music", message="ok")
    key = cache.key_for("riddle")

    cache.get_or_compute(key, lambda: result)
    hit, cached = cache.get_or_compute(key, lambda: None)

    assert cached is True
    assert hit.record.id == 4
    assert hit.record.answer == "piano"
    assert hit.to_envelope()["data"]["question"] == "What has keys?"

    assert cache.invalidate(key) is True
    assert cache.get(key) is None


def test_cache_from_config_picks_backend():
    assert isinstance(cache_from_config({"DAILY_CACHE_BACKEND": "database"}).backend, DatabaseCacheBackend)
    cache = cache_from_config({"TIME_ZONE": "UTC", "DAILY_CACHE_TTL": 120})
    assert isinstance(cache.backend, MemoryCacheBackend)
    assert cache.ttl == 120


def test_past_days_do_not_pile_up_in_memory(clock):
    backend = MemoryCacheBackend()
    cache = DailyCache(backend=backend, clock=clock)
    compute = _counter()

    for _ in range(30):
        for q in range(1, 51):
            cache.get_or_compute(cache.key_for("endurance", f"q{q}"), compute)
        clock.advance(days=1)

    assert len(backend._slots) <= 50
    assert all(key.startswith("endurance:2024-06-30") for key in backend._slots)


def test_database_backend_purges_expired_slots(app, clock):
    backend = DatabaseCacheBackend()
    cache = DailyCache(backend=backend, clock=clock, ttl=60)
    record = PuzzleRecord(question="What has keys?", answer="piano", hint="music",
                          explanation="keys for music", type="riddle", theme="music", source="generated")
    result = PuzzleResult(record=record, ai_generated=True, fallback=False, unique=True,
                          theme="music", message="ok")

    old_key = cache.key_for("riddle")
    cache.get_or_compute(old_key, lambda: result)
    clock.advance(days=1)
    cache.get_or_compute(cache.key_for("riddle"), lambda: result)

    assert backend.get(old_key) is None
