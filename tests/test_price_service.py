import datetime as dt
import sqlite3
from unittest.mock import Mock

import pytest

from pvpc_api.exceptions import FetchError, InvalidInputError
from pvpc_api.models import PriceTuple
from pvpc_api.services import (
    PriceService, cache_key, TODAY_CACHE_KEY, TOMORROW_CACHE_KEY, DASHBOARD_CACHE_KEY,
)
from pvpc_api.utils import TTLCache


FRIDAY = dt.date(2023, 11, 24)
SATURDAY = dt.date(2023, 11, 25)

TODAY_KEY = cache_key(TODAY_CACHE_KEY, "2023-11-24")
TOMORROW_KEY = cache_key(TOMORROW_CACHE_KEY, "2023-11-25")
DASHBOARD_KEY = cache_key(DASHBOARD_CACHE_KEY, "2023-11-24", 10)


def _stored_row(repository, day, hour):
    df = repository.find_by_date_range(day, day + dt.timedelta(days=1))
    return df[df["hour"] == hour].iloc[0]


def test_save_prices_is_idempotent(store, container, price_service, clock):
    assert store(FRIDAY, [0.1] * 24) == 24
    first = _stored_row(container.repository, FRIDAY, 5)

    clock.advance(hours=1)
    assert store(FRIDAY, [0.1] * 24) == 24

    assert container.repository.count() == 24
    again = _stored_row(container.repository, FRIDAY, 5)
    assert again['timestamp'] == first['timestamp']
    assert [p.price for p in price_service.get_prices_for_day(FRIDAY)] == [0.1] * 24


def test_save_prices_overwrites_changed_price(store, container, clock):
    store(FRIDAY, [0.1] * 24)
    before = _stored_row(container.repository, FRIDAY, 5)

    clock.advance(hours=1)
    store(FRIDAY, [0.1] * 5 + [0.2] + [0.1] * 18)

    after = _stored_row(container.repository, FRIDAY, 5)
    assert container.repository.count() == 24
    assert after['price'] == 0.2
    assert after['timestamp'] > before['timestamp']


def test_save_prices_skips_failed_writes(clock):
    repository = Mock()
    repository.upsert.side_effect = [1, sqlite3.IntegrityError("constraint failed"), 1]
    service = PriceService(repository, TTLCache(clock), clock=clock)

    prices = [PriceTuple(date=FRIDAY, hour=hour, price=0.1) for hour in range(3)]

    assert service.save_prices(prices) == 2
    assert repository.upsert.call_count == 3


def test_save_prices_invalidates_cached_values(store, container, price_service):
    assert price_service.get_today_prices() == []
    container.cache.set(DASHBOARD_KEY, "stale", ttl_seconds=3600)
    container.cache.set(TOMORROW_KEY, "stale", ttl_seconds=3600)

    store(FRIDAY, [0.1] * 24)

    for key in (TODAY_KEY, TOMORROW_KEY, DASHBOARD_KEY):
        assert key not in container.cache
    assert len(price_service.get_today_prices()) == 24


def test_empty_save_keeps_cache(container, price_service):
    container.cache.set(DASHBOARD_KEY, "cached", ttl_seconds=3600)

    assert price_service.save_prices([]) == 0
    assert container.cache.get(DASHBOARD_KEY) == "cached"


def test_today_prices_are_ordered_by_hour(container, price_service):
    shuffled = [PriceTuple(date=FRIDAY, hour=hour, price=hour / 100) for hour in (5, 0, 23, 12)]
    price_service.save_prices(shuffled)

    assert [p.hour for p in price_service.get_today_prices()] == [0, 5, 12, 23]


def test_today_prices_stay_cached_until_a_save(store, container, price_service):
    store(FRIDAY, [0.1] * 24)
    assert len(price_service.get_today_prices()) == 24

    # a write that bypasses the service does not reach the cached value
    container.repository.upsert(
        PriceTuple(date=FRIDAY, hour=0, price=0.5), dt.datetime(2023, 11, 24, 9, 0))
    assert price_service.get_today_prices()[0].price == 0.1


def test_tomorrow_prices_cache_only_non_empty_results(store, container, price_service):
    assert price_service.get_tomorrow_prices() == []
    assert TOMORROW_KEY not in container.cache

    store(FRIDAY + dt.timedelta(days=1), [0.12] * 24)

    tomorrow = price_service.get_tomorrow_prices()
    assert len(tomorrow) == 24
    assert tomorrow[0].date == dt.date(2023, 11, 25)
    assert TOMORROW_KEY in container.cache


def test_latest_prices_are_flagged_as_fallback(store, price_service):
    store(dt.date(2023, 11, 20), [0.1] * 24)
    store(dt.date(2023, 11, 22), [0.2] * 24)

    latest = price_service.get_latest_prices(24)

    assert len(latest) == 24
    assert {p.date for p in latest} == {dt.date(2023, 11, 22)}
    assert all(p.is_fallback for p in latest)


def test_price_history_is_newest_day_first(store, price_service):
    for day in (20, 22, 24):
        store(dt.date(2023, 11, day), [day / 100] * 2)

    history = price_service.get_price_history(days=3)

    assert [(p.date.day, p.hour) for p in history] == [(24, 0), (24, 1), (22, 0), (22, 1)]


@pytest.mark.parametrize("days", [0, 366, -1])
def test_price_history_rejects_out_of_range_days(price_service, days):
    with pytest.raises(InvalidInputError):
        price_service.get_price_history(days=days)


def test_price_stats_per_day(store, price_service, typical_prices):
    store(FRIDAY, typical_prices)
    store(dt.date(2023, 11, 23), [0.1] * 24)

    stats = price_service.get_price_stats(days=30)

    assert [s.date for s in stats] == ["2023-11-24", "2023-11-23"]
    assert stats[0].avg_price == pytest.approx(0.15125)
    assert stats[0].min_price == 0.08
    assert stats[0].max_price == 0.25


def test_fetch_and_store_reports_counts(price_service, http_session):
    response = Mock()
    response.json.return_value = {"PVPC": [
        {"Dia": "24/11/2023", "Hora": "00-01", "PCB": "100,00"},
        {"Dia": "24/11/2023", "Hora": "01-02", "PCB": "90,00"},
        {"Dia": "24/11/2023", "Hora": "bad", "PCB": "90,00"},
    ]}
    http_session.get.return_value = response

    outcome = price_service.fetch_and_store()

    assert outcome.saved == 2
    assert outcome.accepted == 2
    assert outcome.rejected == 1
    assert [p.price for p in price_service.get_today_prices()] == [0.1, 0.09]


def test_fetch_without_fetcher_fails(clock):
    service = PriceService(Mock(), TTLCache(clock), clock=clock)

    with pytest.raises(FetchError):
        service.fetch_and_store()


def test_system_health_reports_data_presence(store, price_service):
    store(FRIDAY, [0.1] * 24)

    health = price_service.get_system_health()

    assert health.status == "healthy"
    assert health.timezone == "Europe/Madrid"
    assert health.total_records == 24
    assert health.today.date == "2023-11-24"
    assert health.today.count == 24
    assert health.today.has_data is True
    assert health.today.latest_timestamp is not None
    assert health.yesterday.date == "2023-11-23"
    assert health.yesterday.has_data is False


def test_today_prices_cached_late_are_not_served_after_midnight(store, set_hour, clock, price_service):
    store(FRIDAY, [0.1] * 24)
    clock.moment = clock.timezone.localize(dt.datetime(2023, 11, 24, 23, 30))
    assert len(price_service.get_today_prices()) == 24

    set_hour(1, day=SATURDAY)

    assert price_service.get_today_prices() == []


def test_tomorrow_prices_roll_over_at_midnight(store, set_hour, price_service):
    store(SATURDAY, [0.12] * 24)
    set_hour(22)
    assert {p.date for p in price_service.get_tomorrow_prices()} == {SATURDAY}

    set_hour(1, day=SATURDAY)

    assert price_service.get_tomorrow_prices() == []
    assert {p.date for p in price_service.get_today_prices()} == {SATURDAY}


def test_clear_price_cache_drops_every_scoped_key(container, price_service):
    for key in (TODAY_KEY, cache_key(TODAY_CACHE_KEY, "2023-11-23"), DASHBOARD_KEY):
        container.cache.set(key, "cached", ttl_seconds=3600)
    container.cache.set("unrelated", "kept", ttl_seconds=3600)

    price_service.clear_price_cache()

    assert TODAY_KEY not in container.cache
    assert cache_key(TODAY_CACHE_KEY, "2023-11-23") not in container.cache
    assert DASHBOARD_KEY not in container.cache
    assert container.cache.get("unrelated") == "kept"
