import datetime as dt
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from pvpc_api.config import ApplicationConfig, DatabaseConfig
from pvpc_api.container import build_container
from pvpc_api.main import create_app
from pvpc_api.models import PriceTuple
from pvpc_api.utils import FixedClock, ReePriceFetcher


# Friday, 10:00 in Madrid (CET, UTC+1)
FRIDAY = dt.date(2023, 11, 24)


def day_tuples(day, prices):
    return [PriceTuple(date=day, hour=hour, price=price) for hour, price in enumerate(prices)]


def typical_day():
    # flat 0.15 with a cheap hour at 3:00 and a peak at 19:00
    prices = [0.15] * 24
    prices[3] = 0.08
    prices[19] = 0.25
    return prices


@pytest.fixture
def clock():
    return FixedClock(dt.datetime(2023, 11, 24, 10, 0))


@pytest.fixture
def set_hour(clock):
    def _set_hour(hour, day=FRIDAY):
        clock.moment = clock.timezone.localize(dt.datetime(day.year, day.month, day.day, hour, 0))
    return _set_hour


@pytest.fixture
def http_session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def fetcher(http_session):
    return ReePriceFetcher("https://ree.example/pvpc.json", timeout_seconds=5, session=http_session)


@pytest.fixture
def config(tmp_path):
    return ApplicationConfig(database=DatabaseConfig(database_path=str(tmp_path / "prices.db")))


@pytest.fixture
def container(config, clock, fetcher):
    return build_container(config, clock=clock, fetcher=fetcher)


@pytest.fixture
def price_service(container):
    return container.price_service()


@pytest.fixture
def average_service(container):
    return container.average_service()


@pytest.fixture
def dashboard_service(container):
    return container.dashboard_service()


@pytest.fixture
def store(price_service):
    def _store(day, prices):
        return price_service.save_prices(day_tuples(day, prices))
    return _store


@pytest.fixture
def client(container):
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def typical_prices():
    return typical_day()
