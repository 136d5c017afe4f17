import datetime as dt

import pytest

from riddlebox import create_app


class FakeClock:
    def __init__(self, start: dt.datetime):
        self.now = start

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + dt.timedelta(**kwargs)


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def clock():
    # 2024-06-01 12:00 in Denver
    return FakeClock(dt.datetime(2024, 6, 1, 18, 0, tzinfo=dt.timezone.utc))
