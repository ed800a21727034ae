import pytest

from spring_spline import ManualClock, Ticker, settings


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def ticker():
    return Ticker()


@pytest.fixture(autouse=True)
def _quiet_settings():
    saved = (settings.epsilon, settings.arc_length_step, settings.debug)
    yield
    settings.epsilon, settings.arc_length_step, settings.debug = saved
