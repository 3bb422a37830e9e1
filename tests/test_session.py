import pytest

from sunset_engine.session import SunsetSession
from tests.conftest import fixed_schedule


def _session(collector):
    return SunsetSession(collector=collector, geocoder=lambda lat, lon: "Testville",
                         schedule=fixed_schedule)


def test_update_fetches_and_scores(collector):
    snap = _session(collector).update(46.5, 6.6, days=3, window_minutes=90)
    assert snap["status"] == "Forecast loaded"
    assert snap["place"] == "Testville"
    assert len(snap["predictions"]) == 2
    assert snap["predictions"][0]["score"] == 100
    assert len(collector.calls) == 1


def test_window_change_rescores_without_fetching(collector):
    session = _session(collector)
    session.update(46.5, 6.6, days=2)
    session.update(46.5, 6.6, days=2, window_minutes=150)
    assert len(collector.calls) == 1
    assert session.window_minutes == 150


def test_location_or_days_change_refetches(collector):
    session = _session(collector)
    session.update(46.5, 6.6, days=2)
    session.update(46.5, 6.6, days=3)
    session.update(47.0, 6.6, days=3)
    assert len(collector.calls) == 3


def test_failed_fetch_keeps_previous_predictions(collector):
    session = _session(collector)
    first = session.update(46.5, 6.6, days=2)

    collector.error = "Failed to load forecast: HTTP 502"
    snap = session.update(40.0, 6.6, days=2)

    assert snap["status"] == "Failed to load forecast: HTTP 502"
    assert snap["predictions"] == first["predictions"]
    assert snap["location"]["latitude"] == 40.0
    assert snap["predictions_for"] == first["location"]
    assert snap["predictions_for"]["latitude"] == 46.5


def test_network_calls_run_without_lock(collector):
    held = []

    def geocoder(lat, lon):
        held.append(session._lock.locked())
        return "Testville"

    class LockCheckingCollector:
        def fetch(self, location, days):
            held.append(session._lock.locked())
            return collector.fetch(location, days)

    session = SunsetSession(collector=LockCheckingCollector(), geocoder=geocoder,
                            schedule=fixed_schedule)
    session.update(46.5, 6.6, days=2)
    session.refresh()

    assert held == [False, False, False]
    assert len(session.predictions) == 2


def test_invalid_input_is_rejected_before_fetching(collector):
    session = _session(collector)
    with pytest.raises(ValueError):
        session.update(float("nan"), 6.6)
    with pytest.raises(ValueError, match="days"):
        session.update(46.5, 6.6, days=11)
    with pytest.raises(ValueError, match="window_minutes"):
        session.update(46.5, 6.6, window_minutes=10)
    assert collector.calls == []


def test_parameter_changes_rescore_stored_forecast(collector):
    session = _session(collector)
    session.update(46.5, 6.6, days=1)
    session.set_weight("high_cloud", 0.0)
    assert session.predictions[0].score == 65
    session.reset_params()
    assert session.predictions[0].score == 100
    assert len(collector.calls) == 1


def test_refresh_requires_location(collector):
    with pytest.raises(ValueError):
        _session(collector).refresh()
