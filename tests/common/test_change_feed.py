from __future__ import annotations

import logging

from src.workforce_hub.workforce_hub.common.events import ChangeFeed
from src.workforce_hub.workforce_hub.core.enums import Collection


def test_publish_reaches_only_matching_subscribers():
    feed = ChangeFeed()
    seen = []
    feed.subscribe(Collection.INSPECTIONS, seen.append)
    feed.subscribe(Collection.HEALTH_RECORDS, lambda c: seen.append("other"))

    feed.publish(Collection.INSPECTIONS)

    assert seen == [Collection.INSPECTIONS]


def test_unsubscribe_stops_delivery():
    feed = ChangeFeed()
    seen = []
    unsubscribe = feed.subscribe(Collection.ACTIVITIES, seen.append)

    unsubscribe()
    unsubscribe()
    feed.publish(Collection.ACTIVITIES)

    assert seen == []
    assert feed.listener_count(Collection.ACTIVITIES) == 0


def test_failing_listener_is_logged_and_others_still_run(caplog):
    feed = ChangeFeed()
    seen = []

    def broken(_collection):
        raise RuntimeError("boom")

    feed.subscribe(Collection.EMPLOYEES, broken)
    feed.subscribe(Collection.EMPLOYEES, seen.append)

    with caplog.at_level(logging.ERROR):
        feed.publish(Collection.EMPLOYEES)

    assert seen == [Collection.EMPLOYEES]
    assert "Change listener failed for employees" in caplog.text
