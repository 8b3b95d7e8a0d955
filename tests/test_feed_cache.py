"""Feed cache: stale data on failure, error when nothing was cached."""

import pytest
from pymongo.errors import ExecutionTimeout, ServerSelectionTimeoutError

from udyog_saathi.services.feed_cache import FeedCache, FeedUnavailable
from udyog_saathi.services.mongo_service import JobService, WorkerProfileService


def _failing_loader():
    raise ServerSelectionTimeoutError("no servers")


class TestFeedCache:

    def test_success_then_failure_returns_first_result(self):
        cache = FeedCache("jobs")
        first = cache.fetch(lambda: [{"title": "Electrician"}])

        second = cache.fetch(_failing_loader)

        assert second == first == [{"title": "Electrician"}]

    def test_failure_without_snapshot_raises(self):
        cache = FeedCache("jobs")
        with pytest.raises(FeedUnavailable):
            cache.fetch(_failing_loader)

    def test_empty_success_is_still_a_snapshot(self):
        cache = FeedCache("jobs")
        cache.fetch(lambda: [])
        assert cache.fetch(_failing_loader) == []

    def test_each_success_replaces_snapshot(self):
        cache = FeedCache("jobs")
        cache.fetch(lambda: [{"n": 1}])
        old = cache.snapshot

        cache.fetch(lambda: [{"n": 2}])

        assert cache.snapshot is not old
        assert old.data == ({"n": 1},)
        assert cache.fetch(_failing_loader) == [{"n": 2}]

    def test_non_store_errors_propagate(self):
        cache = FeedCache("jobs")
        cache.fetch(lambda: [{"n": 1}])

        def broken():
            raise KeyError("bug")

        with pytest.raises(KeyError):
            cache.fetch(broken)


def _post_job(client, title):
    response = client.post("/api/jobs", json={
        "title": title, "salary": "15000", "location": "Pune", "ownerEmail": "owner@example.com"
    })
    assert response.status_code == 200


def test_jobs_feed_falls_back_to_cached_result(client, monkeypatch):
    _post_job(client, "Electrician Needed")
    first = client.get("/api/jobs")
    assert first.status_code == 200

    monkeypatch.setattr(JobService, "list_recent", lambda self, limit=None: _failing_loader())
    second = client.get("/api/jobs")

    assert second.status_code == 200
    assert second.json() == first.json()


def test_feed_error_when_nothing_cached(client, monkeypatch):
    monkeypatch.setattr(WorkerProfileService, "list_recent", lambda self, limit=None: _failing_loader())

    response = client.get("/api/worker-profiles")

    assert response.status_code == 500
    assert response.json()["timeout"] is True


def test_every_request_still_queries_the_store(client):
    _post_job(client, "First")
    assert [j["title"] for j in client.get("/api/jobs").json()] == ["First"]

    _post_job(client, "Second")
    assert [j["title"] for j in client.get("/api/jobs").json()] == ["First", "Second"]


def test_caches_belong_to_the_app(mongo):
    from udyog_saathi.main import create_app

    assert create_app().state.feed_caches is not create_app().state.feed_caches


class _TimedOutCursor:
    """Cursor whose server-side time limit is exceeded on the first read."""

    def __init__(self):
        self.max_time = None

    def limit(self, n):
        return self

    def max_time_ms(self, ms):
        self.max_time = ms
        return self

    def __iter__(self):
        raise ExecutionTimeout("operation exceeded time limit", 50)


class _TimedOutCollection:

    def __init__(self):
        self.cursor = _TimedOutCursor()

    def find(self, *args, **kwargs):
        return self.cursor


def test_slow_feed_query_is_time_limited_and_served_from_cache(mongo):
    service = JobService()
    service.insert({"title": "Electrician Needed", "ownerEmail": "owner@example.com"})
    cache = FeedCache("jobs")
    first = cache.fetch(service.list_recent)

    service.collection = _TimedOutCollection()
    second = cache.fetch(service.list_recent)

    assert service.collection.cursor.max_time == 10000
    assert [j["title"] for j in second] == ["Electrician Needed"]
    assert second == first


def test_jobs_feed_serves_cache_on_execution_timeout(client, monkeypatch):
    _post_job(client, "Electrician Needed")
    first = client.get("/api/jobs").json()

    def timed_out(self, limit=None):
        raise ExecutionTimeout("operation exceeded time limit", 50)

    monkeypatch.setattr(JobService, "list_recent", timed_out)
    second = client.get("/api/jobs")

    assert second.status_code == 200
    assert second.json() == first
