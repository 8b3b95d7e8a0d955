"""Polling client: drop-not-queue ticks, visibility gate, silent failures."""

import asyncio

import httpx

from udyog_saathi.sync import ApiClient, ChatSync, FeedSync, SyncStream, approved_contacts

ME = "ravi@example.com"
BIZ = "owner@example.com"


def _api(handler):
    transport = httpx.MockTransport(handler)
    return ApiClient(base_url="http://testserver/api", http=httpx.AsyncClient(transport=transport))


def _feed_handler(calls, fail=False):
    payloads = {
        "/api/jobs": [{"title": "Electrician Needed"}],
        "/api/worker-profiles": [{"skill": "Plumbing"}],
        "/api/instant-services": [{"role": "Carpenter"}],
        f"/api/notifications/{ME}": [
            {"businessEmail": BIZ, "applicantEmail": ME, "status": "approved", "jobTitle": "Electrician Needed"}
        ],
        f"/api/user-activity/{ME}": {"posts": [{"title": "mine"}], "instant": []},
    }

    def handler(request):
        calls.append(request.url.path)
        if fail:
            return httpx.Response(500, json={"error": "down"})
        return httpx.Response(200, json=payloads[request.url.path])
    return handler


def test_stream_drops_ticks_while_in_flight():
    async def scenario():
        release = asyncio.Event()
        runs = []

        async def slow_refresh():
            runs.append(1)
            await release.wait()

        stream = SyncStream("test", interval=60, refresh=slow_refresh)
        first = stream.tick()
        await asyncio.sleep(0)
        second = stream.tick()
        third = stream.tick()

        assert first is not None
        assert second is None and third is None
        assert stream.skipped_ticks == 2

        release.set()
        await first
        assert stream.tick() is not None
        await asyncio.sleep(0)
        await stream.stop()
        return runs

    assert len(asyncio.run(scenario())) == 2


def test_stream_runs_on_interval_and_stops():
    async def scenario():
        runs = []

        async def refresh():
            runs.append(1)

        stream = SyncStream("test", interval=0.01, refresh=refresh)
        stream.start()
        await asyncio.sleep(0.05)
        await stream.stop()
        count = len(runs)
        await asyncio.sleep(0.03)
        return count, len(runs), stream.running

    count, later, running = asyncio.run(scenario())
    assert count >= 2
    assert later == count
    assert running is False


def test_stream_swallows_refresh_errors():
    async def scenario():
        async def broken():
            raise RuntimeError("network down")

        stream = SyncStream("test", interval=60, refresh=broken)
        await stream.tick()
        return stream.in_flight

    assert asyncio.run(scenario()) is False


def test_feed_sync_assembles_all_feeds():
    calls = []

    async def scenario():
        sync = FeedSync(_api(_feed_handler(calls)), ME)
        await sync.refresh()
        return sync

    sync = asyncio.run(scenario())

    assert sync.state.jobs == [{"title": "Electrician Needed"}]
    assert sync.state.workers == [{"skill": "Plumbing"}]
    assert sync.state.instant == [{"role": "Carpenter"}]
    assert sync.chat_contacts[0]["email"] == BIZ
    assert f"/api/user-activity/{ME}" not in calls


def test_feed_sync_fetches_activity_on_profile_view():
    calls = []

    async def scenario():
        sync = FeedSync(_api(_feed_handler(calls)), ME, profile_view=lambda: True)
        await sync.refresh()
        return sync

    assert asyncio.run(scenario()).state.activity["posts"] == [{"title": "mine"}]


def test_feed_sync_skips_when_hidden():
    calls = []

    async def scenario():
        sync = FeedSync(_api(_feed_handler(calls)), ME, is_visible=lambda: False)
        await sync.stream.tick()

    asyncio.run(scenario())
    assert calls == []


def test_feed_sync_failure_keeps_previous_state():
    calls = []

    async def scenario():
        sync = FeedSync(_api(_feed_handler(calls)), ME)
        await sync.refresh()
        sync.api = _api(_feed_handler(calls, fail=True))
        await sync.stream.tick()
        return sync

    sync = asyncio.run(scenario())
    assert sync.state.jobs == [{"title": "Electrician Needed"}]


def test_chat_sync_only_polls_open_chat():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json=[{"senderEmail": BIZ, "receiverEmail": ME, "text": "hello"}])

    async def scenario():
        chat = ChatSync(_api(handler), ME, interval=0.01)
        await chat.refresh()
        assert calls == []

        await chat.open_chat(BIZ)
        await asyncio.sleep(0.03)
        history = list(chat.history)
        await chat.close_chat()
        polled = len(calls)
        await asyncio.sleep(0.03)
        return history, polled, len(calls), chat.history

    history, polled, later, after_close = asyncio.run(scenario())
    assert history[0]["text"] == "hello"
    assert polled >= 1
    assert later == polled
    assert after_close == []
    assert calls[0] == f"/api/chat/{ME}/{BIZ}"


def test_approved_contacts_both_roles():
    notifications = [
        {"businessEmail": BIZ, "applicantEmail": ME, "status": "approved", "jobTitle": "Electrician"},
        {"businessEmail": ME, "applicantEmail": "mina@example.com", "applicantName": "Mina",
         "status": "approved", "jobTitle": "Helper"},
        {"businessEmail": "x@example.com", "applicantEmail": ME, "status": "pending", "jobTitle": "Painter"},
        {"businessEmail": "y@example.com", "applicantEmail": ME, "status": "declined", "jobTitle": "Driver"},
        {"businessEmail": BIZ, "applicantEmail": ME, "status": "approved", "jobTitle": "Electrician again"},
    ]

    contacts = approved_contacts(notifications, ME)

    assert [c["email"] for c in contacts] == [BIZ, "mina@example.com"]
    assert contacts[1]["name"] == "Mina"
