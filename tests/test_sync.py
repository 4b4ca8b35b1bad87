import asyncio
import copy

import httpx
import pytest
from conftest import ALICE, make_item

from api.app import create_app
from data.database import Database
from personalize.client import SentinelAPIError, SentinelClient
from personalize.storage import MemoryStorage
from personalize.store import PersonalizationStore
from personalize.sync import CloudSyncEngine, Debouncer, SyncState, SyncStatus
from sources.cache import TTLCache
from sources.orchestrator import FeedOrchestrator

QUIET = 0.05


class FakeServer:
    """In-memory stand-in for the Sentinel API, storing snapshots the way the server does."""

    def __init__(self, prefs=None, bookmarks=None):
        self.remote = {"prefs": prefs, "bookmarks": bookmarks or []}
        self.pushes = []
        self.fail_push = False
        self.signed_out = []

    async def sign_in(self, email, password):
        if password != "hunter2":
            raise SentinelAPIError(400, {"error": "invalid_grant"})
        return {"access_token": "tok", "user": {"id": "u1", "email": email}}

    async def sign_up(self, email, password):
        return {"id": "u2", "email": email}

    async def who_am_i(self, token):
        if token != "tok":
            raise SentinelAPIError(401, {"msg": "invalid JWT"})
        return {"id": "u1"}

    async def sign_out(self, token):
        self.signed_out.append(token)

    async def sync_pull(self, token):
        return copy.deepcopy(self.remote)

    async def sync_push(self, token, snapshot):
        if self.fail_push:
            raise SentinelAPIError(500, {"error": "database is locked"})
        self.pushes.append(copy.deepcopy(snapshot))
        self.remote = {
            "prefs": {
                "subreddits": snapshot["subreddits"],
                "custom_subs": snapshot["customSubs"],
                "interests": snapshot["interests"],
                "settings": snapshot["settings"],
                "extras": {k: snapshot[k] for k in ("reactions", "blocked", "showLess")},
            },
            "bookmarks": snapshot["bookmarks"],
        }


EXISTING_PREFS = {
    "subreddits": ["python"],
    "custom_subs": ["python"],
    "interests": {"science": 4},
    "settings": {"country": "gb"},
    "extras": {"blocked": ["remote-blocked"]},
}


def make_engine(server, **kwargs):
    store = PersonalizationStore(MemoryStorage())
    engine = CloudSyncEngine(store, server, quiet_period=QUIET, **kwargs)
    return store, engine


# ── debouncer ──────────────────────────────────────────


def test_debouncer_coalesces_bursts():
    calls = []

    async def callback():
        calls.append(1)

    async def scenario():
        debouncer = Debouncer(QUIET, callback)
        for _ in range(5):
            assert debouncer.schedule()
        assert debouncer.pending
        await asyncio.sleep(QUIET * 4)
        assert not debouncer.pending

    asyncio.run(scenario())
    assert calls == [1]


def test_debouncer_without_loop_does_not_schedule():
    async def callback():
        pass

    assert Debouncer(QUIET, callback).schedule() is False


def test_debouncer_flush_runs_pending_callback_now():
    calls = []

    async def callback():
        calls.append(1)

    async def scenario():
        debouncer = Debouncer(60, callback)
        debouncer.schedule()
        await debouncer.flush()
        assert not debouncer.pending

    asyncio.run(scenario())
    assert calls == [1]


# ── engine ─────────────────────────────────────────────


def test_guest_mutations_never_push():
    server = FakeServer()
    store, engine = make_engine(server)

    async def scenario():
        store.track_click("science")
        assert not engine.push_pending
        await asyncio.sleep(QUIET * 3)

    asyncio.run(scenario())
    assert engine.state is SyncState.GUEST
    assert server.pushes == []


def test_first_sync_seeds_remote_from_local():
    server = FakeServer()
    store, engine = make_engine(server)
    store.add_bookmark(make_item("a", "A"))
    store.track_click("science")

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))

    assert engine.authenticated
    assert engine.state is SyncState.IDLE
    assert engine.status is SyncStatus.SYNCED
    assert len(server.pushes) == 1
    assert server.pushes[0]["interests"] == {"science": 1}
    assert [b["id"] for b in server.pushes[0]["bookmarks"]] == ["a"]


def test_pull_overwrites_prefs_without_triggering_push():
    server = FakeServer(prefs=EXISTING_PREFS)
    store, engine = make_engine(server)
    store.track_click("sports")
    store.block_item("local-blocked")

    async def scenario():
        await engine.sign_in("u@example.com", "hunter2")
        assert not engine.push_pending

    asyncio.run(scenario())

    assert server.pushes == []
    assert store.get_subscriptions() == ["python"]
    assert store.get_custom_subscriptions() == ["python"]
    assert store.get_interests() == {"science": 4}
    assert store.get_settings()["country"] == "gb"
    # Local-only namespaces are left alone by default.
    assert store.get_blocked() == {"local-blocked"}


def test_pull_can_apply_local_only_namespaces():
    server = FakeServer(prefs=EXISTING_PREFS)
    store, engine = make_engine(server, include_local_only=True)
    store.block_item("local-blocked")

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))
    assert store.get_blocked() == {"remote-blocked"}


def test_pull_merges_bookmarks_remote_first():
    remote = [make_item("r1", "Remote").to_dict(), make_item("shared", "Shared").to_dict()]
    server = FakeServer(prefs=EXISTING_PREFS, bookmarks=remote)
    store, engine = make_engine(server)
    store.add_bookmark(make_item("shared", "Shared"))
    store.add_bookmark(make_item("local", "Local"))

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))
    assert [i.id for i in store.get_bookmarks()] == ["r1", "shared", "local"]


def test_merged_local_bookmarks_are_pushed_back():
    remote = [make_item("r1", "Remote").to_dict()]
    server = FakeServer(prefs=EXISTING_PREFS, bookmarks=remote)
    store, engine = make_engine(server)
    store.add_bookmark(make_item("local", "Local"))

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))

    assert len(server.pushes) == 1
    assert [b["id"] for b in server.pushes[0]["bookmarks"]] == ["r1", "local"]
    assert [b["id"] for b in server.remote["bookmarks"]] == ["r1", "local"]
    assert engine.status is SyncStatus.SYNCED


def test_no_push_when_remote_already_has_every_bookmark():
    remote = [make_item("r1", "Remote").to_dict(), make_item("shared", "Shared").to_dict()]
    server = FakeServer(prefs=EXISTING_PREFS, bookmarks=remote)
    store, engine = make_engine(server)
    store.add_bookmark(make_item("shared", "Shared"))

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))

    assert server.pushes == []
    assert [i.id for i in store.get_bookmarks()] == ["r1", "shared"]


def test_local_changes_after_sign_in_push_once_after_quiet_period():
    server = FakeServer(prefs=EXISTING_PREFS)
    store, engine = make_engine(server)

    async def scenario():
        await engine.sign_in("u@example.com", "hunter2")
        store.track_click("technology")
        store.track_click("technology")
        store.save_setting("sound", True)
        assert engine.push_pending
        await asyncio.sleep(QUIET * 6)

    asyncio.run(scenario())

    assert len(server.pushes) == 1
    assert server.pushes[0]["interests"] == {"science": 4, "technology": 2}
    assert server.pushes[0]["settings"]["sound"] is True
    assert engine.status is SyncStatus.SYNCED


def test_flush_pushes_immediately():
    server = FakeServer(prefs=EXISTING_PREFS)
    store, engine = make_engine(server)

    async def scenario():
        await engine.sign_in("u@example.com", "hunter2")
        store.track_click("technology")
        await engine.flush()

    asyncio.run(scenario())
    assert len(server.pushes) == 1


def test_failed_push_sets_error_and_does_not_retry():
    server = FakeServer()
    server.fail_push = True
    store, engine = make_engine(server)

    asyncio.run(engine.sign_in("u@example.com", "hunter2"))

    assert engine.status is SyncStatus.ERROR
    assert engine.state is SyncState.IDLE
    assert not engine.push_pending
    assert server.pushes == []


def test_sign_in_failure_propagates_and_stays_guest():
    server = FakeServer()
    _, engine = make_engine(server)

    with pytest.raises(SentinelAPIError) as excinfo:
        asyncio.run(engine.sign_in("u@example.com", "wrong"))
    assert excinfo.value.status_code == 400
    assert excinfo.value.body == {"error": "invalid_grant"}
    assert engine.state is SyncState.GUEST


def test_restore_session():
    server = FakeServer(prefs=EXISTING_PREFS)
    _, engine = make_engine(server)

    assert asyncio.run(engine.restore_session("expired")) is False
    assert engine.state is SyncState.GUEST
    assert asyncio.run(engine.restore_session("tok")) is True
    assert engine.user == {"id": "u1"}


def test_sign_out_keeps_local_state_and_stops_syncing():
    server = FakeServer(prefs=EXISTING_PREFS)
    store, engine = make_engine(server)

    async def scenario():
        await engine.sign_in("u@example.com", "hunter2")
        store.track_click("technology")
        await engine.sign_out()
        assert not engine.push_pending
        store.track_click("technology")
        assert not engine.push_pending
        await asyncio.sleep(QUIET * 3)

    asyncio.run(scenario())

    assert engine.state is SyncState.GUEST
    assert not engine.authenticated
    assert server.signed_out == ["tok"]
    assert server.pushes == []
    assert store.get_interests()["technology"] == 2


# ── through the real server ────────────────────────────


def test_two_devices_share_state_through_server(tmp_path, identity):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'sync.db'}")
    orchestrator = FeedOrchestrator(
        TTLCache(), transport=httpx.MockTransport(lambda r: httpx.Response(503))
    )
    app = create_app(orchestrator=orchestrator, database=database, identity=identity)

    def device(**kwargs):
        http = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        )
        store = PersonalizationStore(MemoryStorage())
        return store, CloudSyncEngine(store, SentinelClient(http), quiet_period=QUIET, **kwargs)

    async def scenario():
        await database.init()
        laptop_store, laptop = device()
        laptop_store.add_bookmark(make_item("a", "A"))
        laptop_store.track_click("science")
        laptop_store.block_item("spam")
        await laptop.sign_in(ALICE["email"], "hunter2")

        laptop_store.add_custom_subscription("r/rust")
        await laptop.flush()

        phone_store, phone = device(include_local_only=True)
        await phone.sign_in(ALICE["email"], "hunter2")
        await database.dispose()
        return laptop_store, phone_store, laptop, phone

    laptop_store, phone_store, laptop, phone = asyncio.run(scenario())

    assert laptop.status is SyncStatus.SYNCED
    assert phone.status is SyncStatus.SYNCED
    assert [i.id for i in phone_store.get_bookmarks()] == ["a"]
    assert phone_store.get_interests() == {"science": 1}
    assert phone_store.get_custom_subscriptions() == ["rust"]
    assert "rust" in phone_store.get_subscriptions()
    assert phone_store.get_blocked() == {"spam"}

