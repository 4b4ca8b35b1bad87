import pytest
from conftest import make_item

from personalize.catalog import (
    CATALOG_GROUPS,
    CUSTOM_GROUP,
    SUBSCRIPTION_CATALOG,
    default_subscriptions,
)
from personalize.storage import JsonFileStorage, MemoryStorage
from personalize.store import DEFAULT_SETTINGS, PersonalizationStore, normalize_channel


@pytest.fixture
def store():
    return PersonalizationStore(MemoryStorage())


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("r/Some-Sub!", "SomeSub"),
        ("/r/python", "python"),
        ("  rust_lang ", "rust_lang"),
        ("r/", None),
        ("", None),
        ("x" * 22, None),
    ],
)
def test_normalize_channel(raw, expected):
    assert normalize_channel(raw) == expected


def test_bookmarks_are_unique_and_most_recent_first(store):
    a, b = make_item("a", "A"), make_item("b", "B")
    assert store.add_bookmark(a) is True
    assert store.add_bookmark(b) is True
    assert store.add_bookmark(a) is False
    assert [i.id for i in store.get_bookmarks()] == ["b", "a"]
    assert store.is_bookmarked("a")

    store.remove_bookmark("a")
    assert not store.is_bookmarked("a")
    store.clear_bookmarks()
    assert store.get_bookmarks() == []


def test_reads_are_defensive_copies(store):
    store.track_click("science")
    interests = store.get_interests()
    interests["science"] = 99
    subs = store.get_subscriptions()
    subs.append("injected")
    store.get_settings()["sound"] = True

    assert store.get_interests() == {"science": 1}
    assert "injected" not in store.get_subscriptions()
    assert store.get_settings()["sound"] is False


def test_reactions(store):
    item = make_item("x", category="science", source_detail="r/space")
    store.like_item(item)
    assert store.get_reaction("x") == "like"
    reaction = store.get_reactions()["x"]
    assert reaction.category == "science"
    assert reaction.source_detail == "r/space"

    store.dislike_item(item)
    assert store.get_reaction("x") == "dislike"
    store.clear_reaction("x")
    assert store.get_reaction("x") is None

    with pytest.raises(ValueError):
        store.set_reaction("x", "love")


def test_block_and_show_less(store):
    store.block_item("x")
    store.block_item("x")
    assert store.get_blocked() == {"x"}
    store.unblock_item("x")
    assert not store.is_blocked("x")

    assert store.toggle_show_less("r/pics") is True
    assert store.is_muted("r/pics")
    assert store.toggle_show_less("r/pics") is False
    assert not store.is_muted("r/pics")


def test_interest_share(store):
    for _ in range(8):
        store.track_click("technology")
    for _ in range(2):
        store.track_click("sports")
    store.track_click(None)
    assert store.interest_share("technology") == pytest.approx(0.8)
    assert store.interest_share("science") == 0.0


def test_default_subscriptions_until_written(store):
    assert store.get_subscriptions() == default_subscriptions()
    store.set_subscriptions([])
    assert store.get_subscriptions() == []


def test_custom_subscription_normalised_and_subscribed(store):
    store.set_subscriptions(["news"])
    assert store.add_custom_subscription("r/Rust-Lang") == "RustLang"
    assert store.add_custom_subscription("rustlang") == "rustlang"
    assert store.add_custom_subscription("r/") is None

    assert store.get_custom_subscriptions() == ["RustLang"]
    assert store.get_subscriptions() == ["news", "RustLang"]

    store.remove_custom_subscription("RUSTLANG")
    assert store.get_custom_subscriptions() == []
    assert store.get_subscriptions() == ["news"]


def test_catalog_groups_cover_every_entry():
    groups = {key for key, _ in CATALOG_GROUPS}
    assert {"countries", "dailydose"} <= groups
    assert {e.group for e in SUBSCRIPTION_CATALOG} <= groups
    assert len(default_subscriptions()) == 19


def test_custom_channels_listed_under_custom_group(store):
    store.add_custom_subscription("r/Rust-Lang")
    store.add_custom_subscription("PYTHON")

    catalog = store.get_catalog()
    custom = [e for e in catalog if e.group == CUSTOM_GROUP]
    assert [e.name for e in custom] == ["RustLang"]
    assert custom[0].on is False
    assert sum(1 for e in catalog if e.name.lower() == "python") == 1
    assert catalog[: len(SUBSCRIPTION_CATALOG)] == list(SUBSCRIPTION_CATALOG)


def test_toggle_subscription(store):
    store.set_subscriptions(["news"])
    assert store.toggle_subscription("science") == ["news", "science"]
    assert store.toggle_subscription("news") == ["science"]


def test_settings_merge_over_defaults(store):
    store.save_setting("country", "gb")
    settings = store.get_settings()
    assert settings["country"] == "gb"
    assert settings["refreshInterval"] == DEFAULT_SETTINGS["refreshInterval"]


def test_change_hook_fires_per_write_and_not_while_importing(store):
    calls = []
    store.on_change(lambda: calls.append(1))

    store.track_click("science")
    store.block_item("x")
    assert len(calls) == 2

    with store.importing():
        assert store.is_importing
        store.import_all({"interests": {"business": 3}, "blocked": ["y"]})
    assert len(calls) == 2
    assert not store.is_importing
    assert store.get_interests() == {"business": 3}


def test_export_import_roundtrip(store):
    store.add_bookmark(make_item("a", "A"))
    store.track_click("science")
    store.toggle_show_less("r/pics")
    snapshot = store.export_all()

    other = PersonalizationStore(MemoryStorage())
    other.import_all(snapshot)
    assert other.export_all() == snapshot


def test_clear_all_restores_defaults_without_notifying(store):
    calls = []
    store.track_click("science")
    store.on_change(lambda: calls.append(1))
    store.clear_all()
    assert store.get_interests() == {}
    assert calls == []


def test_json_file_storage_persists(tmp_path):
    first = PersonalizationStore(JsonFileStorage(tmp_path))
    first.add_bookmark(make_item("a", "A"))
    first.save_setting("sound", True)

    second = PersonalizationStore(JsonFileStorage(tmp_path))
    assert [i.id for i in second.get_bookmarks()] == ["a"]
    assert second.get_settings()["sound"] is True
    assert (tmp_path / "sentinel_bookmarks.json").exists()


def test_corrupt_or_malformed_values_fall_back_to_defaults(tmp_path):
    (tmp_path / "sentinel_interests.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "sentinel_blocked.json").write_text('{"x": 1}', encoding="utf-8")
    store = PersonalizationStore(JsonFileStorage(tmp_path))
    assert store.get_interests() == {}
    assert store.get_blocked() == set()
