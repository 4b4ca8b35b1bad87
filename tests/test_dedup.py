from conftest import make_item

from core.dedup import dedup_key, deduplicate


def test_dedup_key_normalises_title():
    assert dedup_key("Fed Raises Rates!!") == "fedraisesrates"
    assert dedup_key("Fed raises rates") == "fedraisesrates"


def test_dedup_key_truncates_to_60_chars():
    assert len(dedup_key("a" * 100)) == 60


def test_first_seen_wins():
    first = make_item("r_1", "Fed raises rates")
    second = make_item("rss_1", "Fed Raises Rates!!", source="rss")
    other = make_item("g_1", "Unrelated story")
    assert deduplicate([first, second, other]) == [first, other]


def test_empty_titles_and_keys_dropped():
    items = [make_item("a", ""), make_item("b", "!!! ???"), make_item("c", "Real")]
    assert [i.id for i in deduplicate(items)] == ["c"]


def test_idempotent():
    items = [
        make_item("a", "One"),
        make_item("b", "one!"),
        make_item("c", "Two"),
        make_item("d", ""),
    ]
    once = deduplicate(items)
    assert deduplicate(once) == once
