"""Unit tests for AccessTracker and ParseContext."""

from __future__ import annotations

from modelparser.engine.tracker import AccessTracker, ParseContext


class TestAccessTracker:
    def test_unread_keys_are_reported(self) -> None:
        tracker = AccessTracker({"ok": True, "fail": False})
        tracker.record(["ok"])
        assert tracker.unparsed() == {"fail": False}

    def test_nothing_read_reports_everything(self) -> None:
        data = {"a": 1, "b": {"c": 2}}
        assert AccessTracker(data).unparsed() == data

    def test_everything_read(self) -> None:
        tracker = AccessTracker({"a": 1, "b": 2})
        tracker.record(["a"])
        tracker.record(["b"])
        assert tracker.unparsed() == {}

    def test_consumed_subtree_is_not_reported(self) -> None:
        tracker = AccessTracker({"page": {"title": "x", "id": "1"}})
        tracker.record(["page"])
        assert tracker.unparsed() == {}

    def test_visited_node_reports_unread_children(self) -> None:
        tracker = AccessTracker({"page": {"title": "x", "id": "1"}})
        tracker.record(["page"], consumed=False)
        tracker.record(["page", "title"])
        assert tracker.unparsed() == {"page": {"id": "1"}}

    def test_list_elements_are_keyed_by_index(self) -> None:
        data = {"result": [{"title": "a", "extra": 1}, {"title": "b"}]}
        tracker = AccessTracker(data)
        tracker.record(["result"], consumed=False)
        tracker.record(["result", 0, "title"])
        tracker.record(["result", 1, "title"])
        assert tracker.unparsed() == {"result": {0: {"extra": 1}}}

    def test_untouched_list_element(self) -> None:
        data = {"result": ["a", "b"]}
        tracker = AccessTracker(data)
        tracker.record(["result", 0])
        assert tracker.unparsed() == {"result": {1: "b"}}

    def test_missing_paths_are_harmless(self) -> None:
        tracker = AccessTracker({"a": 1})
        tracker.record(["a"])
        tracker.record(["missing", "deeper"])
        assert tracker.unparsed() == {}

    def test_scalar_payload(self) -> None:
        assert AccessTracker("text").unparsed() == {}

    def test_text_node_read_through_string(self) -> None:
        tracker = AccessTracker({"title": "Home"})
        tracker.record(["title", "#text"])
        assert tracker.unparsed() == {}

    def test_text_node_leaves_attributes(self) -> None:
        tracker = AccessTracker({"title": {"#text": "Home", "@lang": "en"}})
        tracker.record(["title", "#text"])
        assert tracker.unparsed() == {"title": {"@lang": "en"}}


class TestParseContext:
    def test_untracked_context_ignores_records(self) -> None:
        context = ParseContext()
        context.record(["a"])
        assert context.tracking is False
        assert context.descend("a") is context

    def test_descend_prefixes_paths(self) -> None:
        tracker = AccessTracker({"outer": {"inner": 1, "other": 2}})
        context = ParseContext(tracker)
        context.record(["outer"], consumed=False)
        context.descend("outer").record(["inner"])
        assert tracker.unparsed() == {"outer": {"other": 2}}
