"""Tests for ordered set helpers."""

from permission_acl.set_utils import add_unique, contains, remove_item, unique


class TestAddUnique:
    def test_appends_missing_item(self):
        assert add_unique(["a"], "b") == ["a", "b"]

    def test_present_item_returns_same_list(self):
        items = ["a", "b"]
        assert add_unique(items, "a") is items

    def test_does_not_modify_input(self):
        items = ["a"]
        result = add_unique(items, "b")
        assert items == ["a"]
        assert result is not items


class TestRemoveItem:
    def test_removes_present_item(self):
        assert remove_item(["a", "b", "c"], "b") == ["a", "c"]

    def test_absent_item_returns_same_list(self):
        items = ["a"]
        assert remove_item(items, "z") is items

    def test_does_not_modify_input(self):
        items = ["a", "b"]
        remove_item(items, "a")
        assert items == ["a", "b"]


class TestContainsAndUnique:
    def test_contains(self):
        assert contains(["a"], "a")
        assert not contains(["a"], "b")

    def test_unique_keeps_first_occurrence_order(self):
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
