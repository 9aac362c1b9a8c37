"""Contract tests run against every BlogStore backend."""

from __future__ import annotations

import pytest

from blogctl.infrastructure.store import BlogStore, StoreError, matches


def _article(object_id: str, author: str = "jdoe", **extra: object) -> dict:
    return {"id": object_id, "authorId": author, "title": f"T {object_id}", **extra}


class TestMatches:
    def test_equality(self) -> None:
        assert matches({"a": 1, "b": 2}, {"a": 1})
        assert not matches({"a": 1}, {"a": 2})

    def test_missing_key(self) -> None:
        assert not matches({"a": 1}, {"b": 1})

    def test_list_containment(self) -> None:
        obj = {"roles": ["author", "admin"]}
        assert matches(obj, {"roles": "admin"})
        assert matches(obj, {"roles": ["admin", "author"]})
        assert not matches(obj, {"roles": ["commenter"]})

    def test_empty_filters(self) -> None:
        assert matches({"a": 1}, {})


class TestStoreContract:
    def test_insert_and_get(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.10000", keywords=["a"]))
        assert store.get("articles", "10.10000") == _article("10.10000", keywords=["a"])

    def test_get_missing(self, store: BlogStore) -> None:
        assert store.get("users", "ghost") is None

    def test_categories_are_separate(self, store: BlogStore) -> None:
        store.insert("users", {"id": "x"})
        assert store.get("articles", "x") is None

    def test_returned_copy_is_detached(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.10000", keywords=["a"]))
        got = store.get("articles", "10.10000")
        assert got is not None
        got["keywords"].append("b")
        assert store.get("articles", "10.10000")["keywords"] == ["a"]

    def test_duplicate_insert(self, store: BlogStore) -> None:
        store.insert("users", {"id": "jdoe"})
        with pytest.raises(StoreError):
            store.insert("users", {"id": "jdoe"})

    def test_replace(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.10000"))
        store.replace("articles", _article("10.10000", title="New"))
        assert store.get("articles", "10.10000")["title"] == "New"

    def test_replace_missing(self, store: BlogStore) -> None:
        with pytest.raises(StoreError):
            store.replace("articles", _article("10.10000"))

    def test_delete(self, store: BlogStore) -> None:
        store.insert("users", {"id": "jdoe"})
        store.delete("users", "jdoe")
        assert store.get("users", "jdoe") is None
        store.delete("users", "jdoe")

    def test_find_sorted_by_id(self, store: BlogStore) -> None:
        for object_id in ["30.00001", "10.00001", "20.00001"]:
            store.insert("articles", _article(object_id))
        assert [a["id"] for a in store.find("articles")] == ["10.00001", "20.00001", "30.00001"]

    def test_find_filters(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.00001", author="a"))
        store.insert("articles", _article("20.00001", author="b"))
        store.insert("articles", _article("30.00001", author="a"))
        hits = store.find("articles", {"authorId": "a"})
        assert [a["id"] for a in hits] == ["10.00001", "30.00001"]

    def test_find_by_id(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.00001"))
        store.insert("articles", _article("20.00001"))
        assert [a["id"] for a in store.find("articles", {"id": "20.00001"})] == ["20.00001"]

    def test_find_by_list_item(self, store: BlogStore) -> None:
        store.insert("users", {"id": "a", "roles": ["author"]})
        store.insert("users", {"id": "b", "roles": ["commenter"]})
        assert [u["id"] for u in store.find("users", {"roles": "author"})] == ["a"]

    @pytest.mark.parametrize("filters", [None, {"authorId": "jdoe"}])
    def test_find_paging(self, store: BlogStore, filters: dict | None) -> None:
        for i in range(12):
            store.insert("articles", _article(f"{10 + i}.00001"))
        page = store.find("articles", filters, index=5, count=5)
        assert [a["id"] for a in page] == [f"{10 + i}.00001" for i in range(5, 10)]

    def test_find_index_past_end(self, store: BlogStore) -> None:
        store.insert("users", {"id": "a"})
        assert store.find("users", index=3, count=5) == []

    def test_referencing(self, store: BlogStore) -> None:
        store.insert("articles", _article("10.00001", author="a"))
        store.insert("articles", _article("20.00001", author="b"))
        assert [a["id"] for a in store.referencing("articles", "authorId", "a")] == ["10.00001"]

    def test_clear(self, store: BlogStore) -> None:
        store.insert("users", {"id": "a"})
        store.insert("articles", _article("10.00001"))
        store.clear()
        assert store.find("users") == []
        assert store.find("articles") == []
