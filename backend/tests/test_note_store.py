"""
QuickNotes Backend - Note Store Unit Tests
===========================================

What we test:
    ✅ Ids are unique even for back-to-back creates
    ✅ Listing preserves insertion order
    ✅ find/update/delete report absence as None without side effects
    ✅ update merges in place and never moves updated_at before created_at
    ✅ Concurrent creates from several threads never collide
"""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from app.storage import NoteStore

T0 = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def fields(title="Title", body="", at=T0):
    return {"title": title, "body": body, "created_at": at, "updated_at": at}


class TestNoteStoreCreate:
    """Tests for id allocation and insertion."""

    def setup_method(self):
        self.store = NoteStore(id_seed=500)

    def test_create_assigns_id_and_returns_stored_record(self):
        note = self.store.create(fields(title="Groceries"))

        assert note.id == "500"
        assert note.title == "Groceries"
        assert self.store.find("500") is note

    def test_back_to_back_creates_get_distinct_ids(self):
        ids = [self.store.create(fields()).id for _ in range(1000)]

        assert len(set(ids)) == 1000
        assert all(ids)

    def test_default_seed_is_time_based(self):
        store = NoteStore()
        first = store.create(fields())
        second = store.create(fields())

        assert int(first.id) > 1_600_000_000_000
        assert int(second.id) == int(first.id) + 1

    def test_concurrent_creates_never_collide(self):
        ids = []
        lock = threading.Lock()

        def worker():
            local = [self.store.create(fields()).id for _ in range(200)]
            with lock:
                ids.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(ids) == 1600
        assert len(set(ids)) == 1600
        assert len(self.store) == 1600


class TestNoteStoreQueries:
    """Tests for list and find."""

    def setup_method(self):
        self.store = NoteStore(id_seed=1)

    def test_list_empty(self):
        assert self.store.list() == []

    def test_list_preserves_insertion_order(self):
        for title in ("b", "a", "c"):
            self.store.create(fields(title=title))

        assert [n.title for n in self.store.list()] == ["b", "a", "c"]

    def test_list_returns_new_sequence(self):
        self.store.create(fields())
        listed = self.store.list()
        listed.clear()

        assert len(self.store) == 1

    def test_find_absent_returns_none(self):
        assert self.store.find("404") is None


class TestNoteStoreMutations:
    """Tests for update and delete."""

    def setup_method(self):
        self.store = NoteStore(id_seed=1)
        self.note = self.store.create(fields(title="Old", body="keep"))

    def test_update_merges_only_given_fields(self):
        later = T0 + timedelta(minutes=5)
        updated = self.store.update(self.note.id, {"title": "New", "updated_at": later})

        assert updated is self.note
        assert updated.title == "New"
        assert updated.body == "keep"
        assert updated.created_at == T0
        assert updated.updated_at == later

    def test_update_absent_returns_none_and_changes_nothing(self):
        assert self.store.update("999", {"title": "x"}) is None
        assert self.store.find(self.note.id).title == "Old"

    def test_update_clamps_updated_at_to_created_at(self):
        earlier = T0 - timedelta(hours=1)
        updated = self.store.update(self.note.id, {"updated_at": earlier})

        assert updated.updated_at == updated.created_at

    def test_update_rejects_immutable_fields(self):
        with pytest.raises(KeyError):
            self.store.update(self.note.id, {"id": "2"})
        with pytest.raises(KeyError):
            self.store.update(self.note.id, {"created_at": T0})

    def test_delete_removes_and_returns_record(self):
        other = self.store.create(fields(title="Other"))

        removed = self.store.delete(self.note.id)

        assert removed is self.note
        assert self.store.list() == [other]
        assert self.store.find(self.note.id) is None

    def test_delete_absent_returns_none(self):
        assert self.store.delete("999") is None
        assert len(self.store) == 1

    def test_deleted_id_is_never_reissued(self):
        self.store.delete(self.note.id)
        new = self.store.create(fields())

        assert new.id != self.note.id
