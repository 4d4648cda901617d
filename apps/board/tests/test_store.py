import pytest

from apps.board.store import TaskStore


@pytest.fixture()
def store():
    return TaskStore()


def test_create_applies_defaults(store):
    task = store.create("u1", {"title": "Buy milk", "priority": "Low"})

    assert task["userId"] == "u1"
    assert task["column"] == "To Do"
    assert task["attachments"] == []
    assert task["archived"] is False
    assert task["createdAt"]
    assert task["priority"] == "Low"


def test_create_keeps_client_column_and_extra_fields(store):
    task = store.create("u1", {"title": "t", "column": "Done", "tags": ["a"], "custom": 1})

    assert task["column"] == "Done"
    assert task["tags"] == ["a"]
    assert task["custom"] == 1


def test_ids_are_unique_for_back_to_back_creates(store):
    ids = {store.create("u1", {"title": str(n)})["id"] for n in range(50)}
    assert len(ids) == 50


def test_update_merges_and_protects_identity_fields(store):
    task = store.create("u1", {"title": "old", "description": "keep"})

    updated = store.update(task["id"], {"title": "new", "userId": "u2", "id": "other"})

    assert updated["title"] == "new"
    assert updated["description"] == "keep"
    assert updated["userId"] == "u1"
    assert store.get(task["id"]) is updated


def test_update_missing_task(store):
    assert store.update("missing", {"title": "x"}) is None


def test_move_requires_owner(store):
    task = store.create("u1", {"title": "t"})

    assert store.move("u2", task["id"], "Done") is None
    assert store.get(task["id"])["column"] == "To Do"
    assert store.move("u1", task["id"], "Done")["column"] == "Done"


def test_delete_requires_owner_and_is_idempotent(store):
    task = store.create("u1", {"title": "t"})

    assert store.delete("u2", task["id"]) is None
    assert len(store) == 1
    assert store.delete("u1", task["id"]) is not None
    assert store.delete("u1", task["id"]) is None
    assert len(store) == 0


def test_tasks_for_returns_snapshots(store):
    store.create("u1", {"title": "a"})
    store.create("u2", {"title": "b"})

    snapshot = store.tasks_for("u1")
    snapshot[0]["title"] = "changed"

    assert [t["title"] for t in store.tasks_for("u1")] == ["a"]
    assert store.tasks_for("nobody") == []
