import datetime as dt

import pytest
from django.utils import timezone

from apps.board.models import Task
from apps.board.repository import TaskRepository


@pytest.fixture()
def repository():
    return TaskRepository()


@pytest.mark.django_db
def test_create_and_list_newest_first(repository):
    older = repository.create_task({"title": "older", "priority": "High"}, "u1")
    Task.objects.filter(pk=older["id"]).update(created_at=timezone.now() - dt.timedelta(days=1))
    newer = repository.create_task({"title": "newer", "isFavorite": True}, "u1")
    repository.create_task({"title": "someone else"}, "u2")

    tasks = repository.get_tasks("u1")

    assert [t["id"] for t in tasks] == [newer["id"], older["id"]]
    assert tasks[0]["isFavorite"] is True
    assert tasks[0]["column"] == "To Do"
    assert tasks[0]["userId"] == "u1"
    assert tasks[1]["priority"] == "High"


@pytest.mark.django_db
def test_update_task(repository):
    task = repository.create_task({"title": "t", "tags": ["x"]}, "u1")

    updated = repository.update_task(task["id"], {"column": "Done", "archived": True, "unknown": 1})

    assert updated["column"] == "Done"
    assert updated["archived"] is True
    assert updated["tags"] == ["x"]
    assert repository.update_task("missing", {"title": "x"}) is None


@pytest.mark.django_db
def test_delete_task(repository):
    task = repository.create_task({"title": "t"}, "u1")

    assert repository.delete_task(task["id"]) is True
    assert repository.delete_task(task["id"]) is False
    assert repository.get_task(task["id"]) is None


@pytest.mark.django_db
def test_subscription_receives_only_own_changes(repository):
    events = []
    subscription = repository.subscribe("u1", events.append)

    task = repository.create_task({"title": "t"}, "u1")
    repository.create_task({"title": "other"}, "u2")
    repository.update_task(task["id"], {"title": "renamed"})
    repository.delete_task(task["id"])

    assert [e["eventType"] for e in events] == ["INSERT", "UPDATE", "DELETE"]
    assert events[1]["new"]["title"] == "renamed"
    assert events[2]["old"]["id"] == task["id"]

    subscription.unsubscribe()
    repository.create_task({"title": "after"}, "u1")
    assert len(events) == 3
