import pytest

from apps.board.commands import CreateTask
from apps.board.commands import DeleteTask
from apps.board.commands import MoveTask
from apps.board.commands import Ping
from apps.board.commands import RegisterUser
from apps.board.commands import UpdateTask
from apps.board.relay import TaskRelay


@pytest.fixture()
def relay():
    return TaskRelay()


def _lists_by_connection(pushes):
    return {push.connection: push.tasks for push in pushes}


def _create(relay, connection, **fields):
    relay.handle(connection, CreateTask(fields=fields))
    user_id = relay.registry.user_for(connection)
    return relay.store.tasks_for(user_id)[-1]


def test_register_syncs_only_the_registering_connection(relay):
    relay.handle("a1", RegisterUser("u1"))
    _create(relay, "a1", title="existing")

    pushes = relay.handle("a2", RegisterUser("u1"))

    assert [push.connection for push in pushes] == ["a2"]
    assert [t["title"] for t in pushes[0].tasks] == ["existing"]


def test_register_with_no_tasks_syncs_empty_list(relay):
    pushes = relay.handle("a1", RegisterUser("u1"))
    assert _lists_by_connection(pushes) == {"a1": []}


def test_create_scenario_broadcasts_to_every_tab(relay):
    relay.handle("a1", RegisterUser("u1"))
    relay.handle("a2", RegisterUser("u1"))

    pushes = relay.handle("a1", CreateTask(fields={"title": "Buy milk", "column": None}))

    lists = _lists_by_connection(pushes)
    assert set(lists) == {"a1", "a2"}
    assert lists["a1"] == lists["a2"]
    [task] = lists["a1"]
    assert task["title"] == "Buy milk"
    assert task["column"] == "To Do"
    assert task["userId"] == "u1"


def test_create_ignores_claimed_owner(relay):
    relay.handle("a1", RegisterUser("u1"))
    relay.handle("a1", CreateTask(fields={"title": "t", "userId": "u2"}))

    assert relay.store.tasks_for("u2") == []
    assert relay.store.tasks_for("u1")[0]["userId"] == "u1"


def test_unregistered_connection_is_rejected(relay):
    for command in (
        CreateTask(fields={"title": "t"}),
        UpdateTask("x", {"title": "t"}),
        MoveTask("x", "Done"),
        DeleteTask("x"),
    ):
        assert relay.handle("ghost", command) == []
    assert len(relay.store) == 0


def test_ping_touches_nothing(relay):
    assert relay.handle("a1", Ping()) == []


def test_move_missing_task_has_no_effect(relay):
    relay.handle("a1", RegisterUser("u1"))
    assert relay.handle("a1", MoveTask("123", "Done")) == []
    assert len(relay.store) == 0


def test_move_by_owner(relay):
    relay.handle("a1", RegisterUser("u1"))
    task = _create(relay, "a1", title="t")

    pushes = relay.handle("a1", MoveTask(task["id"], "In Progress"))

    assert pushes[0].tasks[0]["column"] == "In Progress"


def test_move_and_delete_by_other_user_have_no_effect(relay):
    relay.handle("u1-tab", RegisterUser("u1"))
    task = _create(relay, "u1-tab", title="mine")
    relay.handle("b1", RegisterUser("u2"))
    relay.handle("b2", RegisterUser("u2"))

    assert relay.handle("b1", DeleteTask(task["id"])) == []
    assert relay.handle("b1", MoveTask(task["id"], "Done")) == []

    [stored] = relay.store.tasks_for("u1")
    assert stored == task


def test_delete_twice(relay):
    relay.handle("a1", RegisterUser("u1"))
    task = _create(relay, "a1", title="t")

    first = relay.handle("a1", DeleteTask(task["id"]))
    second = relay.handle("a1", DeleteTask(task["id"]))

    assert _lists_by_connection(first) == {"a1": []}
    assert second == []


def test_update_missing_task_has_no_broadcast(relay):
    relay.handle("a1", RegisterUser("u1"))
    assert relay.handle("a1", UpdateTask("nope", {"title": "x"})) == []


def test_update_by_other_user_is_rejected_by_default(relay):
    relay.handle("a1", RegisterUser("u1"))
    task = _create(relay, "a1", title="mine")
    relay.handle("b1", RegisterUser("u2"))

    assert relay.handle("b1", UpdateTask(task["id"], {"title": "hijacked"})) == []
    assert relay.store.get(task["id"])["title"] == "mine"


def test_permissive_update_broadcasts_to_owner():
    relay = TaskRelay(enforce_update_ownership=False)
    relay.handle("a1", RegisterUser("u1"))
    task = _create(relay, "a1", title="mine")
    relay.handle("b1", RegisterUser("u2"))

    pushes = relay.handle("b1", UpdateTask(task["id"], {"title": "edited", "userId": "u2"}))

    lists = _lists_by_connection(pushes)
    assert set(lists) == {"a1"}
    assert lists["a1"][0]["title"] == "edited"
    assert lists["a1"][0]["userId"] == "u1"


def test_archive_toggle_is_reversible(relay):
    relay.handle("a1", RegisterUser("u1"))
    task = _create(relay, "a1", title="t", priority="High")

    relay.handle("a1", UpdateTask(task["id"], {"archived": True}))
    assert relay.store.get(task["id"])["archived"] is True

    relay.handle("a1", UpdateTask(task["id"], {"archived": False}))
    assert relay.store.tasks_for("u1") == [task]


def test_every_tab_converges_after_each_command(relay):
    relay.handle("a1", RegisterUser("u1"))
    relay.handle("a2", RegisterUser("u1"))
    relay.handle("a3", RegisterUser("u1"))

    task = _create(relay, "a2", title="t")
    commands = [
        ("a1", UpdateTask(task["id"], {"description": "d"})),
        ("a3", MoveTask(task["id"], "Done")),
        ("a2", CreateTask(fields={"title": "second"})),
        ("a1", DeleteTask(task["id"])),
    ]
    for connection, command in commands:
        lists = list(_lists_by_connection(relay.handle(connection, command)).values())
        assert len(lists) == 3
        assert all(tasks == lists[0] for tasks in lists)


def test_disconnect_stops_delivery(relay):
    relay.handle("a1", RegisterUser("u1"))
    relay.handle("a2", RegisterUser("u1"))

    assert relay.disconnect("a2") == "u1"
    assert relay.disconnect("a2") is None

    pushes = relay.handle("a1", CreateTask(fields={"title": "t"}))
    assert [push.connection for push in pushes] == ["a1"]
