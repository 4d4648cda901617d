import pytest

from apps.board.commands import CreateTask
from apps.board.commands import DeleteTask
from apps.board.commands import MalformedCommand
from apps.board.commands import MoveTask
from apps.board.commands import Ping
from apps.board.commands import RegisterUser
from apps.board.commands import UpdateTask
from apps.board.commands import parse_command


def test_register_user():
    assert parse_command({"type": "register:user", "data": "u1"}) == RegisterUser("u1")


def test_create_drops_server_assigned_fields():
    command = parse_command({
        "type": "task:create",
        "data": {"title": "Buy milk", "id": "x", "userId": "someone-else"},
    })
    assert command == CreateTask(fields={"title": "Buy milk"})


def test_update_splits_id_from_fields():
    command = parse_command({"type": "task:update", "data": {"id": "t1", "archived": True}})
    assert command == UpdateTask(task_id="t1", fields={"archived": True})


def test_move_and_delete():
    assert parse_command({"type": "task:move", "data": {"id": "t1", "column": "Done"}}) == MoveTask("t1", "Done")
    assert parse_command({"type": "task:delete", "data": "t1"}) == DeleteTask("t1")


def test_ping():
    assert isinstance(parse_command({"type": "ping"}), Ping)


@pytest.mark.parametrize(
    "frame",
    [
        ["task:create"],
        {"type": "task:explode", "data": {}},
        {"type": "register:user", "data": ""},
        {"type": "register:user", "data": 42},
        {"type": "task:create", "data": "Buy milk"},
        {"type": "task:update", "data": {"title": "no id"}},
        {"type": "task:move", "data": {"id": "t1", "column": "Backlog"}},
        {"type": "task:delete", "data": {"id": "t1"}},
    ],
)
def test_malformed_frames_are_rejected(frame):
    with pytest.raises(MalformedCommand):
        parse_command(frame)


def test_only_move_checks_the_column():
    # create e update repassam os campos sem validação de esquema
    assert parse_command({"type": "task:create", "data": {"title": "t", "column": "Backlog"}}) == CreateTask(
        fields={"title": "t", "column": "Backlog"}
    )
    assert parse_command({"type": "task:update", "data": {"id": "t1", "column": "Backlog"}}) == UpdateTask(
        task_id="t1", fields={"column": "Backlog"}
    )
    with pytest.raises(MalformedCommand, match="coluna"):
        parse_command({"type": "task:move", "data": {"id": "t1", "column": "Backlog"}})
