from apps.board.registry import ConnectionRegistry


def test_register_and_lookup():
    registry = ConnectionRegistry()
    registry.register("c1", "u1")
    registry.register("c2", "u1")

    assert registry.connections_for("u1") == ["c1", "c2"]
    assert registry.user_for("c1") == "u1"
    assert registry.connections_for("unknown") == []


def test_last_connection_drops_user_entry():
    registry = ConnectionRegistry()
    registry.register("c1", "u1")
    registry.register("c2", "u1")

    registry.unregister("c1")
    assert registry.users() == ["u1"]

    registry.unregister("c2")
    assert registry.users() == []


def test_unregister_twice_is_a_noop():
    registry = ConnectionRegistry()
    registry.register("c1", "u1")
    registry.register("c2", "u1")

    assert registry.unregister("c1") == "u1"
    assert registry.unregister("c1") is None
    assert registry.connections_for("u1") == ["c2"]


def test_reregistering_moves_connection_to_new_user():
    registry = ConnectionRegistry()
    registry.register("c1", "u1")
    registry.register("c1", "u2")

    assert registry.user_for("c1") == "u2"
    assert registry.connections_for("u2") == ["c1"]
    assert "u1" not in registry.users()
