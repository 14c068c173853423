from block_grid.game import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_event_bus_unsubscribe_and_unknown_event():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("test", handler)
    bus.unsubscribe("test", handler)
    bus.emit("test", value=1)
    bus.emit("nobody_listens", value=2)
    assert calls == []
