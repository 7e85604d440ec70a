import asyncio
import json

from hostelkeeper.core.notifications import NotificationHub, NullNotifier, build_status_payload


class FakeWebSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, message):
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(message)


def test_publish_without_listeners_is_silent():
    NotificationHub().publish("leave-updated", {"id": "1"})
    NullNotifier().publish("leave-updated", {"id": "1"})


def test_broadcast_reaches_clients_and_drops_dead_ones():
    async def scenario():
        hub = NotificationHub()
        alive, dead = FakeWebSocket(), FakeWebSocket(fail=True)
        await hub.connect(alive)
        await hub.connect(dead)

        hub.publish("leave-updated", build_status_payload("leave-1", "student-1", "approved"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        return hub, alive

    hub, alive = asyncio.run(scenario())

    assert alive.accepted
    assert hub.connection_count == 1
    message = json.loads(alive.sent[0])
    assert message["event"] == "leave-updated"
    assert message["data"]["id"] == "leave-1"
    assert message["data"]["status"] == "approved"
    assert "timestamp" in message["data"]
