"""
Test suite for SessionCoordinator.

Drives the coordinator directly with fake connection handles and a fake
storage adapter; frames are inspected after flush().

System role: Verification of realtime routing and registry bookkeeping
"""

import asyncio
import json
import logging

import pytest

from skillswap.core.exceptions import AuthenticationError
from skillswap.core.session_coordinator import SessionCoordinator


def frame(event_type: str, **payload) -> str:
    return json.dumps({"type": event_type, "payload": payload})


def fake_decoder(token: str) -> int:
    """Tokens look like 'user-<id>'."""
    if not token.startswith("user-"):
        raise AuthenticationError("Invalid token")
    return int(token.removeprefix("user-"))


@pytest.fixture
async def coordinator(fake_store):
    coordinator = SessionCoordinator(store=fake_store, token_decoder=fake_decoder, outbox_size=16)
    yield coordinator
    await coordinator.close()


async def connect_user(coordinator, handle, user_id):
    connection_id = await coordinator.connect(handle, user_id=user_id)
    return connection_id


class TestConnect:
    """Test suite for connect/disconnect."""

    async def test_connect_sends_connection_id(self, coordinator, new_handle) -> None:
        # Arrange
        handle = new_handle()

        # Act
        connection_id = await coordinator.connect(handle, user_id=1)
        await coordinator.flush()

        # Assert
        assert handle.sent == [
            {"type": "connection", "payload": {"connectionId": connection_id, "userId": 1}, "version": 1}
        ]
        assert coordinator.connection_count == 1

    async def test_connection_ids_are_unique(self, coordinator, new_handle) -> None:
        ids = {await coordinator.connect(new_handle()) for _ in range(5)}
        assert len(ids) == 5

    async def test_disconnect_logs_connection_age(self, coordinator, new_handle, caplog) -> None:
        connection_id = await coordinator.connect(new_handle(), user_id=1)
        assert coordinator.get_connection(connection_id).connected_at.tzinfo is not None

        with caplog.at_level(logging.INFO, logger="skillswap.core.session_coordinator"):
            await coordinator.disconnect(connection_id)

        record = next(r for r in caplog.records if r.getMessage() == "Realtime connection closed")
        assert record.connected_seconds >= 0

    async def test_disconnect_purges_all_sessions(self, coordinator, new_handle) -> None:
        # Arrange
        handle_1, handle_4 = new_handle(), new_handle()
        conn_1 = await connect_user(coordinator, handle_1, 1)
        conn_4 = await connect_user(coordinator, handle_4, 4)
        await coordinator.handle_message(conn_1, frame("join-session", sessionId=10))
        await coordinator.handle_message(conn_1, frame("join-session", sessionId=20))
        await coordinator.handle_message(conn_4, frame("join-session", sessionId=20))

        # Act
        await coordinator.disconnect(conn_1)
        await coordinator.flush()

        # Assert
        assert coordinator.get_connection(conn_1) is None
        assert 10 not in coordinator.active_sessions()
        assert coordinator.participants(20) == {conn_4}
        left = handle_4.of_type("user-left")
        assert left[0]["payload"] == {"userId": 1, "connectionId": conn_1, "sessionId": 20}

    async def test_disconnect_unknown_connection_is_noop(self, coordinator) -> None:
        await coordinator.disconnect("missing")
        assert coordinator.connection_count == 0


class TestAuthenticate:
    """Test suite for the authenticate message."""

    async def test_token_binds_user(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle)

        await coordinator.handle_message(conn, frame("authenticate", token="user-7"))
        await coordinator.flush()

        assert coordinator.get_connection(conn).user_id == 7
        assert handle.of_type("authenticated")[0]["payload"] == {"userId": 7}

    async def test_bare_user_id_rejected(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle)

        await coordinator.handle_message(conn, frame("authenticate", userId=7))
        await coordinator.flush()

        assert coordinator.get_connection(conn).user_id is None
        assert handle.of_type("error")[0]["payload"]["code"] == "UNAUTHENTICATED"

    async def test_invalid_token_rejected(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle)

        await coordinator.handle_message(conn, frame("authenticate", token="forged"))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "UNAUTHENTICATED"

    async def test_cannot_rebind_to_other_user(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle, user_id=1)

        await coordinator.handle_message(conn, frame("authenticate", token="user-2"))
        await coordinator.flush()

        assert coordinator.get_connection(conn).user_id == 1
        assert handle.of_type("error")[0]["payload"]["code"] == "FORBIDDEN"


class TestJoinLeave:
    """Test suite for join-session / leave-session."""

    async def test_join_broadcasts_to_others_only(self, coordinator, new_handle) -> None:
        # Arrange
        handle_1, handle_2 = new_handle(), new_handle()
        conn_1 = await connect_user(coordinator, handle_1, 1)
        conn_2 = await connect_user(coordinator, handle_2, 2)
        await coordinator.handle_message(conn_1, frame("join-session", sessionId=10))

        # Act
        await coordinator.handle_message(conn_2, frame("join-session", sessionId=10, userId=2))
        await coordinator.flush()

        # Assert
        joined = handle_1.of_type("user-joined")
        assert len(joined) == 1
        assert joined[0]["payload"]["sessionId"] == 10
        assert joined[0]["payload"]["userData"]["id"] == 2
        assert handle_2.of_type("user-joined") == []
        assert coordinator.participants(10) == {conn_1, conn_2}

    async def test_join_then_leave_leaves_no_state(self, coordinator, new_handle) -> None:
        conn = await connect_user(coordinator, new_handle(), 1)

        await coordinator.handle_message(conn, frame("join-session", sessionId=10))
        await coordinator.handle_message(conn, frame("leave-session", sessionId=10))

        assert coordinator.active_sessions() == set()
        assert coordinator.get_connection(conn).sessions == set()

    async def test_leave_notifies_remaining(self, coordinator, new_handle) -> None:
        handle_1, handle_2 = new_handle(), new_handle()
        conn_1 = await connect_user(coordinator, handle_1, 1)
        conn_2 = await connect_user(coordinator, handle_2, 2)
        await coordinator.handle_message(conn_1, frame("join-session", sessionId=10))
        await coordinator.handle_message(conn_2, frame("join-session", sessionId=10))

        await coordinator.handle_message(conn_2, frame("leave-session", sessionId=10))
        await coordinator.flush()

        assert handle_1.of_type("user-left")[0]["payload"]["connectionId"] == conn_2
        assert coordinator.participants(10) == {conn_1}

    async def test_join_requires_authentication(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle)

        await coordinator.handle_message(conn, frame("join-session", sessionId=10))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "UNAUTHENTICATED"
        assert coordinator.participants(10) == set()

    async def test_join_rejects_non_participant(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 4)

        await coordinator.handle_message(conn, frame("join-session", sessionId=10))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "FORBIDDEN"

    async def test_join_rejects_mismatched_user_id(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 1)

        await coordinator.handle_message(conn, frame("join-session", sessionId=10, userId=2))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "FORBIDDEN"
        assert coordinator.participants(10) == set()

    async def test_join_unknown_session(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 1)

        await coordinator.handle_message(conn, frame("join-session", sessionId=999))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "NOT_FOUND"


class TestBroadcasts:
    """Test suite for chat, whiteboard, video signal and direct messages."""

    @pytest.fixture
    async def room(self, coordinator, new_handle):
        handles = {user_id: new_handle() for user_id in (1, 2, 3)}
        conns = {}
        for user_id, handle in handles.items():
            conns[user_id] = await connect_user(coordinator, handle, user_id)
            await coordinator.handle_message(conns[user_id], frame("join-session", sessionId=10))
        await coordinator.flush()
        return handles, conns

    async def test_chat_includes_sender(self, coordinator, room) -> None:
        handles, conns = room

        await coordinator.handle_message(conns[1], frame("chat-message", sessionId=10, message="hi"))
        await coordinator.flush()

        for handle in handles.values():
            chats = handle.of_type("chat-message")
            assert len(chats) == 1
            assert chats[0]["payload"]["message"] == "hi"
            assert chats[0]["payload"]["userData"]["id"] == 1
            assert chats[0]["payload"]["timestamp"]

    async def test_chat_requires_joined_session(self, coordinator, new_handle) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 1)

        await coordinator.handle_message(conn, frame("chat-message", sessionId=10, message="hi"))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "NOT_IN_SESSION"

    async def test_whiteboard_excludes_sender_and_persists(self, coordinator, room, fake_store) -> None:
        handles, conns = room
        board = {"strokes": [[0, 0, 5, 5]]}

        await coordinator.handle_message(
            conns[2], frame("whiteboard-update", sessionId=10, whiteboardData=board)
        )
        await coordinator.flush()

        assert handles[2].of_type("whiteboard-update") == []
        assert handles[1].of_type("whiteboard-update")[0]["payload"]["whiteboardData"] == board
        assert handles[3].of_type("whiteboard-update")[0]["payload"]["whiteboardData"] == board
        assert fake_store.whiteboards[10] == board

    async def test_video_signal_to_target_only(self, coordinator, room) -> None:
        handles, conns = room

        await coordinator.handle_message(
            conns[1], frame("video-signal", sessionId=10, target=conns[3], signal={"sdp": "offer"})
        )
        await coordinator.flush()

        signals = handles[3].of_type("video-signal")
        assert signals[0]["payload"] == {
            "fromConnectionId": conns[1],
            "signal": {"sdp": "offer"},
            "sessionId": 10,
        }
        assert handles[2].of_type("video-signal") == []
        assert handles[1].of_type("video-signal") == []

    async def test_video_signal_without_target_goes_to_others(self, coordinator, room) -> None:
        handles, conns = room

        await coordinator.handle_message(conns[1], frame("video-signal", sessionId=10, signal="candidate"))
        await coordinator.flush()

        assert handles[1].of_type("video-signal") == []
        assert len(handles[2].of_type("video-signal")) == 1
        assert len(handles[3].of_type("video-signal")) == 1

    async def test_direct_message_fans_out_by_user(self, coordinator, new_handle, fake_store) -> None:
        # Arrange: user 1 on two devices, user 2 on one, user 3 unrelated
        sender_a, sender_b, receiver, bystander = (new_handle() for _ in range(4))
        conn = await connect_user(coordinator, sender_a, 1)
        await connect_user(coordinator, sender_b, 1)
        await connect_user(coordinator, receiver, 2)
        await connect_user(coordinator, bystander, 3)

        # Act
        await coordinator.handle_message(conn, frame("direct-message", receiverId=2, content="hello"))
        await coordinator.flush()

        # Assert
        for handle in (sender_a, sender_b, receiver):
            messages = handle.of_type("direct-message")
            assert messages[0]["payload"] == {
                "id": 1,
                "senderId": 1,
                "receiverId": 2,
                "content": "hello",
                "sentAt": "2024-01-01T00:00:00+00:00",
            }
        assert bystander.of_type("direct-message") == []
        assert len(fake_store.messages) == 1

    async def test_direct_message_requires_authentication(self, coordinator, new_handle, fake_store) -> None:
        handle = new_handle()
        conn = await coordinator.connect(handle)

        await coordinator.handle_message(conn, frame("direct-message", receiverId=2, content="hello"))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "UNAUTHENTICATED"
        assert fake_store.messages == []


class TestMalformedInput:
    """Test suite for error events on bad frames."""

    @pytest.mark.parametrize(
        "raw,code",
        [
            ("{not json", "INVALID_JSON"),
            (json.dumps({"payload": {}}), "INVALID_MESSAGE"),
            (json.dumps({"type": "dance", "payload": {}}), "UNKNOWN_TYPE"),
            (json.dumps({"type": "chat-message", "payload": {}, "version": 2}), "UNSUPPORTED_VERSION"),
            (json.dumps({"type": "join-session", "payload": {"sessionId": "abc"}}), "INVALID_MESSAGE"),
        ],
    )
    async def test_error_event_and_connection_survives(self, coordinator, new_handle, raw, code) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 1)

        await coordinator.handle_message(conn, raw)
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == code
        assert coordinator.get_connection(conn) is not None

    async def test_storage_failure_reported_as_internal_error(self, coordinator, new_handle, fake_store) -> None:
        handle = new_handle()
        conn = await connect_user(coordinator, handle, 1)
        await coordinator.handle_message(conn, frame("join-session", sessionId=10))

        async def broken(*args, **kwargs):
            raise RuntimeError("db down")

        fake_store.save_whiteboard = broken
        await coordinator.handle_message(conn, frame("whiteboard-update", sessionId=10, whiteboardData={}))
        await coordinator.flush()

        assert handle.of_type("error")[0]["payload"]["code"] == "INTERNAL_ERROR"


class TestDelivery:
    """Test suite for outbox isolation."""

    async def test_failed_socket_does_not_block_others(self, coordinator, new_handle) -> None:
        # Arrange
        dead, alive = new_handle(fail=True), new_handle()
        conn_dead = await connect_user(coordinator, dead, 2)
        conn_alive = await connect_user(coordinator, alive, 1)
        await coordinator.handle_message(conn_dead, frame("join-session", sessionId=10))
        await coordinator.handle_message(conn_alive, frame("join-session", sessionId=10))

        # Act
        await coordinator.handle_message(conn_alive, frame("chat-message", sessionId=10, message="ping"))
        await coordinator.flush()

        # Assert
        assert coordinator.get_connection(conn_dead).closed is True
        assert alive.of_type("chat-message")[0]["payload"]["message"] == "ping"

    async def test_full_outbox_drops_messages(self, fake_store, new_handle) -> None:
        coordinator = SessionCoordinator(store=fake_store, token_decoder=fake_decoder, outbox_size=1)
        stalled = asyncio.Event()

        class SlowHandle:
            def __init__(self) -> None:
                self.sent = []

            async def send_json(self, data) -> None:
                await stalled.wait()
                self.sent.append(data)

        slow = SlowHandle()
        conn = await coordinator.connect(slow, user_id=1)
        await coordinator.handle_message(conn, frame("join-session", sessionId=10))
        await asyncio.sleep(0)

        for i in range(5):
            await coordinator.handle_message(conn, frame("chat-message", sessionId=10, message=str(i)))

        assert coordinator.get_connection(conn).dropped > 0
        stalled.set()
        await coordinator.flush()
        await coordinator.close()
        assert len(slow.sent) < 6
