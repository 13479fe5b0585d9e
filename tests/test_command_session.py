"""
Tests for the WebSocket Command Session

Tests for packet correlation, push packets, connection state and failure
of pending requests when the connection closes.
"""

import asyncio
import json

import pytest

from talk import (
    Channel,
    ChannelSession,
    ChatLogged,
    KnownStatusCode,
    WebSocketCommandSession,
)


class MockWebSocket:
    """Mock WebSocket answering every packet with a canned status."""

    def __init__(self, auto_respond=True, status=0):
        self.sent_messages = []
        self.auto_respond = auto_respond
        self.status = status
        self.closed = False
        self._incoming = asyncio.Queue()

    async def send(self, message):
        self.sent_messages.append(message)
        if self.auto_respond:
            packet = json.loads(message)
            self.push(
                {
                    "packetId": packet["packetId"],
                    "method": packet["method"],
                    "body": {"status": self.status},
                }
            )

    def push(self, packet):
        self._incoming.put_nowait(json.dumps(packet))

    def push_raw(self, message):
        self._incoming.put_nowait(message)

    async def close(self):
        self.closed = True
        self._incoming.put_nowait(None)

    def __aiter__(self):
        return self

    async def __anext__(self):
        message = await self._incoming.get()
        if message is None:
            raise StopAsyncIteration
        return message


async def connect_with(mock_ws):
    async def factory(url):
        return mock_ws

    session = WebSocketCommandSession("ws://localhost:8080", factory)
    await session.connect()
    return session


def test_command_session_can_be_instantiated():
    """Test that the session starts disconnected."""
    session = WebSocketCommandSession("ws://localhost:8080")
    assert session.server_url == "ws://localhost:8080"
    assert not session.is_connected
    assert session.pending_count == 0


@pytest.mark.asyncio
async def test_request_not_connected():
    """Test that request raises when not connected."""
    session = WebSocketCommandSession("ws://localhost:8080")

    with pytest.raises(ConnectionError, match="Not connected"):
        await session.request("CHATINFO", {"chatId": 1})


@pytest.mark.asyncio
async def test_connect_failure_raises_connection_error():
    """Test that factory errors surface as ConnectionError."""

    async def factory(url):
        raise OSError("Connection refused")

    session = WebSocketCommandSession("ws://localhost:1", factory)

    with pytest.raises(ConnectionError, match="Could not connect"):
        await session.connect()
    assert not session.is_connected


@pytest.mark.asyncio
async def test_request_resolves_matching_response():
    """Test that a request returns the body of its response packet."""
    mock_ws = MockWebSocket()
    session = await connect_with(mock_ws)
    receive_task = asyncio.create_task(session.handle_messages())

    response = await session.request("DELETEMSG", {"chatId": 42, "logId": 7})

    assert response == {"status": 0}
    sent = json.loads(mock_ws.sent_messages[0])
    assert sent == {
        "packetId": 1,
        "method": "DELETEMSG",
        "body": {"chatId": 42, "logId": 7},
    }
    assert session.pending_count == 0

    await session.disconnect()
    await receive_task


@pytest.mark.asyncio
async def test_concurrent_requests_are_demultiplexed():
    """Test that out of order responses reach the right request."""
    mock_ws = MockWebSocket(auto_respond=False)
    session = await connect_with(mock_ws)
    receive_task = asyncio.create_task(session.handle_messages())

    first = asyncio.create_task(session.request("CHATINFO", {"chatId": 1}))
    second = asyncio.create_task(session.request("CHATINFO", {"chatId": 2}))
    while session.pending_count < 2:
        await asyncio.sleep(0)

    mock_ws.push(
        {"packetId": 2, "method": "CHATINFO", "body": {"status": -500}}
    )
    mock_ws.push({"packetId": 1, "method": "CHATINFO", "body": {"status": 0}})

    assert await first == {"status": 0}
    assert await second == {"status": -500}

    await session.disconnect()
    await receive_task


@pytest.mark.asyncio
async def test_unsolicited_packets_go_to_push_handler():
    """Test that packets without a waiting request reach the handler."""
    mock_ws = MockWebSocket()
    session = await connect_with(mock_ws)
    pushed = []
    session.set_push_handler(pushed.append)
    receive_task = asyncio.create_task(session.handle_messages())

    mock_ws.push({"packetId": 0, "method": "MSG", "body": {"chatId": 42}})
    mock_ws.push_raw("not json")
    await session.request("CHATINFO", {"chatId": 42})

    assert pushed == [{"packetId": 0, "method": "MSG", "body": {"chatId": 42}}]

    await session.disconnect()
    await receive_task


@pytest.mark.asyncio
async def test_pending_requests_fail_when_connection_closes():
    """Test that a closed connection fails waiting requests."""
    mock_ws = MockWebSocket(auto_respond=False)
    session = await connect_with(mock_ws)
    receive_task = asyncio.create_task(session.handle_messages())

    request_task = asyncio.create_task(
        session.request("LEAVE", {"chatId": 42, "block": False})
    )
    while session.pending_count < 1:
        await asyncio.sleep(0)

    await mock_ws.close()
    await receive_task

    with pytest.raises(ConnectionError):
        await request_task
    assert not session.is_connected


@pytest.mark.asyncio
async def test_channel_session_over_websocket():
    """Test a channel session driving the WebSocket transport."""
    mock_ws = MockWebSocket(status=KnownStatusCode.CHAT_BLOCKED_BY_FRIEND)
    session = await connect_with(mock_ws)
    receive_task = asyncio.create_task(session.handle_messages())
    channel = ChannelSession(Channel(42), session)

    response = await channel.send_chat("hello")
    result = await channel.delete_chat(ChatLogged(log_id=1))

    assert response == {"status": KnownStatusCode.CHAT_BLOCKED_BY_FRIEND}
    assert result.success is False
    assert result.status == KnownStatusCode.CHAT_BLOCKED_BY_FRIEND

    write = json.loads(mock_ws.sent_messages[0])
    assert write["method"] == "WRITE"
    assert write["body"]["msg"] == "hello"
    assert write["body"]["msgId"] == 1
    delete = json.loads(mock_ws.sent_messages[1])
    assert delete["packetId"] == 2
    assert delete["method"] == "DELETEMSG"

    await session.disconnect()
    await receive_task
    assert mock_ws.closed


@pytest.mark.asyncio
async def test_non_object_packets_do_not_stop_receive_loop():
    """Test that valid JSON that is not a packet object is dropped."""
    mock_ws = MockWebSocket(auto_respond=False)
    session = await connect_with(mock_ws)
    receive_task = asyncio.create_task(session.handle_messages())

    request_task = asyncio.create_task(
        session.request("WRITE", {"chatId": 42, "msg": "hello"})
    )
    while session.pending_count < 1:
        await asyncio.sleep(0)

    mock_ws.push_raw("[1, 2]")
    mock_ws.push_raw("\"x\"")
    mock_ws.push_raw("5")
    mock_ws.push({"packetId": [1], "method": "WRITE", "body": {}})
    for _ in range(10):
        await asyncio.sleep(0)

    assert not receive_task.done()
    assert session.is_connected
    assert not request_task.done()

    mock_ws.push({"packetId": 1, "method": "WRITE", "body": {"status": 0}})
    assert await request_task == {"status": 0}

    await session.disconnect()
    await receive_task


@pytest.mark.asyncio
async def test_push_handler_errors_do_not_stop_receive_loop():
    """Test that an exception in the push handler is logged, not raised."""
    mock_ws = MockWebSocket()
    session = await connect_with(mock_ws)

    def failing_handler(packet):
        raise RuntimeError("handler failed")

    session.set_push_handler(failing_handler)
    receive_task = asyncio.create_task(session.handle_messages())

    mock_ws.push({"packetId": 0, "method": "MSG", "body": {"chatId": 42}})
    response = await session.request("CHATINFO", {"chatId": 42})

    assert response == {"status": 0}
    assert not receive_task.done()

    await session.disconnect()
    await receive_task
