"""
Command Session Transport

This module defines the request/response capability the channel sessions
are built on, and a WebSocket implementation of it.

Architecture:
    - CommandSession is the only interface the channel sessions depend on
    - WebSocketCommandSession sends one JSON packet per request and resolves
      the matching response packet by its packet id
    - Supports dependency injection for the network layer (for testability)

Packet Format:
    {
        "packetId": 12,
        "method": "WRITE",
        "body": { ... command specific fields, responses carry "status" ... }
    }
"""

import asyncio
import json
import logging
from typing import Any, Callable, Dict, Optional, Protocol

import websockets
from websockets.exceptions import ConnectionClosed, WebSocketException

from .id_generator import IdGenerator

logger = logging.getLogger(__name__)


class CommandSession(Protocol):
    """Sends a named command and resolves exactly one response body."""

    async def request(
        self, method: str, body: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Send a command and return its response body."""
        ...


class WebSocketCommandSession:
    """
    Command session over a WebSocket connection.

    Requests may be issued concurrently; each one waits for the response
    packet carrying its packet id. ``handle_messages()`` must be running for
    responses to be delivered.

    Attributes:
        server_url: WebSocket URL of the server (e.g., ws://localhost:8080)
        websocket: Active WebSocket connection (None if not connected)
    """

    def __init__(
        self,
        server_url: str,
        websocket_factory: Optional[Callable] = None,
    ):
        """
        Initialize the command session.

        Args:
            server_url: WebSocket URL of the server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
        """
        self.server_url = server_url
        self.websocket: Optional[Any] = None
        self._websocket_factory = websocket_factory or websockets.connect
        self._packet_ids = IdGenerator()
        self._pending: Dict[int, asyncio.Future] = {}
        self._push_handler: Optional[Callable[[Dict[str, Any]], None]] = None
        self._connected = False

        logger.info(f"WebSocketCommandSession initialized for: {server_url}")

    async def connect(self) -> None:
        """
        Establish the WebSocket connection.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            logger.info(f"Connecting to {self.server_url}...")
            self.websocket = await self._websocket_factory(self.server_url)
            self._connected = True
            logger.info("Successfully connected to server")
        except (OSError, WebSocketException) as e:
            logger.error(f"Failed to connect to server: {e}")
            raise ConnectionError(
                f"Could not connect to {self.server_url}: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Close the connection and fail any request still waiting."""
        if self.websocket:
            await self.websocket.close()
            self.websocket = None
        self._connected = False
        self._fail_pending("Disconnected from server")
        logger.info("Disconnected from server")

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to a server."""
        return self._connected and self.websocket is not None

    @property
    def pending_count(self) -> int:
        """Number of requests still waiting for a response."""
        return len(self._pending)

    def set_push_handler(
        self, handler: Callable[[Dict[str, Any]], None]
    ) -> None:
        """
        Register a callback for packets no request is waiting for.

        Args:
            handler: Callback that receives the decoded packet
        """
        self._push_handler = handler

    async def request(
        self, method: str, body: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Send a command and wait for its response.

        Args:
            method: Command name (e.g., WRITE, LEAVE)
            body: Command body

        Returns:
            Response body; contains at least 'status'

        Raises:
            ConnectionError: If not connected, or the connection is lost
                             before the response arrives
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to a server")

        packet_id = self._packet_ids.next()
        future = asyncio.get_running_loop().create_future()
        self._pending[packet_id] = future

        logger.debug(f"Sending {method} packet {packet_id}")
        try:
            await self.websocket.send(
                json.dumps(
                    {"packetId": packet_id, "method": method, "body": body}
                )
            )
            return await future
        finally:
            self._pending.pop(packet_id, None)

    async def handle_messages(self) -> None:
        """
        Receive packets until the connection is closed.

        Response packets resolve the request waiting on their packet id;
        all other packets go to the push handler if one is registered.
        """
        if not self.is_connected:
            raise ConnectionError("Not connected to a server")

        logger.info("Starting packet receive loop")

        try:
            async for message in self.websocket:
                self._dispatch(message)
        except ConnectionClosed:
            logger.warning("Connection closed by server")
        finally:
            self._connected = False
            self._fail_pending("Connection closed before response")

    def _dispatch(self, message: str) -> None:
        try:
            packet = json.loads(message)
        except json.JSONDecodeError as e:
            logger.warning(f"Dropping malformed packet: {e}")
            return
        if not isinstance(packet, dict):
            logger.warning(
                f"Dropping packet that is not an object: {message!r}"
            )
            return

        packet_id = packet.get("packetId")
        future = (
            self._pending.get(packet_id)
            if isinstance(packet_id, int)
            else None
        )
        if future is not None and not future.done():
            logger.debug(f"Received response for packet {packet_id}")
            future.set_result(packet.get("body", {}))
        elif self._push_handler:
            try:
                self._push_handler(packet)
            except Exception as e:
                logger.error(f"Error in push handler: {e}")
        else:
            logger.debug(
                f"Ignoring unsolicited {packet.get('method')} packet"
            )

    def _fail_pending(self, reason: str) -> None:
        for future in self._pending.values():
            if not future.done():
                future.set_exception(ConnectionError(reason))
