"""
Channel Sessions

This module provides the per-channel command sessions that turn channel
operations into commands on a CommandSession, and the channel management
session for creating and leaving channels.

Return shapes:
    Operations that interpret the response status return a CommandResult.
    send_chat, create_channel and create_memo_channel return the raw response
    body instead and leave interpretation to the caller.

Usage:
    session = ChannelSession(Channel(42), command_session)
    await session.send_chat("hello")
    result = await session.mark_read(ChatLogged(log_id=777))
"""

import logging
from typing import Any, Dict

from .command_session import CommandSession
from .id_generator import IdGenerator
from .schemas import (
    BaseRequest,
    Channel,
    ChannelInfo,
    ChannelTemplate,
    Chat,
    ChatInfoRequest,
    ChatInput,
    ChatLogged,
    CommandResult,
    CreateChannelRequest,
    DeleteChatRequest,
    ForwardChatRequest,
    LeaveChannelRequest,
    NotiReadRequest,
    OpenChannel,
    OpenChannelInfo,
    WriteChatRequest,
)

logger = logging.getLogger(__name__)


async def _send_for_status(
    session: CommandSession, channel: Channel, request: BaseRequest
) -> CommandResult[None]:
    response = await session.request(request.method, request.to_body())
    result = CommandResult.from_response(response)
    if not result.success:
        logger.warning(
            f"{request.method} on channel {channel.channel_id} "
            f"failed with status {result.status}"
        )
    return result


class ChannelSession:
    """
    Command session bound to one normal channel.

    Each instance owns a private IdGenerator; a correlation id is drawn for
    every write and forward, and for nothing else.

    Attributes:
        channel: The channel the session operates on
    """

    def __init__(self, channel: Channel, session: CommandSession):
        """
        Initialize the channel session.

        Args:
            channel: Channel identity
            session: Command session used for every request
        """
        self._channel = channel
        self._session = session
        self._id_generator = IdGenerator()

    @property
    def channel(self) -> Channel:
        return self._channel

    async def send_chat(self, chat: ChatInput) -> Dict[str, Any]:
        """
        Write a chat to the channel.

        The response status is not interpreted; the raw response body is
        returned as is.

        Args:
            chat: A Chat, or a string sent as a text chat

        Returns:
            Raw WRITE response body
        """
        if isinstance(chat, str):
            chat = Chat.from_text(chat)

        request = WriteChatRequest(
            self._channel.channel_id, self._id_generator.next(), chat
        )
        logger.info(
            f"Sending chat {request.msg_id} to channel "
            f"{self._channel.channel_id}"
        )
        return await self._session.request(request.method, request.to_body())

    async def forward_chat(self, chat: Chat) -> CommandResult[None]:
        """
        Forward a chat to the channel.

        Args:
            chat: The chat to forward

        Returns:
            CommandResult with the FORWARD status
        """
        request = ForwardChatRequest(
            self._channel.channel_id, self._id_generator.next(), chat
        )
        logger.info(
            f"Forwarding chat {request.msg_id} to channel "
            f"{self._channel.channel_id}"
        )
        return await self._status_request(request)

    async def delete_chat(self, chat: ChatLogged) -> CommandResult[None]:
        """
        Delete a logged chat.

        Args:
            chat: Reference to the chat to delete

        Returns:
            CommandResult with the DELETEMSG status
        """
        return await self._status_request(
            DeleteChatRequest(self._channel.channel_id, chat.log_id)
        )

    async def mark_read(self, chat: ChatLogged) -> CommandResult[None]:
        """
        Move the read watermark to a logged chat.

        Args:
            chat: Reference to the last read chat

        Returns:
            CommandResult with the NOTIREAD status
        """
        return await self._status_request(
            NotiReadRequest(self._channel.channel_id, chat.log_id)
        )

    async def get_channel_info(self) -> CommandResult[ChannelInfo]:
        """
        Fetch the channel info.

        The result always carries at least the channel id. It is filled from
        the response 'chatInfo' record when the request succeeds and the
        server returns one.

        Returns:
            CommandResult with the CHATINFO status and a ChannelInfo
        """
        request = ChatInfoRequest(self._channel.channel_id)
        response = await self._session.request(
            request.method, request.to_body()
        )

        result = CommandResult.from_response(response)
        chat_info = response.get("chatInfo")
        if result.success and chat_info:
            info = ChannelInfo.from_dict(
                chat_info, channel_id=self._channel.channel_id
            )
        else:
            info = ChannelInfo(channel_id=self._channel.channel_id)

        return CommandResult(status=result.status, result=info)

    async def _status_request(
        self, request: BaseRequest
    ) -> CommandResult[None]:
        return await _send_for_status(self._session, self._channel, request)


class OpenChannelSession:
    """
    Command session bound to one open channel.

    Open channel requests additionally carry the channel's link id.

    Attributes:
        channel: The open channel the session operates on
    """

    def __init__(self, channel: OpenChannel, session: CommandSession):
        """
        Initialize the open channel session.

        Args:
            channel: Open channel identity
            session: Command session used for every request
        """
        self._channel = channel
        self._session = session

    @property
    def channel(self) -> OpenChannel:
        return self._channel

    async def mark_read(self, chat: ChatLogged) -> CommandResult[None]:
        """
        Move the read watermark to a logged chat.

        Args:
            chat: Reference to the last read chat

        Returns:
            CommandResult with the NOTIREAD status
        """
        request = NotiReadRequest(
            self._channel.channel_id,
            chat.log_id,
            link_id=self._channel.link_id,
        )
        return await _send_for_status(self._session, self._channel, request)

    async def get_channel_info(self) -> CommandResult[OpenChannelInfo]:
        """
        Fetch the open channel info.

        Raises:
            NotImplementedError: Always; open channel info is not supported
                                 yet. No request is sent.
        """
        # TODO: decode OpenChannelInfo once open link fields are mapped
        raise NotImplementedError("Open channel info is not supported yet")


class ChannelManageSession:
    """
    Session for creating and leaving channels.

    Not bound to any channel; only to the command session.
    """

    def __init__(self, session: CommandSession):
        self._session = session

    async def create_channel(
        self, template: ChannelTemplate
    ) -> Dict[str, Any]:
        """
        Create a channel from a template.

        The response carries channel specific fields and is returned raw.

        Args:
            template: Members and optional name / profile image

        Returns:
            Raw CREATE response body
        """
        request = CreateChannelRequest.from_template(template)
        logger.info(
            f"Creating channel with {len(request.member_ids)} members"
        )
        return await self._session.request(request.method, request.to_body())

    async def create_memo_channel(self) -> Dict[str, Any]:
        """
        Create a self memo channel.

        Returns:
            Raw CREATE response body
        """
        request = CreateChannelRequest.memo()
        logger.info("Creating memo channel")
        return await self._session.request(request.method, request.to_body())

    async def leave_channel(
        self, channel: Channel, block: bool = False
    ) -> CommandResult[int]:
        """
        Leave a channel.

        No check is made that the channel was not already left; the server
        status is returned as is.

        Args:
            channel: Channel to leave
            block: Whether to block the channel while leaving

        Returns:
            CommandResult whose result is the 'lastTokenId' of the response
        """
        request = LeaveChannelRequest(channel.channel_id, block)
        logger.info(f"Leaving channel {channel.channel_id} (block={block})")
        response = await self._session.request(
            request.method, request.to_body()
        )
        return CommandResult.from_response(
            response, result=response.get("lastTokenId")
        )
