"""
Chat Schema Definitions

This module defines chat messages, chat log references and the request
structures for chat operations: writing, forwarding, deleting and marking
chats as read.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Union

from .base import BaseRequest


class KnownChatType(IntEnum):
    """Chat type tags understood by the service."""

    FEED = 0
    TEXT = 1
    PHOTO = 2
    VIDEO = 3
    CONTACT = 4
    AUDIO = 5
    DITEMEMOTICON = 6
    DITEMGIFT = 7
    DITEMIMG = 8
    KAKAOLINKV1 = 9
    AVATAR = 11
    STICKER = 12
    SCHEDULE = 13
    VOTE = 14
    LOTTERY = 15
    MAP = 16
    PROFILE = 17
    FILE = 18
    STICKERANI = 20
    NUDGE = 21
    ACTIONCON = 22
    SEARCH = 23
    POST = 24
    STICKERGIF = 25
    REPLY = 26
    MULTIPHOTO = 27
    VOIP = 51
    LIVETALK = 52
    CUSTOM = 71
    ALIM = 72
    PLUSFRIEND = 81
    PLUSEVENT = 82
    PLUSFRIENDVIRAL = 83
    OPEN_SCHEDULE = 96
    OPEN_VOTE = 97
    OPEN_POST = 98


@dataclass(frozen=True)
class Chat:
    """
    A chat message.

    Attributes:
        type: Chat type tag (usually a KnownChatType)
        text: Text content of the message
        attachment: Optional attachment, passed to the server unchanged
    """

    type: int
    text: str
    attachment: Optional[Any] = None

    @classmethod
    def from_text(cls, text: str) -> "Chat":
        """Create a plain text chat with no attachment."""
        return cls(type=KnownChatType.TEXT, text=text)


ChatInput = Union[Chat, str]


@dataclass(frozen=True)
class ChatLogged:
    """
    Reference to a chat already stored in the channel log.

    Attributes:
        log_id: Log id assigned to the chat by the server
        chat: The chat content, if known
    """

    log_id: int
    chat: Optional[Chat] = None


@dataclass
class WriteChatRequest(BaseRequest):
    """
    Request to write a chat to a channel.

    Attributes:
        chat_id: ID of the channel
        msg_id: Local correlation id for this write
        chat: The chat to send
    """

    chat_id: int
    msg_id: int
    chat: Chat

    @property
    def method(self) -> str:
        return "WRITE"

    def _required_fields(self) -> Dict[str, Any]:
        return {
            "chatId": self.chat_id,
            "msgId": self.msg_id,
            "msg": self.chat.text,
            "type": self.chat.type,
            "noSeen": True,
        }

    def _optional_fields(self) -> Dict[str, Any]:
        return {"extra": self.chat.attachment}


@dataclass
class ForwardChatRequest(WriteChatRequest):
    """
    Request to forward a chat to a channel.

    Same body as a write, sent under a different command.
    """

    @property
    def method(self) -> str:
        return "FORWARD"


@dataclass
class DeleteChatRequest(BaseRequest):
    """
    Request to delete a logged chat.

    Attributes:
        chat_id: ID of the channel
        log_id: Log id of the chat to delete
    """

    chat_id: int
    log_id: int

    @property
    def method(self) -> str:
        return "DELETEMSG"

    def _required_fields(self) -> Dict[str, Any]:
        return {"chatId": self.chat_id, "logId": self.log_id}


@dataclass
class NotiReadRequest(BaseRequest):
    """
    Request to move the read watermark of a channel.

    Attributes:
        chat_id: ID of the channel
        watermark: Log id of the last read chat
        link_id: Link id, only set for open channels
    """

    chat_id: int
    watermark: int
    link_id: Optional[int] = None

    @property
    def method(self) -> str:
        return "NOTIREAD"

    def _required_fields(self) -> Dict[str, Any]:
        return {"chatId": self.chat_id, "watermark": self.watermark}

    def _optional_fields(self) -> Dict[str, Any]:
        return {"li": self.link_id}
