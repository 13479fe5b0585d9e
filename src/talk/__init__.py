"""
Talk Channel Client Package

This package provides the channel command-session layer of the talk chat
client: channel sessions that turn channel operations into commands on a
command transport, and map response status codes into CommandResult
outcomes.

Schemas are organized in the `schemas` subpackage by category:
    - chat: Chat messages, chat log references and chat requests
    - channel: Channel identities, channel info and channel requests
"""

from .id_generator import IdGenerator
from .status import KnownStatusCode, StatusCode
from .command_session import CommandSession, WebSocketCommandSession
from .channel_session import (
    ChannelSession,
    OpenChannelSession,
    ChannelManageSession,
)
from .schemas import (
    CommandResult,
    KnownChatType,
    Chat,
    ChatLogged,
    Channel,
    OpenChannel,
    ChannelUser,
    ChannelTemplate,
    ChannelInfo,
    OpenChannelInfo,
)

__all__ = [
    # Session classes
    "ChannelSession",
    "OpenChannelSession",
    "ChannelManageSession",
    "CommandSession",
    "WebSocketCommandSession",
    "IdGenerator",
    # Status codes
    "KnownStatusCode",
    "StatusCode",
    # Data model
    "CommandResult",
    "KnownChatType",
    "Chat",
    "ChatLogged",
    "Channel",
    "OpenChannel",
    "ChannelUser",
    "ChannelTemplate",
    "ChannelInfo",
    "OpenChannelInfo",
]
