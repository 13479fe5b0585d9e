"""
Schemas Package

This package contains the data model and command request schemas used by
the channel sessions. Schemas are organized by category: chat and channel
operations.

The package provides a base request class (BaseRequest) that assembles a
body from required fields plus the optional fields that are present, and
the CommandResult outcome type.
"""

from .base import BaseRequest, CommandResult, with_optional
from .chat import (
    KnownChatType,
    Chat,
    ChatInput,
    ChatLogged,
    WriteChatRequest,
    ForwardChatRequest,
    DeleteChatRequest,
    NotiReadRequest,
)
from .channel import (
    Channel,
    OpenChannel,
    ChannelUser,
    ChannelTemplate,
    ChannelInfo,
    OpenChannelInfo,
    ChatInfoRequest,
    CreateChannelRequest,
    LeaveChannelRequest,
)

__all__ = [
    # Base classes
    "BaseRequest",
    "CommandResult",
    "with_optional",
    # Chat schemas
    "KnownChatType",
    "Chat",
    "ChatInput",
    "ChatLogged",
    "WriteChatRequest",
    "ForwardChatRequest",
    "DeleteChatRequest",
    "NotiReadRequest",
    # Channel schemas
    "Channel",
    "OpenChannel",
    "ChannelUser",
    "ChannelTemplate",
    "ChannelInfo",
    "OpenChannelInfo",
    "ChatInfoRequest",
    "CreateChannelRequest",
    "LeaveChannelRequest",
]
