"""
Channel Schema Definitions

This module defines channel identities, channel descriptors and the
request structures for channel operations including info lookup,
creation and leaving.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import BaseRequest


@dataclass(frozen=True)
class Channel:
    """
    Identity of a channel.

    Attributes:
        channel_id: Service wide unique channel id
    """

    channel_id: int


@dataclass(frozen=True)
class OpenChannel(Channel):
    """
    Identity of an open (link joinable) channel.

    Attributes:
        channel_id: Service wide unique channel id
        link_id: ID of the open link the channel belongs to
    """

    link_id: int


@dataclass(frozen=True)
class ChannelUser:
    """A user addressed by a channel operation."""

    user_id: int


@dataclass
class ChannelTemplate:
    """
    Template for a new channel.

    Attributes:
        user_list: Users to add as members
        name: Optional display name
        profile_url: Optional profile image URL
    """

    user_list: List[ChannelUser] = field(default_factory=list)
    name: Optional[str] = None
    profile_url: Optional[str] = None


@dataclass
class ChannelInfo:
    """
    Descriptor of a channel.

    Only ``channel_id`` is guaranteed; the rest is filled in when the
    server returns it.

    Attributes:
        channel_id: ID of the channel
        type: Channel type name (e.g. DirectChat, MultiChat, MemoChat)
        active_user_count: Number of active members
        new_chat_count: Number of unread chats
        last_chat_log_id: Log id of the latest chat
        last_seen_log_id: Read watermark of the current user
        push_alert: Whether push alerts are enabled
    """

    channel_id: int
    type: Optional[str] = None
    active_user_count: Optional[int] = None
    new_chat_count: Optional[int] = None
    last_chat_log_id: Optional[int] = None
    last_seen_log_id: Optional[int] = None
    push_alert: Optional[bool] = None

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], channel_id: Optional[int] = None
    ) -> "ChannelInfo":
        """
        Create from a 'chatInfo' record of a CHATINFO response.

        Args:
            data: The 'chatInfo' record
            channel_id: Channel id used when the record has no 'chatId'
        """
        return cls(
            channel_id=data.get("chatId", channel_id),
            type=data.get("type"),
            active_user_count=data.get("activeMembersCount"),
            new_chat_count=data.get("newMessageCount"),
            last_chat_log_id=data.get("lastLogId"),
            last_seen_log_id=data.get("lastSeenLogId"),
            push_alert=data.get("pushAlert"),
        )


@dataclass
class OpenChannelInfo(ChannelInfo):
    """Descriptor of an open channel."""

    link_id: Optional[int] = None


@dataclass
class ChatInfoRequest(BaseRequest):
    """
    Request for channel info.

    Attributes:
        chat_id: ID of the channel
    """

    chat_id: int

    @property
    def method(self) -> str:
        return "CHATINFO"

    def _required_fields(self) -> Dict[str, Any]:
        return {"chatId": self.chat_id}


@dataclass
class CreateChannelRequest(BaseRequest):
    """
    Request to create a channel.

    Attributes:
        member_ids: User ids of the initial members
        nickname: Optional display name
        profile_image_url: Optional profile image URL
        memo_chat: True to create a self memo channel
    """

    member_ids: Optional[List[int]] = None
    nickname: Optional[str] = None
    profile_image_url: Optional[str] = None
    memo_chat: Optional[bool] = None

    @classmethod
    def from_template(
        cls, template: ChannelTemplate
    ) -> "CreateChannelRequest":
        """Create from a channel template."""
        return cls(
            member_ids=[user.user_id for user in template.user_list],
            nickname=template.name,
            profile_image_url=template.profile_url,
        )

    @classmethod
    def memo(cls) -> "CreateChannelRequest":
        """Create a request for a self memo channel."""
        return cls(memo_chat=True)

    @property
    def method(self) -> str:
        return "CREATE"

    def _required_fields(self) -> Dict[str, Any]:
        return {}

    def _optional_fields(self) -> Dict[str, Any]:
        return {
            "memberIds": self.member_ids,
            "nickname": self.nickname,
            "profileImageUrl": self.profile_image_url,
            "memoChat": self.memo_chat,
        }


@dataclass
class LeaveChannelRequest(BaseRequest):
    """
    Request to leave a channel.

    Attributes:
        chat_id: ID of the channel to leave
        block: Whether to block the channel while leaving
    """

    chat_id: int
    block: bool = False

    @property
    def method(self) -> str:
        return "LEAVE"

    def _required_fields(self) -> Dict[str, Any]:
        return {"chatId": self.chat_id, "block": self.block}
