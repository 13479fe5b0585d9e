"""
Status Codes

Status codes returned in the body of every command response. Only
``KnownStatusCode.SUCCESS`` means success; anything else is a failure.
"""

from enum import IntEnum
from typing import Union


class KnownStatusCode(IntEnum):
    """Status codes the service is known to return."""

    SUCCESS = 0
    INVALID_USER = -1
    CLIENT_ERROR = -200
    NOT_LOGON = -201
    INVALID_METHOD = -202
    INVALID_PARAMETER = -203
    INVALID_CHATROOM_OPERATION = -401
    CHAT_BLOCKED_BY_FRIEND = -402
    BLOCKED_IP = -444
    OPERATION_DENIED = -500
    INVALID_ACCESSTOKEN = -950
    BLOCKED_ACCOUNT = -997
    AUTH_REQUIRED = -998
    UPDATE_REQUIRED = -999
    SERVER_UNDER_MAINTENANCE = -9797


StatusCode = Union[KnownStatusCode, int]


def to_status_code(value: int) -> StatusCode:
    """
    Wrap a raw status in KnownStatusCode when it is a known value.

    Unknown values are kept as plain ints so callers never lose them.
    """
    try:
        return KnownStatusCode(value)
    except ValueError:
        return value


def is_success(status: int) -> bool:
    """Return True only for the designated success status."""
    return status == KnownStatusCode.SUCCESS
