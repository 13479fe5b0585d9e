"""
Base Schema Classes

This module provides the base class for command request schemas, the
typed outcome returned by status-interpreting operations, and the helper
used to merge optional fields into a request body.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

from ..status import StatusCode, is_success, to_status_code

T = TypeVar("T")


def with_optional(
    body: Dict[str, Any], optional: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Merge optional fields into a request body.

    Fields whose value is None are left out. Neither argument is modified.

    Args:
        body: Required fields of the request
        optional: Candidate optional fields keyed by wire name

    Returns:
        New dictionary with required fields plus every present optional field
    """
    merged = dict(body)
    merged.update(
        {key: value for key, value in optional.items() if value is not None}
    )
    return merged


class BaseRequest:
    """
    Base class for command request schemas.

    Subclasses name the command in ``method`` and provide the required
    wire fields in ``_required_fields()``. Optional fields go in
    ``_optional_fields()`` and are only sent when present.
    """

    @property
    def method(self) -> str:
        """
        Command name the request is sent under.

        Should be overridden by subclasses to provide the specific command.
        """
        raise NotImplementedError("Subclasses must define method")

    def _required_fields(self) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses must define _required_fields")

    def _optional_fields(self) -> Dict[str, Any]:
        return {}

    def to_body(self) -> Dict[str, Any]:
        """Build the request body sent to the command session."""
        return with_optional(self._required_fields(), self._optional_fields())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for logging or JSON serialization.

        Returns:
            Dictionary with 'method' and 'body' keys.
        """
        return {"method": self.method, "body": self.to_body()}

    def to_json(self) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """
    Outcome of a command whose status was interpreted.

    ``success`` is computed from ``status`` on every access, so a result can
    never report success while carrying a failure status.

    Attributes:
        status: Status code returned by the server
        result: Operation specific value (None when the operation has none)
    """

    status: StatusCode
    result: Optional[T] = None

    @property
    def success(self) -> bool:
        return is_success(self.status)

    @classmethod
    def from_response(
        cls, response: Mapping[str, Any], result: Optional[T] = None
    ) -> "CommandResult[T]":
        """
        Create from a raw command response.

        Args:
            response: Response body, must contain 'status'
            result: Optional operation specific value

        Returns:
            CommandResult carrying the response status
        """
        return cls(status=to_status_code(response["status"]), result=result)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary; 'result' is only included when present."""
        data: Dict[str, Any] = {"success": self.success, "status": self.status}
        if self.result is not None:
            data["result"] = self.result
        return data
