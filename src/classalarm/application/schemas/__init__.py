"""Pydantic result schemas for ClassAlarm operations.

Results serialise with camelCase keys (``model_dump(by_alias=True)``),
the shape mobile clients already consume.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OperationResult(BaseModel):
    """Base schema for operation results."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoginResult(OperationResult):
    account_id: str = Field(..., description="Durable account id for the device")
    session_credential: str = Field(..., description="Session token for subsequent calls")


class InstallationResult(OperationResult):
    device_token: str
    platform: str


class CreateGroupResult(OperationResult):
    code: str
    member_count: int = Field(1, description="Always 1 for a new group")


class JoinGroupResult(OperationResult):
    code: str
    member_count: int
    joined: bool = True


class LeaveGroupResult(OperationResult):
    code: str
    deleted: bool = Field(..., description="True if the caller was the last member")
    member_count: int


class GroupInfoResult(OperationResult):
    code: str
    member_count: int
    is_member: bool
    cooldown_remaining: int = Field(..., description="Seconds until the group may alarm again")


class SendAlarmResult(OperationResult):
    count: int = Field(..., description="Number of members the alarm was addressed to")
    member_count: int


__all__ = [
    "CreateGroupResult",
    "GroupInfoResult",
    "InstallationResult",
    "JoinGroupResult",
    "LeaveGroupResult",
    "LoginResult",
    "OperationResult",
    "SendAlarmResult",
]
