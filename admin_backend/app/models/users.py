"""Pydantic models for user administration."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "USER"
    PROVIDER = "PROVIDER"
    ADMIN = "ADMIN"


class UserCreateRequest(BaseModel):
    """Payload for creating a platform user from the admin console."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    email: str = Field(..., min_length=3)
    role: Role = Role.USER
    phone: Optional[str] = None
    password: Optional[str] = None
    is_verified: bool = Field(default=True, alias="isVerified")
    is_active: bool = Field(default=True, alias="isActive")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "role": self.role.value,
            "phone": self.phone or None,
            "isVerified": self.is_verified,
            "isActive": self.is_active,
        }


class UserStatusRequest(BaseModel):
    """Partial status update; omitted flags keep their current value."""

    model_config = ConfigDict(populate_by_name=True)

    is_active: Optional[bool] = Field(default=None, alias="isActive")
    is_verified: Optional[bool] = Field(default=None, alias="isVerified")
    role: Optional[Role] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.is_active is not None:
            payload["isActive"] = self.is_active
        if self.is_verified is not None:
            payload["isVerified"] = self.is_verified
        if self.role is not None:
            payload["role"] = self.role.value
        return payload
