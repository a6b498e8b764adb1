"""Pydantic models for system settings and the help center."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SettingEntry(BaseModel):
    """A single key/value system setting. Values are always strings."""

    key: str = Field(..., min_length=1)
    value: str
    description: Optional[str] = None


class BulkSettingsRequest(BaseModel):
    settings: List[SettingEntry]


class SettingValueRequest(BaseModel):
    value: str
    description: Optional[str] = None


class HelpCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    order: int = 0
    icon: Optional[str] = None


class HelpArticleRequest(BaseModel):
    """Payload for creating or replacing a help article."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1)
    content: str = ""
    category_id: str = Field(..., alias="categoryId")
    tags: List[str] = Field(default_factory=list)
    order: int = 0
    is_published: bool = Field(default=True, alias="isPublished")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class TicketPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SupportTicketRequest(BaseModel):
    subject: str = Field(..., min_length=1)
    description: str = ""
    priority: TicketPriority = TicketPriority.MEDIUM
    category: str = "GENERAL"
