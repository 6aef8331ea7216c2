"""
Practice CMS Backend — Support Message and Change Log Schemas
=============================================================

What:  Request/response models for the admin inbox to the site maintainer
       and for reading back the admin change log.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import Field

from practice_cms.schemas.common import CamelModel

MessageType = Literal["support", "contact", "feedback", "bug", "feature"]


class SupportMessageCreate(CamelModel):
    # Blank name/email are replaced with the site's own sender identity
    name: Optional[str] = None
    email: Optional[str] = None
    message: str = Field(min_length=1)
    type: MessageType = "support"
    attachments: List[str] = Field(default_factory=list, description="Image URLs")


class SupportMessageUpdate(CamelModel):
    message: Optional[str] = Field(default=None, min_length=1)
    type: Optional[MessageType] = None
    is_read: Optional[bool] = None
    admin_response: Optional[str] = None


class SupportMessageResponse(CamelModel):
    id: int
    name: str
    email: str
    message: str
    type: str
    attachments: List[str]
    is_read: bool
    admin_response: Optional[str] = None
    created_at: datetime
    responded_at: Optional[datetime] = None


class AdminChangeResponse(CamelModel):
    id: int
    created_at: datetime
    action: str
    resource: str
    identifier: Optional[str] = None
    request_id: Optional[str] = None
    client_ip: Optional[str] = None
    changes: Optional[List[str]] = None
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None


class ChangeLogResponse(CamelModel):
    logs: List[AdminChangeResponse]
    months: List[str] = Field(description="Months with entries, newest first (YYYY-MM)")
