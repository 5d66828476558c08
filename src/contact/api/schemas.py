"""Pydantic request/response schemas for the Contact API."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

MessageStatusName = Literal["new", "read", "replied", "archived"]
MessagePriorityName = Literal["low", "normal", "high", "urgent"]


class SubmitMessageRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Grace",
                    "email": "grace@example.com",
                    "subject": "Bulk order for a school",
                    "message": "Do you offer discounts for 30 kits?",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=254)
    phone: str | None = Field(None, max_length=30)
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)
    priority: MessagePriorityName | None = None


class UpdateMessageRequest(BaseModel):
    status: MessageStatusName | None = None
    priority: MessagePriorityName | None = None
    notes: str | None = Field(None, max_length=1000)


class ReplyRequest(BaseModel):
    notes: str | None = Field(None, max_length=1000)


class MessageResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    subject: str
    message: str
    status: str
    priority: str
    notes: str | None = None
    replied_at: datetime | None = None
    archived_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_message(cls, message) -> MessageResponse:
        return cls(
            id=str(message.id),
            name=message.name,
            email=message.email,
            phone=message.phone,
            subject=message.subject,
            message=message.body,
            status=message.status,
            priority=message.priority,
            notes=message.notes,
            replied_at=message.replied_at,
            archived_at=message.archived_at,
            created_at=message.created_at,
            updated_at=message.updated_at,
        )


class SubmitMessageResponse(BaseModel):
    message: str = "Message sent successfully. We will get back to you soon!"
    data: MessageResponse


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class MessageListResponse(BaseModel):
    data: list[MessageResponse]
    pagination: Pagination
    status_counts: dict[str, int]

    @staticmethod
    def pagination_for(page: int, limit: int, total: int) -> Pagination:
        return Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


class StatusResponse(BaseModel):
    status: str = "ok"
