"""FastAPI endpoints for the Contact domain."""

from fastapi import APIRouter, Depends, Query

from contact.api.schemas import (
    MessageListResponse,
    MessageResponse,
    ReplyRequest,
    StatusResponse,
    SubmitMessageRequest,
    SubmitMessageResponse,
    UpdateMessageRequest,
)
from contact.message.inbox import MessageInbox
from shared.auth import CallerContext, current_caller

message_router = APIRouter(prefix="/messages", tags=["messages"])

inbox = MessageInbox()


@message_router.post("", status_code=201, response_model=SubmitMessageResponse)
async def submit_message(body: SubmitMessageRequest) -> SubmitMessageResponse:
    """Contact form submission."""
    message = inbox.submit(
        name=body.name,
        email=body.email,
        phone=body.phone,
        subject=body.subject,
        body=body.message,
        priority=body.priority,
    )
    return SubmitMessageResponse(data=MessageResponse.from_message(message))


@message_router.get("", response_model=MessageListResponse)
async def list_messages(
    status: str | None = None,
    priority: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    caller: CallerContext = Depends(current_caller),
) -> MessageListResponse:
    items, total = inbox.list(caller=caller, status=status, priority=priority, page=page, limit=limit)
    return MessageListResponse(
        data=[MessageResponse.from_message(m) for m in items],
        pagination=MessageListResponse.pagination_for(page, limit, total),
        status_counts=inbox.status_counts(caller=caller),
    )


@message_router.get("/{message_id}", response_model=MessageResponse)
async def get_message(message_id: str, caller: CallerContext = Depends(current_caller)) -> MessageResponse:
    return MessageResponse.from_message(inbox.get(message_id, caller=caller))


@message_router.put("/{message_id}", response_model=MessageResponse)
async def update_message(
    message_id: str, body: UpdateMessageRequest, caller: CallerContext = Depends(current_caller)
) -> MessageResponse:
    message = inbox.update(message_id, caller=caller, **body.model_dump())
    return MessageResponse.from_message(message)


@message_router.put("/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(message_id: str, caller: CallerContext = Depends(current_caller)) -> MessageResponse:
    return MessageResponse.from_message(inbox.mark_read(message_id, caller=caller))


@message_router.put("/{message_id}/reply", response_model=MessageResponse)
async def mark_message_replied(
    message_id: str, body: ReplyRequest, caller: CallerContext = Depends(current_caller)
) -> MessageResponse:
    return MessageResponse.from_message(inbox.mark_replied(message_id, caller=caller, notes=body.notes))


@message_router.put("/{message_id}/archive", response_model=MessageResponse)
async def archive_message(message_id: str, caller: CallerContext = Depends(current_caller)) -> MessageResponse:
    return MessageResponse.from_message(inbox.archive(message_id, caller=caller))


@message_router.delete("/{message_id}", response_model=StatusResponse)
async def delete_message(message_id: str, caller: CallerContext = Depends(current_caller)) -> StatusResponse:
    inbox.delete(message_id, caller=caller)
    return StatusResponse()
