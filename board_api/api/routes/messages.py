from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from board_api.api.deps import AdminPrincipal, OptionalPrincipal, RequiredPrincipal, get_message_service
from board_api.schemas.messages import MessageListResponse, SendMessageRequest, SendMessageResponse
from board_api.services.message_service import MessageService

router = APIRouter(tags=["Messages"])

MessageServiceDep = Annotated[MessageService, Depends(get_message_service)]


@router.get("/messages", response_model=MessageListResponse)
async def list_messages(
    service: MessageServiceDep,
    limit: Annotated[int | None, Query(ge=1, le=200)] = None,
) -> MessageListResponse:
    """List the most recent messages, newest first. Public."""
    items = service.list_recent(limit)
    return MessageListResponse(items=items, count=len(items))


@router.post(
    "/messages",
    response_model=SendMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    body: SendMessageRequest,
    principal: OptionalPrincipal,
    service: MessageServiceDep,
) -> SendMessageResponse:
    """Post a message to the board.

    Anyone can post. Authenticated callers are rate limited per user; all
    anonymous callers share one ``sendMessage`` bucket.

    Raises:
        RateLimitAppError: 429 when the caller's bucket is empty.
        ValidationAppError: 400 when the trimmed content is empty or too long.
    """
    message = service.send(principal, body.content)
    return SendMessageResponse(id=message.id, message=message)


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_own_message(
    message_id: str,
    principal: RequiredPrincipal,
    service: MessageServiceDep,
) -> Response:
    """Delete one of the caller's own messages."""
    service.remove(principal, message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/admin/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_any_message(
    message_id: str,
    principal: AdminPrincipal,
    service: MessageServiceDep,
) -> Response:
    """Delete any message. Admin only."""
    service.delete_any(principal, message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
