"""Pydantic schemas for message board records and requests."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Message(BaseModel):
    """A message as stored and returned by the API."""

    id: str = Field(..., description="Opaque message identifier.")
    content: str = Field(..., description="Trimmed message body (1-2000 characters).")
    author_id: str | None = Field(
        default=None,
        description="Principal id of the author; null for anonymous messages.",
    )
    author_name: str | None = Field(
        default=None,
        description="Display name of the author, or the anonymous label.",
    )
    created_at: int = Field(..., description="Creation time in epoch milliseconds.")


class SendMessageRequest(BaseModel):
    """Body of ``POST /v1/messages``.

    Length rules are applied after trimming by the service, so the raw
    field is left unconstrained here.
    """

    content: str = Field(..., description="Message body; surrounding whitespace is ignored.")


class SendMessageResponse(BaseModel):
    id: str = Field(..., description="Identifier of the created message.")
    message: Message


class MessageListResponse(BaseModel):
    items: list[Message] = Field(default_factory=list, description="Newest first.")
    count: int
