"""Pydantic schemas for the current user and admin management."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CurrentUser(BaseModel):
    id: str
    name: str
    email: str
    role: Literal["member", "admin"]


class SetAdminRequest(BaseModel):
    is_admin: bool = Field(..., description="True to grant the admin role, False to revoke it.")


class SetAdminResponse(BaseModel):
    email: str
    action: Literal["grant", "revoke"]
    changed: bool = Field(
        ...,
        description="False when the email already had the requested status.",
    )
    admin_emails: list[str] = Field(default_factory=list, description="Admin emails after the change.")
