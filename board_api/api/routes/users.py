from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from board_api.api.deps import AdminPrincipal, OptionalPrincipal, get_user_service
from board_api.schemas.users import CurrentUser, SetAdminRequest, SetAdminResponse
from board_api.services.user_service import UserService

router = APIRouter(tags=["Users"])

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


@router.get("/users/me", response_model=CurrentUser | None)
async def current_user(principal: OptionalPrincipal, service: UserServiceDep) -> CurrentUser | None:
    """The authenticated user, or null for anonymous callers."""
    return service.current(principal)


@router.get("/users/me/is-admin", response_model=bool)
async def current_user_is_admin(principal: OptionalPrincipal, service: UserServiceDep) -> bool:
    return service.is_admin(principal)


@router.put("/users/admins/{email}", response_model=SetAdminResponse)
async def set_admin(
    email: str,
    body: SetAdminRequest,
    principal: AdminPrincipal,
    service: UserServiceDep,
) -> SetAdminResponse:
    """Grant or revoke the admin role for an email address. Admin only."""
    return service.set_admin(principal, email, body.is_admin)
