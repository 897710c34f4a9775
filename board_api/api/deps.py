"""Service wiring and FastAPI dependencies.

One ``ServiceContainer`` is built per application and stored on
``app.state``; route dependencies read it from the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request

from board_api.adapters.identity.base import AbstractSessionProvider
from board_api.adapters.identity.factory import create_session_provider
from board_api.adapters.rate_limit.base import AbstractRateLimiter
from board_api.adapters.store.base import AbstractBlobStorage, AbstractDocumentStore
from board_api.adapters.store.in_memory import InMemoryBlobStorage, InMemoryDocumentStore
from board_api.core.auth import require_admin, require_principal
from board_api.core.config import settings
from board_api.core.identity import AdminPolicy, IdentityResolver, Principal, RequestContext, extract_session_token
from board_api.core.rate_limit import get_rate_limiter
from board_api.services.file_service import FileService
from board_api.services.message_service import MessageService
from board_api.services.user_service import UserService
from board_api.storage.repositories import FileRepository, MessageRepository


@dataclass
class ServiceContainer:
    """Collaborators and services shared by all requests of one app."""

    session_provider: AbstractSessionProvider
    admin_policy: AdminPolicy
    resolver: IdentityResolver
    limiter: AbstractRateLimiter
    store: AbstractDocumentStore
    blobs: AbstractBlobStorage
    messages: MessageService
    files: FileService
    users: UserService


def build_container(
    *,
    session_provider: AbstractSessionProvider | None = None,
    admin_policy: AdminPolicy | None = None,
    limiter: AbstractRateLimiter | None = None,
    store: AbstractDocumentStore | None = None,
    blobs: AbstractBlobStorage | None = None,
) -> ServiceContainer:
    """Build the service graph, using settings for anything not injected."""

    session_provider = session_provider or create_session_provider()
    admin_policy = admin_policy or AdminPolicy.from_string(settings.app.admin_emails)
    limiter = limiter or get_rate_limiter()
    store = store or InMemoryDocumentStore()
    blobs = blobs or InMemoryBlobStorage()

    return ServiceContainer(
        session_provider=session_provider,
        admin_policy=admin_policy,
        resolver=IdentityResolver(session_provider, admin_policy),
        limiter=limiter,
        store=store,
        blobs=blobs,
        messages=MessageService(MessageRepository(store), limiter=limiter),
        files=FileService(FileRepository(store), blobs, limiter=limiter),
        users=UserService(admin_policy),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_message_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> MessageService:
    return container.messages


def get_file_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> FileService:
    return container.files


def get_user_service(container: Annotated[ServiceContainer, Depends(get_container)]) -> UserService:
    return container.users


def get_request_context(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> RequestContext:
    """Collect the session token from the Authorization header or cookie."""
    token = extract_session_token(
        authorization,
        dict(request.cookies),
        cookie_name=settings.auth.cookie_name,
    )
    return RequestContext(session_token=token)


async def get_optional_principal(
    context: Annotated[RequestContext, Depends(get_request_context)],
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> Principal | None:
    """Resolve the caller; None for anonymous traffic, never an error."""
    return await container.resolver.resolve(context)


async def get_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    return require_principal(principal)


async def get_admin_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    return require_admin(principal)


OptionalPrincipal = Annotated[Principal | None, Depends(get_optional_principal)]
RequiredPrincipal = Annotated[Principal, Depends(get_principal)]
AdminPrincipal = Annotated[Principal, Depends(get_admin_principal)]
