from __future__ import annotations

from board_api.api.routes.files import router as files_router
from board_api.api.routes.health import router as health_router
from board_api.api.routes.messages import router as messages_router
from board_api.api.routes.users import router as users_router

__all__ = ["files_router", "health_router", "messages_router", "users_router"]
