from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check for load balancers.

    Answers without resolving a session or touching the stores, so it stays
    green while the identity service is unreachable.

    Returns:
        dict: ``{"status": "ok"}``.
    """

    return {"status": "ok"}
