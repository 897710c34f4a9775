"""OpenAPI metadata and customization utilities.

Adds the session security scheme and tag descriptions to the generated schema.
Sessions are optional on most endpoints, so security is declared per
operation rather than globally: only routes that depend on an authenticated
or admin principal are marked as requiring it.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Messages", "description": "Public message board; posting is rate limited."},
    {"name": "Files", "description": "Per-user file uploads."},
    {"name": "Users", "description": "Current user and admin role management."},
    {"name": "Health", "description": "Liveness checks."},
]

# Path prefixes whose operations always require a session
_AUTHENTICATED_PREFIXES = ("/v1/files", "/v1/admin", "/v1/users/admins")


def _requires_session(method: str, path: str) -> bool:
    if path.startswith(_AUTHENTICATED_PREFIXES):
        return True
    return method == "delete" and path.startswith("/v1/messages/")


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags and security."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "SessionBearer",
            {
                "type": "http",
                "scheme": "bearer",
                "description": "Session token issued by the identity service.",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        for tag in TAGS_METADATA:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for path, methods in schema.get("paths", {}).items():
            for method, method_obj in methods.items():
                if isinstance(method_obj, dict) and _requires_session(method, path):
                    method_obj["security"] = [{"SessionBearer": []}]

        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
