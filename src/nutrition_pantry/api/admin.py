"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from nutrition_pantry.api.serializers import entry_payload

if TYPE_CHECKING:
    from nutrition_pantry.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/users/{user_id}/inventory", dependencies=[Depends(require_admin)])
async def user_inventory(user_id: UUID, request: Request) -> dict[str, object]:
    """Return every inventory entry for a user with its audit history."""
    container: AppContainer = request.app.state.container
    entries = container.pantry_service.list_inventory(user_id)
    return {"entries": [entry_payload(entry) for entry in entries.values()]}
