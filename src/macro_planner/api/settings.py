"""Settings API endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from macro_planner.api.models import CredentialPayload  # noqa: TC001

if TYPE_CHECKING:
    from macro_planner.containers import AppContainer

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/credential")
async def credential_status(request: Request) -> dict[str, bool]:
    """Report whether an API key is stored without revealing it."""
    container: AppContainer = request.app.state.container
    return {"has_credential": container.settings_store.has_credential()}


@router.put("/credential")
async def set_credential(
    payload: CredentialPayload, request: Request
) -> dict[str, bool]:
    """Store the API key."""
    container: AppContainer = request.app.state.container
    container.settings_store.set_credential(payload.api_key)
    return {"has_credential": container.settings_store.has_credential()}


@router.delete("/credential")
async def clear_credential(request: Request) -> dict[str, bool]:
    """Remove the API key."""
    container: AppContainer = request.app.state.container
    container.settings_store.clear_credential()
    return {"has_credential": False}


@router.post("/clear")
async def clear_all(request: Request) -> dict[str, str]:
    """Erase the goal weight, all entries and the API key."""
    container: AppContainer = request.app.state.container
    container.settings_store.clear_all()
    return {"status": "cleared"}
