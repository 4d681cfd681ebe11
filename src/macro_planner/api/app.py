"""FastAPI application factory."""

import logging
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from macro_planner.api.models import (
    EntryCreatePayload,
    EntryUpdatePayload,
    GoalWeightPayload,
    ParseRequest,
    has_any_macro,
)
from macro_planner.api.settings import router as settings_router
from macro_planner.app_logging import configure_logging
from macro_planner.containers import AppContainer
from macro_planner.domain.entries import EntryDraft
from macro_planner.domain.errors import StorageError
from macro_planner.services.calculations import derive_targets, explain_targets
from macro_planner.services.entries import entry_to_payload
from macro_planner.services.stats import DEFAULT_HISTORY_DAYS

SAVE_FAILED_MESSAGE = "Couldn't save your changes. Please try again."
MISSING_CREDENTIAL_MESSAGE = "Add your OpenAI API key in Settings to use AI parsing."


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(settings_router)

    @app.exception_handler(StorageError)
    async def storage_error_handler(
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": SAVE_FAILED_MESSAGE},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/goal")
    async def get_goal(request: Request) -> dict[str, object]:
        """Return the stored goal weight."""
        state_container: AppContainer = request.app.state.container
        return _goal_response(state_container.goal_store.get())

    @app.put("/goal")
    async def set_goal(
        payload: GoalWeightPayload, request: Request
    ) -> dict[str, object]:
        """Store a goal weight and return the derived targets."""
        state_container: AppContainer = request.app.state.container
        state_container.goal_store.set(payload.goal_weight_lb)
        return _goal_response(state_container.goal_store.get())

    @app.delete("/goal")
    async def clear_goal(request: Request) -> dict[str, object]:
        """Remove the goal weight."""
        state_container: AppContainer = request.app.state.container
        state_container.goal_store.clear()
        return _goal_response(None)

    @app.get("/targets")
    async def get_targets(request: Request) -> dict[str, object]:
        """Return targets for the stored goal weight."""
        state_container: AppContainer = request.app.state.container
        goal_weight = state_container.goal_store.get()
        if goal_weight is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Goal weight not set"
            )
        return asdict(derive_targets(goal_weight))

    @app.get("/targets/formulas")
    async def get_target_formulas(request: Request) -> dict[str, object]:
        """Explain each target formula using the stored goal weight."""
        state_container: AppContainer = request.app.state.container
        goal_weight = state_container.goal_store.get()
        if goal_weight is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Goal weight not set"
            )
        return {
            name: asdict(formula)
            for name, formula in explain_targets(goal_weight).items()
        }

    @app.get("/entries")
    async def list_entries(request: Request) -> dict[str, object]:
        """Return all entries, most recent first."""
        state_container: AppContainer = request.app.state.container
        entries = state_container.entry_store.get_all()
        return {"entries": [entry_to_payload(entry) for entry in entries]}

    @app.post("/entries", status_code=status.HTTP_201_CREATED)
    async def create_entry(
        payload: EntryCreatePayload, request: Request
    ) -> dict[str, object]:
        """Create a food entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_store.add(
            EntryDraft(
                logged_at=payload.logged_at,
                label=payload.label.strip(),
                protein_g=payload.protein_g,
                carbs_g=payload.carbs_g,
                fat_g=payload.fat_g,
                source=payload.source,
                raw_text=payload.raw_text if payload.source == "ai" else None,
            )
        )
        return entry_to_payload(entry)

    @app.post("/entries/parse")
    async def parse_entry_text(
        payload: ParseRequest, request: Request
    ) -> dict[str, object]:
        """Estimate macros for a meal description."""
        state_container: AppContainer = request.app.state.container
        api_key = state_container.settings_store.get_credential()
        if not api_key:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=MISSING_CREDENTIAL_MESSAGE,
            )
        result = await state_container.macro_parse_service.parse(payload.text, api_key)
        return asdict(result)

    @app.get("/entries/{entry_id}")
    async def get_entry(entry_id: str, request: Request) -> dict[str, object]:
        """Return a single entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.entry_store.get(entry_id)
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return entry_to_payload(entry)

    @app.patch("/entries/{entry_id}")
    async def update_entry(
        entry_id: str, payload: EntryUpdatePayload, request: Request
    ) -> dict[str, object]:
        """Update an entry; date key and calories are recomputed."""
        state_container: AppContainer = request.app.state.container
        store = state_container.entry_store
        current = store.get(entry_id)
        if current is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        protein_g = _pick(payload.protein_g, current.protein_g)
        carbs_g = _pick(payload.carbs_g, current.carbs_g)
        fat_g = _pick(payload.fat_g, current.fat_g)
        if not has_any_macro(protein_g, carbs_g, fat_g):
            raise HTTPException(
                status_code=422,
                detail="Enter at least one macro value.",
            )
        updated = store.update(
            entry_id,
            logged_at=payload.logged_at,
            label=payload.label.strip() if payload.label is not None else None,
            protein_g=payload.protein_g,
            carbs_g=payload.carbs_g,
            fat_g=payload.fat_g,
        )
        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return entry_to_payload(updated)

    @app.delete("/entries/{entry_id}")
    async def delete_entry(entry_id: str, request: Request) -> dict[str, str]:
        """Delete an entry."""
        state_container: AppContainer = request.app.state.container
        if not state_container.entry_store.delete(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.get("/stats/today")
    async def stats_today(request: Request) -> dict[str, object]:
        """Return today's totals with targets and remaining macros."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.stats_service.get_today())

    @app.get("/stats/daily")
    async def stats_daily(
        request: Request, days: int = DEFAULT_HISTORY_DAYS
    ) -> dict[str, object]:
        """Return per-day macro totals, oldest first."""
        state_container: AppContainer = request.app.state.container
        if days < 1:
            raise HTTPException(
                status_code=422,
                detail="days must be at least 1",
            )
        daily = state_container.stats_service.get_daily(days)
        return {"days": [asdict(day) for day in daily]}

    return app


def _goal_response(goal_weight: float | None) -> dict[str, object]:
    targets = derive_targets(goal_weight) if goal_weight is not None else None
    return {
        "goal_weight_lb": goal_weight,
        "targets": asdict(targets) if targets else None,
    }


def _pick(value: float | None, fallback: float) -> float:
    return fallback if value is None else value
