from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from contextlib import asynccontextmanager
from typing import Optional
import logging

from mealplanner.domain.errors import NotFoundError, ValidationError
from mealplanner.events.web_observers import EventFeed
from mealplanner.infra.Remote_Catalog import fetch_meals
from mealplanner.logic.planner_service import PlannerService
from mealplanner.utilities.config import REMOTE_CATALOG_URL

# Routers
from mealplanner.api.routes import meals, plan, shopping

# Logging
logger = logging.getLogger("mealplanner_app")


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Start the event feed and merge the remote catalog, if one is configured."""
    app.state.event_feed.start(app.state.planner.event_bus)
    url = app.state.remote_catalog_url
    if url:
        remote = await fetch_meals(url)
        added = app.state.planner.merge_remote(remote)
        logger.info("Remote catalog %s: %d fetched, %d new", url, len(remote), len(added))
    yield
    app.state.event_feed.stop()


def create_app(planner: Optional[PlannerService] = None, remote_catalog_url: str = REMOTE_CATALOG_URL) -> FastAPI:
    """Build the API around one PlannerService.

    The service holds all catalog/plan state for the app; nothing is kept in
    module globals, so tests can build an app over a temporary data directory.
    """
    app = FastAPI(title="Weekly Meal Planner API", lifespan=_lifespan)
    app.state.planner = planner if planner is not None else PlannerService().load()
    app.state.event_feed = EventFeed()
    app.state.remote_catalog_url = remote_catalog_url

    app.include_router(meals.router)
    app.include_router(plan.router)
    app.include_router(shopping.router)

    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    # -------------------- API: Events (polled by frontend) --------------------
    @app.get('/api/events')
    def api_events(
        since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
    ):
        """
        Return recent catalog/plan events.

        Client polling strategy:
            1. First call without 'since' to load the current backlog.
            2. Store 'next_cursor' from the response.
            3. Subsequent polls: /api/events?since=<next_cursor>
        """
        return app.state.event_feed.get_events(since)

    return app
