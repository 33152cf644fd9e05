from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from homepantry.api.routes import pantry, planner, recipes, shopping
from homepantry.events.web_observers import start as start_event_observers, get_events as get_web_events
from homepantry.utilities.errors import HomePantryError

logger = logging.getLogger("homepantry")

app = FastAPI(title="HomePantry API")

app.include_router(pantry.router)
app.include_router(shopping.router)
app.include_router(planner.router)
app.include_router(recipes.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for pantry and meal events started")


@app.exception_handler(HomePantryError)
async def homepantry_error_handler(request: Request, exc: HomePantryError):
    logger.info("%s %s -> %s (%s)", request.method, request.url.path, exc.status_code, exc.kind)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get('/api/health')
def health():
    return {"status": "ok"}


@app.get('/api/events')
def api_events(
    since: Optional[int] = Query(default=None, description="Only events with a larger id")
):
    """Recent pantry, planner and shopping-list events.

    Poll with ``since=<next_cursor>`` from the previous response to get only new entries.
    """
    return get_web_events(since)
