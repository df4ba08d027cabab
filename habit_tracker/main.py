"""Main FastAPI application."""

import logging
import threading
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .api.models import HabitView, SummaryResponse, ThemeRequest, ThemeResponse
from .config import settings
from .exceptions import HabitNotFoundError
from .habits.models import DayOfWeek, EditHabitData, HabitFormData
from .habits.query import FilterKind, HabitQuery, SortKind
from .remote.client import HabitAPIClient
from .storage.database import LocalStore
from .sync.gateway import PersistenceGateway
from .tracker import HabitTracker

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Habit Tracker",
    description="Habit tracking with remote sync and offline fallback",
    version="1.0.0",
)


# Single tracker shared by every request
_tracker: Optional[HabitTracker] = None
_tracker_lock = threading.Lock()


def get_tracker() -> HabitTracker:
    """Build the tracker from settings and load it once."""
    global _tracker
    with _tracker_lock:
        if _tracker is None:
            client = HabitAPIClient(settings.habit_api_url, settings.habit_api_timeout)
            store = LocalStore(settings.storage_path)
            gateway = PersistenceGateway(client, store, system_theme=settings.system_theme)

            tracker = HabitTracker(gateway, sync_on_load=settings.sync_on_load)
            tracker.load()
            _tracker = tracker
        return _tracker


@app.exception_handler(HabitNotFoundError)
async def habit_not_found_handler(request: Request, exc: HabitNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Habit Tracker",
        "version": "1.0.0",
        "endpoints": {
            "habits": "/api/habits",
            "summary": "/api/summary",
            "theme": "/api/theme",
            "sync": "/api/sync",
            "status": "/status",
        },
    }


@app.get("/status")
def status(tracker: HabitTracker = Depends(get_tracker)):
    """Server status endpoint."""
    report = tracker.last_report
    return {
        "status": "running",
        "version": "1.0.0",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "habit_api_url": settings.habit_api_url,
        "load_source": tracker.load_source.value if tracker.load_source else None,
        "habit_count": len(tracker.habits),
        "last_sync_ok": report.ok if report else None,
    }


@app.get("/api/habits", response_model=list[HabitView])
def list_habits(
    search: str = Query("", description="Case-insensitive name filter"),
    filter_kind: FilterKind = Query(FilterKind.ALL, alias="filter"),
    sort_kind: SortKind = Query(SortKind.CREATED, alias="sort"),
    today: Optional[date] = Query(None, description="Reference date for streaks"),
    tracker: HabitTracker = Depends(get_tracker),
):
    """Filtered and sorted habits with their statistics."""
    query = HabitQuery(search_term=search, filter_kind=filter_kind, sort_kind=sort_kind)
    return [HabitView.from_habit(habit, today) for habit in tracker.visible(query, today)]


@app.post("/api/habits", response_model=HabitView, status_code=201)
def add_habit(form: HabitFormData, tracker: HabitTracker = Depends(get_tracker)):
    habit = tracker.add_habit(form)
    return HabitView.from_habit(habit)


@app.patch("/api/habits/{habit_id}", response_model=HabitView)
def edit_habit(
    habit_id: str, edit: EditHabitData, tracker: HabitTracker = Depends(get_tracker)
):
    habit = tracker.edit_habit(habit_id, edit)
    return HabitView.from_habit(habit)


@app.post("/api/habits/{habit_id}/days/{day}/toggle", response_model=HabitView)
def toggle_day(
    habit_id: str,
    day: DayOfWeek,
    today: Optional[date] = Query(None),
    tracker: HabitTracker = Depends(get_tracker),
):
    habit = tracker.toggle_day(habit_id, day)
    return HabitView.from_habit(habit, today)


@app.delete("/api/habits/{habit_id}")
def delete_habit(habit_id: str, tracker: HabitTracker = Depends(get_tracker)):
    report = tracker.delete_habit(habit_id)
    return {"status": "success", "sync": report.to_dict()}


@app.post("/api/habits/reset")
def reset_progress(tracker: HabitTracker = Depends(get_tracker)):
    """Clear the week for every habit."""
    report = tracker.reset_all_progress()
    return {"status": "success", "sync": report.to_dict() if report else None}


@app.get("/api/summary", response_model=SummaryResponse)
def summary(tracker: HabitTracker = Depends(get_tracker)):
    return SummaryResponse(**tracker.summary(), theme=tracker.theme)


@app.post("/api/sync")
def sync(tracker: HabitTracker = Depends(get_tracker)):
    """Run the full save protocol now."""
    logger.info("Manual sync requested")
    report = tracker.sync()
    return {"status": "success", "sync": report.to_dict() if report else None}


@app.get("/api/theme", response_model=ThemeResponse)
def get_theme(tracker: HabitTracker = Depends(get_tracker)):
    return ThemeResponse(theme=tracker.theme)


@app.put("/api/theme", response_model=ThemeResponse)
def put_theme(body: ThemeRequest, tracker: HabitTracker = Depends(get_tracker)):
    tracker.set_theme(body.theme)
    return ThemeResponse(theme=tracker.theme)


@app.post("/api/theme/toggle", response_model=ThemeResponse)
def toggle_theme(tracker: HabitTracker = Depends(get_tracker)):
    return ThemeResponse(theme=tracker.toggle_theme())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )
