"""FastAPI main application."""

import uuid
from datetime import date as date_type
from typing import Dict, List, Literal, Optional, Tuple

import structlog
from fastapi import FastAPI, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.alea_prng import AleaPRNG
from ..core.hit_test import hit_test
from ..exceptions import SurfaceUnavailableError
from ..models import CheckinRecord, Quote, Task
from ..records import InMemoryCheckinRepository
from ..render.pillow_surface import PillowSurface
from ..session import CheckinSession, CompletionResult
from ..utils.logging import configure_from_settings

# Configure logging
configure_from_settings(settings)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Mosaic Check-in API",
    description="Daily habit boards that reveal a quote as tasks are completed",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Active sessions and the records they persist to
sessions: Dict[str, CheckinSession] = {}
session_seeds: Dict[str, str] = {}
repository = InMemoryCheckinRepository()


# Request/Response models
class SessionCreateRequest(BaseModel):
    """Request to start a check-in board."""

    tasks: List[Task] = Field(..., min_length=1, description="Tasks of the day, one region each")
    date: Optional[str] = Field(None, description="Day of the board (YYYY-MM-DD), today by default")
    width: int = Field(settings.canvas_width, ge=100, le=4000, description="Board width")
    height: int = Field(settings.canvas_height, ge=100, le=4000, description="Board height")
    seed: Optional[str] = Field(None, description="Seed for a reproducible board")
    quote: Optional[Quote] = Field(None, description="Quote painted under the regions")


class RegionInfo(BaseModel):
    id: int
    polygon: List[Tuple[float, float]]
    area: float
    center: Tuple[float, float]
    color: str
    completed: bool
    revealed: bool


class SessionSummary(BaseModel):
    """State of a check-in board."""

    id: str
    date: str
    seed: str
    width: int
    height: int
    epoch: int
    score_total: int
    completion_rate: int
    is_complete: bool
    regions: List[RegionInfo]


class TapRequest(BaseModel):
    x: float
    y: float
    timestamp_ms: int = Field(..., ge=0)
    kind: Literal["tap", "long_press"] = "tap"


class CompletionInfo(BaseModel):
    index: int
    changed: bool
    score_delta: int
    score_total: int
    all_revealed: bool


class TapResponse(BaseModel):
    region_index: int = Field(description="Region under the tap, -1 for none")
    completion: Optional[CompletionInfo] = None


class HitResponse(BaseModel):
    region_index: int


class StatsResponse(BaseModel):
    region_count: int
    total_area: float
    avg_area: float
    revealed_count: int
    completed_count: int
    completion_rate: int


# Helper functions
def get_session_or_404(session_id: str) -> CheckinSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


def summarize(session_id: str, session: CheckinSession) -> SessionSummary:
    return SessionSummary(
        id=session_id,
        date=session.date,
        seed=session_seeds[session_id],
        width=session.settings.canvas_width,
        height=session.settings.canvas_height,
        epoch=session.store.epoch,
        score_total=session.score_total,
        completion_rate=session.completion_rate,
        is_complete=session.is_complete,
        regions=[
            RegionInfo(
                id=r.id,
                polygon=[(p.x, p.y) for p in r.polygon],
                area=r.area,
                center=(r.center.x, r.center.y),
                color=r.color,
                completed=r.completed,
                revealed=r.revealed,
            )
            for r in session.store.all_regions()
        ],
    )


def session_hit(session: CheckinSession, point: Tuple[float, float]) -> int:
    return hit_test(point, session.store.all_regions())


def completion_info(result: Optional[CompletionResult]) -> Optional[CompletionInfo]:
    if result is None:
        return None
    return CompletionInfo(
        index=result.index,
        changed=result.changed,
        score_delta=result.score_delta,
        score_total=result.score_total,
        all_revealed=result.all_revealed,
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Mosaic Check-in API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "sessions": len(sessions)}


@app.post("/sessions", response_model=SessionSummary, status_code=201)
async def create_session(request: SessionCreateRequest):
    """Start a board for the given tasks, restoring the day's record if one exists."""
    logger.info("Session requested", tasks=len(request.tasks), date=request.date)

    session_id = str(uuid.uuid4())
    seed = request.seed or str(uuid.uuid4())[:8]
    day = request.date or date_type.today().isoformat()

    session_settings = settings.model_copy(
        update={"canvas_width": request.width, "canvas_height": request.height}
    )
    session = CheckinSession(
        request.tasks,
        day,
        settings=session_settings,
        repository=repository,
        prng=AleaPRNG(seed),
    )

    try:
        session.start(
            lambda w, h: PillowSurface(w, h, scale=session_settings.device_pixel_ratio),
            quote=request.quote,
        )
    except SurfaceUnavailableError as e:
        logger.error("Session start failed", error=str(e))
        raise HTTPException(status_code=503, detail=str(e))

    sessions[session_id] = session
    session_seeds[session_id] = seed
    return summarize(session_id, session)


@app.get("/sessions/{session_id}", response_model=SessionSummary)
async def get_session(session_id: str):
    return summarize(session_id, get_session_or_404(session_id))


@app.delete("/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    session = get_session_or_404(session_id)
    session.close()
    del sessions[session_id]
    session_seeds.pop(session_id, None)
    return Response(status_code=204)


@app.post("/sessions/{session_id}/tap", response_model=TapResponse)
async def tap(session_id: str, request: TapRequest):
    """Feed a tap or long press; double taps and long presses complete tasks."""
    session = get_session_or_404(session_id)
    point = (request.x, request.y)

    if request.kind == "long_press":
        result = session.handle_long_press(point, request.timestamp_ms)
    else:
        session.flush_taps(request.timestamp_ms)
        result = session.handle_tap(point, request.timestamp_ms)

    index = result.index if result is not None else session_hit(session, point)
    return TapResponse(region_index=index, completion=completion_info(result))


@app.get("/sessions/{session_id}/hit", response_model=HitResponse)
async def hit(session_id: str, x: float = Query(...), y: float = Query(...)):
    session = get_session_or_404(session_id)
    return HitResponse(region_index=session_hit(session, (x, y)))


@app.post("/sessions/{session_id}/regions/{index}/complete", response_model=CompletionInfo)
async def complete_region(session_id: str, index: int):
    session = get_session_or_404(session_id)
    if not 0 <= index < len(session.store):
        raise HTTPException(status_code=404, detail="Region not found")
    return completion_info(session.complete_task(index))


@app.get("/sessions/{session_id}/record")
async def get_record(session_id: str):
    """Record as persisted: camelCase keys, indices only."""
    record: CheckinRecord = get_session_or_404(session_id).to_record()
    return record.model_dump(mode="json", by_alias=True)


@app.get("/sessions/{session_id}/stats", response_model=StatsResponse)
async def get_stats(session_id: str):
    session = get_session_or_404(session_id)
    stats = session.stats()
    return StatsResponse(
        region_count=stats.region_count,
        total_area=stats.total_area,
        avg_area=stats.avg_area,
        revealed_count=stats.revealed_count,
        completed_count=stats.completed_count,
        completion_rate=session.completion_rate,
    )


@app.get("/sessions/{session_id}/render.png")
async def render_png(session_id: str):
    session = get_session_or_404(session_id)
    session.render()
    return Response(content=session.surface.to_png(), media_type="image/png")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
