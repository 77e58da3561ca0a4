"""
JSON API for SongBattle.

Endpoints:
    GET  /api/songs          All songs with global ratings
    GET  /api/battle         Two songs for this session's next battle
    POST /api/vote           Record which of the two won
    GET  /api/stats          Total battles and top songs
    GET  /api/leaderboard    Songs ranked by global rating
    GET  /api/me/leaderboard Songs ranked by this session's personal rating
    GET  /api/me/affinity    This session's genre tallies

Routes are plain (sync) functions: they block on database locks, so
FastAPI runs them in its threadpool instead of on the event loop.

Listener sessions are anonymous: the first request gets a random id stored
in a signed session cookie. An explicit X-Session-Id header wins over the
cookie, for clients that manage their own ids.
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette.middleware.sessions import SessionMiddleware

from songbattle.catalog.provider import Catalog
from songbattle.config import settings
from songbattle.db.session import get_db
from songbattle.elo.constants import MatchmakingParams
from songbattle.errors import InsufficientCatalog, InvalidOutcome, StorageFailure
from songbattle.logging_setup import configure_logging
from songbattle.matchmaking.matchmaker import Matchmaker
from songbattle.services.outcome import OutcomeProcessor
from songbattle.services.reports import (
    affinity_report,
    leaderboard,
    personal_leaderboard,
    stats,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="SongBattle")
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_max_age_seconds,
)

LISTENER_SESSION_KEY = "listener_id"

_matchmaking_params = MatchmakingParams.from_settings(settings)
_matchmaker = Matchmaker(_matchmaking_params)


class VoteRequest(BaseModel):
    # Optional so a missing id is reported as an invalid outcome (400)
    winnerId: Optional[int] = None
    loserId: Optional[int] = None


# =============================================================================
# Dependencies
# =============================================================================

def get_params() -> MatchmakingParams:
    return _matchmaking_params


def get_matchmaker() -> Matchmaker:
    return _matchmaker


def get_listener_session(
    request: Request,
    x_session_id: Optional[str] = Header(None),
) -> str:
    """Opaque session id for the caller, issuing one if they have none."""
    if x_session_id and x_session_id.strip():
        return x_session_id.strip()

    session_id = request.session.get(LISTENER_SESSION_KEY)
    if not session_id:
        session_id = uuid.uuid4().hex
        request.session[LISTENER_SESSION_KEY] = session_id
    return session_id


# =============================================================================
# Error handlers
# =============================================================================

@app.exception_handler(InvalidOutcome)
async def invalid_outcome_handler(request: Request, exc: InvalidOutcome):
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure):
    return JSONResponse({"error": "Could not save your vote, please try again"}, status_code=503)


@app.exception_handler(InsufficientCatalog)
async def insufficient_catalog_handler(request: Request, exc: InsufficientCatalog):
    logger.error("Matchmaking impossible: %s", exc)
    return JSONResponse({"error": "Not enough songs to battle"}, status_code=500)


# =============================================================================
# Routes
# =============================================================================

@app.get("/api/songs")
def api_songs(db: Session = Depends(get_db)):
    """All songs, highest global rating first."""
    songs = sorted(Catalog(db).list_songs(), key=lambda s: (-s.rating, s.id))
    return [song.to_dict() for song in songs]


@app.get("/api/battle")
def api_battle(
    db: Session = Depends(get_db),
    session_id: str = Depends(get_listener_session),
    matchmaker: Matchmaker = Depends(get_matchmaker),
):
    """Two songs for this session's next battle."""
    battle = matchmaker.pair_for_session(db, session_id)
    return {
        "left": battle.left.to_dict(),
        "right": battle.right.to_dict(),
    }


@app.post("/api/vote")
def api_vote(
    vote: VoteRequest,
    db: Session = Depends(get_db),
    session_id: str = Depends(get_listener_session),
    params: MatchmakingParams = Depends(get_params),
):
    """
    Record a vote: winnerId beat loserId.

    Ids are trusted as sent; there is no check that this pair is the one
    most recently served to the session.
    """
    result = OutcomeProcessor(db, params).record_outcome(session_id, vote.winnerId, vote.loserId)
    db.commit()

    return {
        "success": True,
        "message": f"Vote recorded for {result.title}!",
        **result.to_dict(),
    }


@app.get("/api/stats")
def api_stats(db: Session = Depends(get_db)):
    return stats(db)


@app.get("/api/leaderboard")
def api_leaderboard(db: Session = Depends(get_db)):
    return leaderboard(db)


@app.get("/api/me/leaderboard")
def api_my_leaderboard(
    db: Session = Depends(get_db),
    session_id: str = Depends(get_listener_session),
):
    """This session's personal rankings (only songs it has voted on)."""
    return personal_leaderboard(db, session_id)


@app.get("/api/me/affinity")
def api_my_affinity(
    db: Session = Depends(get_db),
    session_id: str = Depends(get_listener_session),
):
    return affinity_report(db, session_id)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "songbattle.web.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )


# Only for debugging
if __name__ == "__main__":
    run()
