"""
Intake API Endpoints.

Router for the calculator page. One IntakeController per browser session,
kept in memory and keyed by a cookie. Nothing survives a restart.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from brand_savings.errors import IntakeValidationError, SubmissionInProgressError
from brand_savings.sinks import HttpWebhookSink, RecordStore, SupabaseRecordStore, WebhookSink

from .controller import IntakeController
from .forms import get_form_options

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/intake", tags=["intake"])

SESSION_COOKIE = "brand_savings_session"

SESSION_TTL = timedelta(hours=2)
MAX_SESSIONS = 10_000

# Simple in-memory session store: {"controller", "expires_at"} per session id
sessions: dict[str, dict[str, Any]] = {}


# =============================================================================
# Sink Dependencies
# =============================================================================

def get_record_store() -> RecordStore:
    return SupabaseRecordStore()


def get_webhook_sink() -> WebhookSink:
    return HttpWebhookSink.from_settings()


def evict_sessions(now: datetime) -> None:
    """Drop expired sessions, then the least recently used past MAX_SESSIONS."""
    expired = [sid for sid, session in sessions.items() if session["expires_at"] <= now]
    for sid in expired:
        del sessions[sid]

    overflow = len(sessions) - MAX_SESSIONS
    if overflow > 0:
        oldest = sorted(sessions, key=lambda sid: sessions[sid]["expires_at"])[:overflow]
        for sid in oldest:
            del sessions[sid]
        expired.extend(oldest)

    if expired:
        logger.debug(f"Evicted {len(expired)} intake sessions ({len(sessions)} active)")


async def get_controller(
    request: Request,
    response: Response,
    record_store: RecordStore = Depends(get_record_store),
    webhook: WebhookSink = Depends(get_webhook_sink),
) -> IntakeController:
    """Load the session's controller, creating one on first visit."""
    now = datetime.now()
    session_id = request.cookies.get(SESSION_COOKIE)
    session = sessions.get(session_id) if session_id else None

    if session is None or session["expires_at"] <= now:
        session_id = secrets.token_urlsafe(32)
        session = {"controller": IntakeController(record_store=record_store, webhook=webhook)}
        sessions[session_id] = session
        logger.debug(f"Created intake session ({len(sessions)} active)")
        response.set_cookie(
            key=SESSION_COOKIE,
            value=session_id,
            httponly=True,
            samesite="lax",
        )

    # Sliding expiry: any request keeps the session alive
    session["expires_at"] = now + SESSION_TTL
    evict_sessions(now)
    return session["controller"]


# =============================================================================
# Request Models
# =============================================================================

class SpendRequest(BaseModel):
    monthly_spend: int


class AnswerRequest(BaseModel):
    question: str
    value: str


class ContactRequest(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    email: str | None = Field(default=None, max_length=320)


def _state_response(controller: IntakeController) -> dict[str, Any]:
    data = controller.state.to_dict()
    data["can_submit"] = controller.can_submit
    return data


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/options")
async def options():
    """Question definitions and spend slider bounds."""
    return get_form_options()


@router.get("/state")
async def get_state(controller: IntakeController = Depends(get_controller)):
    return _state_response(controller)


@router.post("/spend")
async def set_spend(req: SpendRequest, controller: IntakeController = Depends(get_controller)):
    try:
        controller.set_spend(req.monthly_spend)
    except IntakeValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state_response(controller)


@router.post("/answers")
async def set_answer(req: AnswerRequest, controller: IntakeController = Depends(get_controller)):
    try:
        controller.answer(req.question, req.value)
    except IntakeValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _state_response(controller)


@router.post("/contact")
async def update_contact(req: ContactRequest, controller: IntakeController = Depends(get_controller)):
    controller.update_contact(name=req.name, email=req.email)
    return _state_response(controller)


@router.post("/submit")
async def submit(controller: IntakeController = Depends(get_controller)):
    """
    Submit the contact form.

    Sink failures come back as 200 with success=false: the page shows the
    error and the user can resubmit.
    """
    try:
        outcome = await controller.submit()
    except SubmissionInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except IntakeValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return {
        "outcome": outcome.to_dict(),
        "state": _state_response(controller),
    }
