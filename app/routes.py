"""
API routes for the line editor.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from core import EditorError
from services.editor_service import EditorService


router = APIRouter(prefix="/api")

# Singleton service, created in main.py and attached here
_service: Optional[EditorService] = None


def init_service(service: EditorService) -> None:
    global _service
    _service = service


def svc() -> EditorService:
    if _service is None:
        raise RuntimeError("EditorService not initialized")
    return _service


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class ScriptRequest(BaseModel):
    script: str


class HistorySummary(BaseModel):
    history_pointer: int
    log_length: int
    can_undo: bool
    can_redo: bool
    line_count: int


class ScriptResponse(BaseModel):
    output: list[str]
    history: HistorySummary


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/script", response_model=ScriptResponse)
def run_script(req: ScriptRequest):
    """Run a directive script against the session."""
    try:
        output = svc().run_script(req.script)
    except EditorError as e:
        raise HTTPException(422, str(e))
    return ScriptResponse(output=output, history=HistorySummary(**svc().history_summary()))


@router.get("/lines")
def get_lines():
    """Get all lines of the current document."""
    return svc().lines()


@router.get("/lines/{start}/{end}")
def print_lines(start: int, end: int):
    """Print lines start..end; out-of-range lines come back as "."."""
    try:
        return svc().print_range(start, end)
    except EditorError as e:
        raise HTTPException(422, str(e))


@router.get("/history", response_model=HistorySummary)
def get_history():
    """Cursor position and log length."""
    return HistorySummary(**svc().history_summary())


@router.get("/log", response_class=PlainTextResponse)
def get_log():
    """Active history as a replayable directive script."""
    return svc().log_script()


@router.post("/reset", response_model=HistorySummary)
def reset():
    """Discard the document and its history."""
    svc().reset()
    return HistorySummary(**svc().history_summary())
