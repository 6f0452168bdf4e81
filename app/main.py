"""
FastAPI application entry point.

Run:  python -m uvicorn app.main:app --reload --port 8000
  or: line-editor --serve
"""
from __future__ import annotations

import logging

from app.config import LOG_FORMAT, load_settings

settings = load_settings()

logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

from fastapi import FastAPI

from services.editor_service import EditorService
from app.routes import router, init_service

app = FastAPI(title="Line Editor")

init_service(EditorService())

app.include_router(router)
