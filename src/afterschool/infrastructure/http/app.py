"""FastAPI adapter exposing order submission and lesson browsing.

Endpoints are plain ``def`` functions, so FastAPI runs them on its
worker thread pool; concurrent orders for the same lesson are kept
honest by the capacity store's locking, not by this layer.

Error mapping:
    missing/malformed JSON body     -> 400 {"error": ...}
    ValidationError, CapacityError  -> 400 {"error": ...}
    PersistenceError, anything else -> 500 {"error": ...}
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from afterschool.application.browse_lessons import BrowseLessonsHandler
from afterschool.application.place_order import PlaceOrderHandler
from afterschool.domain.exceptions import (
    CapacityError,
    PersistenceError,
    ValidationError,
)
from afterschool.infrastructure import bootstrap

logger = logging.getLogger(__name__)


def create_app(
    place_order: PlaceOrderHandler | None = None,
    browse_lessons: BrowseLessonsHandler | None = None,
) -> FastAPI:
    place_order = place_order or bootstrap.place_order_handler()
    browse_lessons = browse_lessons or bootstrap.browse_lessons_handler()

    app = FastAPI(title="Afterschool Lessons")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    # ── Error mapping ────────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def request_malformed(request: Request, exc: RequestValidationError):
        # missing or unparseable JSON body
        reasons = "; ".join(error.get("msg", "invalid") for error in exc.errors())
        return JSONResponse(
            status_code=400,
            content={"error": f"Invalid request body: {reasons or 'invalid'}"},
        )

    @app.exception_handler(ValidationError)
    async def validation_failed(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(CapacityError)
    async def capacity_failed(request: Request, exc: CapacityError):
        return JSONResponse(
            status_code=400,
            content={"error": str(exc), "lessonId": exc.lesson_id},
        )

    @app.exception_handler(PersistenceError)
    async def persistence_failed(request: Request, exc: PersistenceError):
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # ── Endpoints ────────────────────────────────────

    @app.get("/lessons")
    def list_lessons() -> list[dict]:
        return [lesson.to_json() for lesson in browse_lessons.list_all()]

    @app.get("/search")
    def search_lessons(q: str = "") -> list[dict]:
        return [lesson.to_json() for lesson in browse_lessons.search(q)]

    @app.post("/orders")
    def submit_order(body: Any = Body(...)) -> dict:
        return place_order.handle(body).to_json()

    return app
