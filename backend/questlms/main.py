# backend/questlms/main.py
from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from questlms.db import healthcheck as db_healthcheck
from questlms.routers.users import router as users_router
from questlms.routers.courses import router as courses_router
from questlms.routers.missions import router as missions_router
from questlms.routers.quizzes import router as quizzes_router
from questlms.routers.assignments import router as assignments_router
from questlms.routers.progress import router as progress_router
from questlms.routers.badges import router as badges_router
from questlms.routers.students import router as students_router
from questlms.routers.discussions import router as discussions_router


def _configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title="QuestLMS API")

    # CORS (dev frontends on localhost by default)
    frontend_origin = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[frontend_origin],
        allow_origin_regex=os.getenv(
            "CORS_ORIGIN_REGEX", r"^https?://(localhost|127\.0\.0\.1|0\.0\.0\.0)(:\d+)?$"
        ),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    # Health
    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/healthcheck")
    def healthcheck():
        body = db_healthcheck()
        body["timestamp"] = datetime.now(timezone.utc).isoformat()
        return body

    app.include_router(users_router)
    app.include_router(courses_router)
    app.include_router(missions_router)
    app.include_router(quizzes_router)
    app.include_router(assignments_router)
    app.include_router(progress_router)
    app.include_router(badges_router)
    app.include_router(students_router)
    app.include_router(discussions_router)

    return app


app = build_app()
