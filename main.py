import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bank import QuestionStore, build_store

# Routers
from routers.admin import router as admin_router
from routers.health import router as health_router
from routers.questions import router as questions_router

logger = logging.getLogger("question-builder")
logging.basicConfig(level=logging.INFO)

_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def create_app(store: Optional[QuestionStore] = None) -> FastAPI:
    app = FastAPI(title="Question Builder API")

    # Allow calls from the front-end dev server (and whatever CORS_ORIGINS adds)
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*", "x-admin-token"],
    )

    app.state.store = store if store is not None else build_store()
    app.state.revision = 0

    def _on_change() -> None:
        app.state.revision += 1
        logger.info(
            "question store changed (revision %d, %d questions)",
            app.state.revision,
            len(app.state.store),
        )

    app.state.unsubscribe = app.state.store.subscribe(_on_change)

    @app.get("/")
    def health_root():
        return {"ok": True}

    app.include_router(questions_router)  # /questions/..., /categories
    app.include_router(admin_router)  # /admin/...
    app.include_router(health_router)  # /health/...
    return app


app = create_app()
