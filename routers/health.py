# question-builder/routers/health.py
from fastapi import APIRouter, Depends, Request

from bank import QuestionStore
from deps.store import get_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/store")
def health_store(request: Request, store: QuestionStore = Depends(get_store)):
    return {"ok": True, "count": len(store), "revision": request.app.state.revision}
