from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from bank import QuestionStore, load_seed
from deps.auth import require_admin
from deps.store import get_store

logger = logging.getLogger("question-builder")

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/reload")
def reload_questions(store: QuestionStore = Depends(get_store)):
    n = store.reset(load_seed())
    logger.info("admin reload: %d questions", n)
    return {"ok": True, "count": n}
