from __future__ import annotations

import random as _rnd
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bank import ALL_CATEGORIES, QuestionStore
from deps.store import get_store
from errors import NotFoundError, QuestionValidationError
from schemas.questions import (
    Difficulty,
    Question,
    QuestionCandidate,
    QuestionUpdate,
    ValidationResult,
)
from validator import validate

router = APIRouter(tags=["questions"])


def _invalid(errors) -> HTTPException:
    return HTTPException(
        status_code=422, detail={"errors": [e.model_dump() for e in errors]}
    )


@router.get("/questions", response_model=List[Question])
def list_questions(
    category: str = ALL_CATEGORIES,
    difficulty: Optional[Difficulty] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    random: bool = Query(default=False, description="If true, shuffle before limiting"),
    store: QuestionStore = Depends(get_store),
):
    # materialize once so we can filter/shuffle/limit deterministically
    qs = list(store.list_by_category(category))

    if difficulty:
        qs = [q for q in qs if q.difficulty == difficulty]

    if random:
        _rnd.shuffle(qs)

    if limit is not None:
        qs = qs[:limit]

    return qs


@router.post("/questions", response_model=Question, status_code=201)
def create_question(body: QuestionCandidate, store: QuestionStore = Depends(get_store)):
    result = validate(body)
    if not result.ok:
        raise _invalid(result.errors)
    return store.create(result.question)


@router.post("/questions/validate", response_model=ValidationResult)
def validate_question(body: QuestionCandidate):
    return validate(body)


@router.get("/questions/{qid}", response_model=Question)
def get_question_detail(qid: str, store: QuestionStore = Depends(get_store)):
    try:
        return store.get(qid)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="question not found")


@router.patch("/questions/{qid}", response_model=Question)
def update_question(
    qid: str, body: QuestionUpdate, store: QuestionStore = Depends(get_store)
):
    try:
        return store.update(qid, body.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="question not found")
    except QuestionValidationError as e:
        raise _invalid(e.violations)


@router.delete("/questions/{qid}")
def delete_question(qid: str, store: QuestionStore = Depends(get_store)):
    if not store.delete(qid):
        raise HTTPException(status_code=404, detail="question not found")
    return {"ok": True}


@router.get("/categories", response_model=List[str])
def list_categories(store: QuestionStore = Depends(get_store)):
    return store.distinct_categories()
