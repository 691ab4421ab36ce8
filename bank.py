# question-builder/bank.py

from __future__ import annotations

import itertools
import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from errors import NotFoundError
from questions import QUESTIONS
from schemas.questions import RECORD_TYPES, Question, QuestionDraft
from validator import require_valid, validate

logger = logging.getLogger("question-builder.store")
seed_logger = logging.getLogger("question-builder.seed")

_BASE = Path(__file__).resolve().parent
_DATA_DIR = _BASE / "data" / "questions"

ALL_CATEGORIES = "all"
_PROTECTED = ("id", "created_at")

Subscriber = Callable[[], None]


class QuestionStore:
    """
    Canonical in-memory collection of validated questions.

    Records keep insertion order. Every mutation (create, update, a delete
    that removed something, reset) runs all subscribers synchronously after
    the change is fully applied. A subscriber that raises propagates to the
    caller of the mutation; the mutation itself stays applied.
    """

    def __init__(self, seed: Iterable[QuestionDraft] = ()):
        self._questions: List[Question] = []
        # (token, callback) pairs; the token identifies one registration
        self._subscribers: List[Tuple[object, Subscriber]] = []
        self._counter = itertools.count(1)
        for draft in seed:
            self._questions.append(self._stamp(draft))

    # --- internals ---

    def _next_id(self) -> str:
        return f"q{next(self._counter)}"

    def _stamp(self, draft: QuestionDraft) -> Question:
        cls = RECORD_TYPES[draft.kind]
        return cls(**draft.model_dump(), id=self._next_id(), created_at=datetime.now(UTC))

    def _index(self, qid: str) -> int:
        for i, q in enumerate(self._questions):
            if q.id == qid:
                return i
        raise NotFoundError(qid)

    def _notify(self) -> None:
        # snapshot: callbacks may unsubscribe while we iterate
        for _, cb in list(self._subscribers):
            cb()

    # --- mutations ---

    def create(self, draft: QuestionDraft) -> Question:
        q = self._stamp(draft)
        self._questions.append(q)
        logger.debug("created %s (%s, %s)", q.id, q.kind, q.category)
        self._notify()
        return q

    def update(self, qid: str, fields: Mapping[str, Any]) -> Question:
        """
        Shallow-merge `fields` onto an existing record and re-validate the result.

        id and created_at are ignored if present. Raises NotFoundError for an
        unknown id and QuestionValidationError if the merged record is invalid;
        in both cases nothing changes.
        """
        i = self._index(qid)
        current = self._questions[i]
        merged = current.model_dump(exclude=set(_PROTECTED))
        merged.update({k: v for k, v in fields.items() if k not in _PROTECTED})
        draft = require_valid(merged)

        cls = RECORD_TYPES[draft.kind]
        q = cls(**draft.model_dump(), id=current.id, created_at=current.created_at)
        self._questions[i] = q
        logger.debug("updated %s", qid)
        self._notify()
        return q

    def delete(self, qid: str) -> bool:
        try:
            i = self._index(qid)
        except NotFoundError:
            return False
        del self._questions[i]
        logger.debug("deleted %s", qid)
        self._notify()
        return True

    def reset(self, drafts: Iterable[QuestionDraft]) -> int:
        """Replace the whole collection with fresh records; ids are never reused."""
        fresh = [self._stamp(d) for d in drafts]
        self._questions = fresh
        logger.debug("reset with %d questions", len(fresh))
        self._notify()
        return len(fresh)

    # --- queries ---

    def get(self, qid: str) -> Question:
        return self._questions[self._index(qid)]

    def list(self) -> Tuple[Question, ...]:
        return tuple(self._questions)

    def list_by_category(self, category: str) -> Tuple[Question, ...]:
        if category == ALL_CATEGORIES:
            return self.list()
        return tuple(q for q in self._questions if q.category == category)

    def distinct_categories(self) -> List[str]:
        # first-seen order, recomputed on every call
        return list(dict.fromkeys(q.category for q in self._questions))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        token = object()
        self._subscribers.append((token, callback))

        def unsubscribe() -> None:
            self._subscribers = [s for s in self._subscribers if s[0] is not token]

        return unsubscribe

    def __len__(self) -> int:
        return len(self._questions)


# --- Seed loading ----------------------------------------------------------------


def _data_dir() -> Path:
    env = os.getenv("QUESTION_DATA_DIR")
    return Path(env) if env else _DATA_DIR


def _iter_jsonl(p: Path) -> Iterable[Dict[str, Any]]:
    try:
        lines = p.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError:
        seed_logger.warning("%s: not valid UTF-8, skipped", p)
        return
    for idx, line in enumerate(lines, 1):
        s = line.strip()
        if not s or s.startswith("#") or s.startswith("//"):
            continue
        try:
            yield json.loads(s)
        except json.JSONDecodeError:
            seed_logger.warning("%s:%d: malformed JSON, skipped", p, idx)
            continue


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError):
            seed_logger.warning("%s: malformed JSON, skipped", p)
            data = []
    if isinstance(data, list):
        for obj in data:
            yield obj


def _validated(raw_items: Iterable[Any], source: str) -> List[QuestionDraft]:
    drafts: List[QuestionDraft] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            continue
        result = validate(raw)
        if not result.ok:
            problems = "; ".join(f"{e.field}: {e.message}" for e in result.errors)
            seed_logger.warning("%s: skipped invalid question (%s)", source, problems)
            continue
        drafts.append(result.question)
    return drafts


def load_seed(data_dir: Optional[Path] = None) -> List[QuestionDraft]:
    data_dir = data_dir or _data_dir()
    drafts: List[QuestionDraft] = []

    if data_dir.exists():
        for p in sorted(data_dir.rglob("*")):
            if not p.is_file():
                continue
            suf = p.suffix.lower()
            if suf == ".jsonl":
                source = _iter_jsonl(p)
            elif suf == ".json":
                source = _iter_json(p)
            else:
                continue
            drafts.extend(_validated(source, str(p)))

    # Fall back to the built-in questions if nothing valid loaded
    if not drafts:
        drafts = _validated(QUESTIONS, "built-in seed")

    seed_logger.info("loaded %d seed questions", len(drafts))
    return drafts


def build_store(data_dir: Optional[Path] = None) -> QuestionStore:
    return QuestionStore(seed=load_seed(data_dir))
