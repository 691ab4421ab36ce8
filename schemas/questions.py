# question-builder/schemas/questions.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

Kind = Literal["multiple-choice", "true-false", "short-answer"]
Difficulty = Literal["easy", "medium", "hard"]

KINDS: tuple[str, ...] = ("multiple-choice", "true-false", "short-answer")
DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")


# ---------- Drafts (validated, not yet stored) ----------


class _DraftBase(BaseModel):
    model_config = ConfigDict(frozen=True)
    prompt: str
    correct_answer: str
    difficulty: Difficulty
    category: str


class MultipleChoiceDraft(_DraftBase):
    kind: Literal["multiple-choice"] = "multiple-choice"
    options: Tuple[str, ...]


class TrueFalseDraft(_DraftBase):
    kind: Literal["true-false"] = "true-false"


class ShortAnswerDraft(_DraftBase):
    kind: Literal["short-answer"] = "short-answer"


QuestionDraft = Annotated[
    Union[MultipleChoiceDraft, TrueFalseDraft, ShortAnswerDraft],
    Field(discriminator="kind"),
]


# ---------- Stored records ----------


class _Stamp(BaseModel):
    id: str
    created_at: datetime


class MultipleChoiceQuestion(MultipleChoiceDraft, _Stamp):
    pass


class TrueFalseQuestion(TrueFalseDraft, _Stamp):
    pass


class ShortAnswerQuestion(ShortAnswerDraft, _Stamp):
    pass


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion],
    Field(discriminator="kind"),
]

# kind -> record class, used by the store when stamping a draft
RECORD_TYPES: dict[str, type[_Stamp]] = {
    "multiple-choice": MultipleChoiceQuestion,
    "true-false": TrueFalseQuestion,
    "short-answer": ShortAnswerQuestion,
}


# ---------- Input / results ----------


class QuestionCandidate(BaseModel):
    """
    Raw user input. Deliberately loose: every rule lives in the validator so
    that all problems can be reported together.
    """

    model_config = ConfigDict(extra="ignore")
    kind: Any = None
    prompt: Any = None
    options: Any = None
    correct_answer: Any = None
    difficulty: Any = None
    category: Any = None


class QuestionUpdate(BaseModel):
    # id / created_at are not accepted here; the store ignores them anyway
    model_config = ConfigDict(extra="ignore")
    kind: Any = None
    prompt: Any = None
    options: Any = None
    correct_answer: Any = None
    difficulty: Any = None
    category: Any = None


class FieldViolation(BaseModel):
    field: str
    message: str


class ValidationResult(BaseModel):
    ok: bool
    question: Optional[QuestionDraft] = None
    errors: List[FieldViolation] = []
