from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, TypeAdapter

from errors import QuestionValidationError
from schemas.questions import (
    DIFFICULTIES,
    KINDS,
    FieldViolation,
    QuestionDraft,
    ValidationResult,
)

MIN_OPTIONS = 2
_TRUE_FALSE = {"true": "True", "false": "False"}

_PROMPT_REQUIRED_MSG = "Question is required."
_ANSWER_REQUIRED_MSG = "Correct answer is required."
_CATEGORY_REQUIRED_MSG = "Category is required."
_KIND_MSG = "Kind must be one of: " + ", ".join(KINDS) + "."
_DIFFICULTY_MSG = "Difficulty must be one of: " + ", ".join(DIFFICULTIES) + "."
_OPTIONS_TYPE_MSG = "Options must be a list of text values."
_OPTIONS_COUNT_MSG = f"At least {MIN_OPTIONS} non-empty options are required."
_ANSWER_NOT_OPTION_MSG = "Correct answer must match one of the options."
_ANSWER_TRUE_FALSE_MSG = "Correct answer must be True or False."

_draft_adapter: TypeAdapter = TypeAdapter(QuestionDraft)

Candidate = Union[Mapping[str, Any], BaseModel]


# --- Field rules --------------------------------------------------------------
# Each rule returns (normalized value, error message or None).


def _text(value: Any, required_msg: str) -> Tuple[Optional[str], Optional[str]]:
    if value is None:
        return None, required_msg
    if not isinstance(value, str):
        return None, "Must be text."
    s = value.strip()
    if not s:
        return None, required_msg
    return s, None


def _choice(value: Any, allowed: Tuple[str, ...], msg: str) -> Tuple[Optional[str], Optional[str]]:
    # exact match only: " Easy " or "EASY" are rejected, not coerced
    if isinstance(value, str) and value in allowed:
        return value, None
    return None, msg


def _options(value: Any) -> Tuple[Optional[Tuple[str, ...]], Optional[str]]:
    if value is None:
        return None, _OPTIONS_COUNT_MSG
    if not isinstance(value, (list, tuple)) or not all(isinstance(o, str) for o in value):
        return None, _OPTIONS_TYPE_MSG
    # empty entries are dropped before counting (blank form slots are common)
    kept = tuple(o.strip() for o in value if o.strip())
    if len(kept) < MIN_OPTIONS:
        return None, _OPTIONS_COUNT_MSG
    return kept, None


def _as_dict(candidate: Candidate) -> Dict[str, Any]:
    if isinstance(candidate, BaseModel):
        return candidate.model_dump()
    return dict(candidate)


# --- Public API ---------------------------------------------------------------


def validate(candidate: Candidate, kind: Optional[str] = None) -> ValidationResult:
    """
    Check a candidate question against the rules for its kind.

    Every violated rule is reported as a (field, message) pair; nothing stops
    at the first failure. On success the result carries the normalized draft
    (trimmed strings, empty options dropped) without id/created_at.
    """
    raw = _as_dict(candidate)
    if kind is not None:
        raw["kind"] = kind

    errors: List[FieldViolation] = []
    out: Dict[str, Any] = {}

    def check(field: str, value: Any, err: Optional[str]) -> None:
        if err is not None:
            errors.append(FieldViolation(field=field, message=err))
        else:
            out[field] = value

    check("kind", *_choice(raw.get("kind"), KINDS, _KIND_MSG))
    check("prompt", *_text(raw.get("prompt"), _PROMPT_REQUIRED_MSG))
    check("difficulty", *_choice(raw.get("difficulty"), DIFFICULTIES, _DIFFICULTY_MSG))
    check("category", *_text(raw.get("category"), _CATEGORY_REQUIRED_MSG))

    answer, answer_err = _text(raw.get("correct_answer"), _ANSWER_REQUIRED_MSG)
    qkind = out.get("kind")

    if qkind == "multiple-choice":
        options, options_err = _options(raw.get("options"))
        check("options", options, options_err)
        if answer_err is None and options is not None and answer not in options:
            answer_err = _ANSWER_NOT_OPTION_MSG
    elif qkind == "true-false" and answer_err is None:
        answer = _TRUE_FALSE.get(answer.lower())
        if answer is None:
            answer_err = _ANSWER_TRUE_FALSE_MSG

    check("correct_answer", answer, answer_err)

    if errors:
        return ValidationResult(ok=False, errors=errors)
    return ValidationResult(ok=True, question=_draft_adapter.validate_python(out))


def require_valid(candidate: Candidate, kind: Optional[str] = None):
    """Like validate(), but returns the draft or raises QuestionValidationError."""
    result = validate(candidate, kind=kind)
    if not result.ok:
        raise QuestionValidationError(result.errors)
    return result.question


__all__ = ["MIN_OPTIONS", "validate", "require_valid"]
