from __future__ import annotations

from typing import List

from schemas.questions import FieldViolation


class QuestionValidationError(Exception):
    """A candidate broke one or more field rules. Carries every violation."""

    def __init__(self, violations: List[FieldViolation]):
        self.violations = list(violations)
        fields = ", ".join(v.field for v in self.violations)
        super().__init__(f"invalid question ({fields})")

    def as_dicts(self) -> List[dict]:
        return [v.model_dump() for v in self.violations]


class NotFoundError(KeyError):
    def __init__(self, qid: str):
        self.qid = qid
        super().__init__(qid)

    def __str__(self) -> str:
        return f"question not found: {self.qid}"
