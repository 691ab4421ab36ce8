import pytest

from errors import QuestionValidationError
from schemas.questions import MultipleChoiceDraft, QuestionCandidate, ShortAnswerDraft
from validator import require_valid, validate


def mc(**over):
    base = {
        "kind": "multiple-choice",
        "prompt": "2+2?",
        "options": ["3", "4", "5"],
        "correct_answer": "4",
        "difficulty": "easy",
        "category": "Math",
    }
    base.update(over)
    return base


def fields(result):
    return [e.field for e in result.errors]


def test_valid_multiple_choice():
    r = validate(mc())
    assert r.ok and r.errors == []
    assert isinstance(r.question, MultipleChoiceDraft)
    assert r.question.options == ("3", "4", "5")


def test_valid_true_false_normalizes_answer():
    r = validate(
        {
            "kind": "true-false",
            "prompt": "Water is wet.",
            "correct_answer": " true ",
            "difficulty": "medium",
            "category": "Science",
        }
    )
    assert r.ok
    assert r.question.correct_answer == "True"
    assert not hasattr(r.question, "options")


def test_valid_short_answer_trims_and_ignores_options():
    r = validate(
        {
            "kind": "short-answer",
            "prompt": "  Capital of Italy?  ",
            "options": ["x"],
            "correct_answer": " Rome ",
            "difficulty": "hard",
            "category": " Geography ",
        }
    )
    assert r.ok
    q = r.question
    assert isinstance(q, ShortAnswerDraft)
    assert (q.prompt, q.correct_answer, q.category) == ("Capital of Italy?", "Rome", "Geography")


@pytest.mark.parametrize("field", ["prompt", "correct_answer", "category"])
def test_missing_required_text_is_named(field):
    r = validate(mc(**{field: None}))
    assert not r.ok
    assert field in fields(r)


@pytest.mark.parametrize("field", ["prompt", "correct_answer", "category"])
def test_blank_text_is_rejected(field):
    r = validate(mc(**{field: "   "}))
    assert field in fields(r)


def test_non_text_value_is_rejected():
    r = validate(mc(prompt=42))
    assert fields(r) == ["prompt"]


def test_options_dropped_empties_below_minimum():
    r = validate(mc(options=["4", "", "  "]))
    assert not r.ok
    assert "options" in fields(r)


def test_options_empties_dropped_when_enough_remain():
    r = validate(mc(options=["3", "", "4", "  "]))
    assert r.ok
    assert r.question.options == ("3", "4")


def test_options_missing_for_multiple_choice():
    r = validate(mc(options=None))
    assert "options" in fields(r)


def test_options_wrong_type():
    r = validate(mc(options="3,4"))
    assert "options" in fields(r)


def test_answer_must_be_an_option():
    r = validate(mc(correct_answer="7"))
    assert fields(r) == ["correct_answer"]


def test_true_false_answer_must_be_boolean_word():
    r = validate(
        {
            "kind": "true-false",
            "prompt": "Sky is blue.",
            "correct_answer": "maybe",
            "difficulty": "easy",
            "category": "Science",
        }
    )
    assert fields(r) == ["correct_answer"]


@pytest.mark.parametrize("kind", ["essay", "Multiple-Choice", " true-false", None])
def test_unknown_kind_rejected(kind):
    r = validate(mc(kind=kind))
    assert "kind" in fields(r)


@pytest.mark.parametrize("difficulty", ["EASY", "extreme", " easy", 1])
def test_unknown_difficulty_rejected(difficulty):
    r = validate(mc(difficulty=difficulty))
    assert fields(r) == ["difficulty"]


def test_all_violations_reported_together():
    r = validate({"kind": "multiple-choice", "options": ["only"]})
    assert set(fields(r)) == {"prompt", "difficulty", "category", "options", "correct_answer"}
    assert all(e.message for e in r.errors)


def test_kind_override():
    r = validate(mc(kind="nope"), kind="short-answer")
    assert r.ok
    assert r.question.kind == "short-answer"


def test_accepts_candidate_model():
    r = validate(QuestionCandidate(**mc()))
    assert r.ok


def test_deterministic():
    c = mc(options=["a", "", "b"], correct_answer="c")
    assert validate(c) == validate(c)


def test_require_valid_raises_with_all_violations():
    with pytest.raises(QuestionValidationError) as exc:
        require_valid({"kind": "short-answer"})
    assert {v.field for v in exc.value.violations} == {
        "prompt",
        "difficulty",
        "category",
        "correct_answer",
    }
