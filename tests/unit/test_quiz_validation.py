import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from app.schemas.quiz import QuizCreate, QuizQuestion
from app.services.quiz import validate_questions


def _question(text="Pick one", options=None):
    return QuizQuestion(
        q_content=text,
        options=options if options is not None else [
            {"text": "A", "correct": True},
            {"text": "B", "correct": False},
        ],
    )


def test_well_formed_questions_pass():
    validate_questions([_question(), _question("Another")])


def test_empty_question_list():
    with pytest.raises(HTTPException) as exc:
        validate_questions([])
    assert exc.value.status_code == 400
    assert exc.value.detail == "At least one question is required"


def test_blank_question_text_is_reported_with_its_position():
    with pytest.raises(HTTPException) as exc:
        validate_questions([_question(), _question("   ")])
    assert exc.value.detail == "Question 2: Content is required"


def test_question_without_options_is_rejected():
    with pytest.raises(HTTPException) as exc:
        validate_questions([_question(options=[])])
    assert exc.value.detail == "Question 1: At least one option is required"


def test_single_correct_option_is_enough():
    validate_questions([_question(options=[{"text": "True", "correct": True}])])


def test_question_without_correct_answer_is_rejected():
    options = [{"text": "A", "correct": False}, {"text": "B", "correct": False}]
    with pytest.raises(HTTPException) as exc:
        validate_questions([_question(options=options)])
    assert exc.value.detail == "Question 1: At least one correct option is required"


def test_blank_option_text_is_rejected():
    options = [{"text": "A", "correct": True}, {"text": " ", "correct": False}]
    with pytest.raises(HTTPException) as exc:
        validate_questions([_question(options=options)])
    assert exc.value.detail == "Question 1, Option 2: Text is required"


@pytest.mark.parametrize("duration", ["15:00", "100:00:00", "00:60:00", "abc"])
def test_duration_must_be_hh_mm_ss(duration):
    with pytest.raises(ValidationError):
        QuizCreate(title="Quiz", duration=duration, questions=[_question()])


def test_duration_accepts_hh_mm_ss():
    quiz = QuizCreate(title="Quiz", duration="01:30:00", questions=[_question()])
    assert quiz.duration == "01:30:00"
