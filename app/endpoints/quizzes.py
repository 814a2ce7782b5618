from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.schemas.quiz import Quiz, QuizCreate, QuizUpdate
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.quiz import quiz_service
from app.utils import deps

router = APIRouter()


@router.post("/{course_id}", response_model=APIResponse[Quiz], status_code=status.HTTP_201_CREATED)
def create_quiz(
    *,
    course_id: int,
    quiz_in: QuizCreate,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    quiz = quiz_service.create_quiz(db, course_id=course_id, quiz_in=quiz_in, current_user=current_user)
    return APIResponse(message="Quiz created successfully", data=Quiz.model_validate(quiz))


@router.get("/single/{quiz_id}", response_model=APIResponse[Quiz])
def read_quiz(
    quiz_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    quiz = quiz_service.get_single_quiz(db, quiz_id=quiz_id, current_user=current_user)
    return APIResponse(message="Quiz retrieved successfully", data=Quiz.model_validate(quiz))


@router.get("/{course_id}", response_model=APIResponse[List[Quiz]])
def list_course_quizzes(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    quizzes = quiz_service.get_course_quizzes(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="Quizzes retrieved successfully", data=[Quiz.model_validate(q) for q in quizzes])


@router.put("/{quiz_id}", response_model=APIResponse[Quiz])
def update_quiz(
    *,
    quiz_id: int,
    quiz_in: QuizUpdate,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    quiz = quiz_service.update_quiz(db, quiz_id=quiz_id, quiz_in=quiz_in, current_user=current_user)
    return APIResponse(message="Quiz updated successfully", data=Quiz.model_validate(quiz))


@router.delete("/{quiz_id}", response_model=APIResponse[Quiz])
def delete_quiz(
    quiz_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    deleted = quiz_service.delete_quiz(db, quiz_id=quiz_id, current_user=current_user)
    return APIResponse(message="Quiz deleted successfully", data=deleted)
