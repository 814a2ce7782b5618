import logging
from typing import List, Sequence
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.crud.quiz import quiz as crud_quiz
from app.models.quiz import Quiz
from app.schemas.quiz import QuizCreate, QuizQuestion, QuizUpdate, Quiz as QuizSchema
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def validate_questions(questions: Sequence[QuizQuestion]) -> None:
    """Reject a question list that cannot be answered, naming the first offending 1-based position."""
    if not questions:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="At least one question is required")

    for i, question in enumerate(questions, start=1):
        if not question.q_content or not question.q_content.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Question {i}: Content is required")
        if not question.options:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=f"Question {i}: At least one option is required"
            )
        if not any(option.correct for option in question.options):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=f"Question {i}: At least one correct option is required"
            )
        for j, option in enumerate(question.options, start=1):
            if not option.text or not option.text.strip():
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST, detail=f"Question {i}, Option {j}: Text is required"
                )


class QuizService:

    def get_quiz(self, db: Session, *, quiz_id: int) -> Quiz:
        quiz = crud_quiz.get(db, id=quiz_id)
        if not quiz:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Quiz not found")
        return quiz

    def _get_authored_quiz(self, db: Session, *, quiz_id: int, current_user: CurrentUser) -> Quiz:
        quiz = self.get_quiz(db, quiz_id=quiz_id)
        if quiz.instructor_id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Unauthorized: You are not the instructor of this quiz"
            )
        return quiz

    def create_quiz(self, db: Session, *, course_id: int, quiz_in: QuizCreate, current_user: CurrentUser) -> Quiz:
        course = course_service.get_owned_course(db, course_id=course_id, current_user=current_user)
        validate_questions(quiz_in.questions)

        quiz_data = quiz_in.model_dump()
        quiz_data.update(course_id=course.id, instructor_id=current_user.id)
        new_quiz = crud_quiz.create(db, obj_in=quiz_data)
        logger.info(f"Instructor {current_user.id} created quiz {new_quiz.id} in course {course.id}")
        return new_quiz

    def get_course_quizzes(self, db: Session, *, course_id: int, current_user: CurrentUser) -> List[Quiz]:
        course = course_service.get_course(db, course_id=course_id)
        permission_helper.require_course_access(current_user, course)
        return crud_quiz.get_by_course(db, course_id=course.id)

    def get_single_quiz(self, db: Session, *, quiz_id: int, current_user: CurrentUser) -> Quiz:
        quiz = self.get_quiz(db, quiz_id=quiz_id)
        course = course_service.get_course(db, course_id=quiz.course_id)
        permission_helper.require_course_access(current_user, course)
        return quiz

    def update_quiz(self, db: Session, *, quiz_id: int, quiz_in: QuizUpdate, current_user: CurrentUser) -> Quiz:
        quiz = self._get_authored_quiz(db, quiz_id=quiz_id, current_user=current_user)
        if quiz_in.questions is not None:
            validate_questions(quiz_in.questions)
        return crud_quiz.update(db, db_obj=quiz, obj_in=quiz_in.model_dump(exclude_unset=True, exclude_none=True))

    def delete_quiz(self, db: Session, *, quiz_id: int, current_user: CurrentUser) -> QuizSchema:
        quiz = self._get_authored_quiz(db, quiz_id=quiz_id, current_user=current_user)
        deleted = QuizSchema.model_validate(quiz)
        crud_quiz.delete(db, id=quiz.id)
        return deleted


quiz_service = QuizService()
