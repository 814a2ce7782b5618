from typing import Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.quiz_submission import QuizSubmission
from app.schemas.quiz_submission import QuizSubmissionCreate


class CRUDQuizSubmission(CRUDBase[QuizSubmission, QuizSubmissionCreate, QuizSubmissionCreate]):

    def get_by_quiz_and_user(self, db: Session, *, quiz_id: int, user_id: int) -> Optional[QuizSubmission]:
        return db.query(QuizSubmission).filter(
            QuizSubmission.quiz_id == quiz_id,
            QuizSubmission.user_id == user_id
        ).first()


quiz_submission = CRUDQuizSubmission(QuizSubmission)
