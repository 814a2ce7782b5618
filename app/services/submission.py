import logging
from datetime import datetime, timezone
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.quiz_submission import quiz_submission as crud_submission
from app.models.quiz_submission import QuizSubmission
from app.schemas.quiz_submission import QuizSubmissionCreate
from app.schemas.user import CurrentUser
from app.services.quiz import quiz_service
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


class SubmissionService:

    def get_own_submission(self, db: Session, *, quiz_id: int, current_user: CurrentUser) -> QuizSubmission:
        submission = crud_submission.get_by_quiz_and_user(db, quiz_id=quiz_id, user_id=current_user.id)
        if not submission:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No submission found for this quiz")
        return submission

    def submit(
        self, db: Session, *, quiz_id: int, submission_in: QuizSubmissionCreate, current_user: CurrentUser
    ) -> QuizSubmission:
        quiz = quiz_service.get_quiz(db, quiz_id=quiz_id)

        if submission_in.user_id is not None and submission_in.user_id != current_user.id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized user")
        if quiz.course_id != submission_in.course_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid course ID")
        permission_helper.require_enrollment(current_user, quiz.course_id)

        if crud_submission.get_by_quiz_and_user(db, quiz_id=quiz.id, user_id=current_user.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Quiz already submitted")

        submission_data = submission_in.model_dump(exclude={"user_id"})
        submission_data.update(
            quiz_id=quiz.id,
            user_id=current_user.id,
            submitted_on=submission_in.submitted_on or datetime.now(timezone.utc),
        )
        try:
            submission = crud_submission.create(db, obj_in=submission_data)
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Quiz already submitted")

        logger.info(f"User {current_user.id} submitted quiz {quiz.id} ({submission.score}/{submission.total_questions})")
        return submission

    def delete_own_submission(self, db: Session, *, quiz_id: int, current_user: CurrentUser) -> None:
        submission = self.get_own_submission(db, quiz_id=quiz_id, current_user=current_user)
        crud_submission.delete(db, id=submission.id)
        logger.info(f"User {current_user.id} cleared submission for quiz {quiz_id}")


submission_service = SubmissionService()
