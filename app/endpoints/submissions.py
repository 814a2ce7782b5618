from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.schemas.quiz_submission import QuizSubmission, QuizSubmissionCreate
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.submission import submission_service
from app.utils import deps

router = APIRouter()


@router.get("/{quiz_id}", response_model=APIResponse[QuizSubmission])
def read_own_submission(
    quiz_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    submission = submission_service.get_own_submission(db, quiz_id=quiz_id, current_user=current_user)
    return APIResponse(message="Submission retrieved successfully", data=QuizSubmission.model_validate(submission))


@router.post("/{quiz_id}", response_model=APIResponse[QuizSubmission], status_code=status.HTTP_201_CREATED)
def submit_quiz(
    *,
    quiz_id: int,
    submission_in: QuizSubmissionCreate,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_student)
):
    submission = submission_service.submit(db, quiz_id=quiz_id, submission_in=submission_in, current_user=current_user)
    return APIResponse(message="Quiz submitted successfully", data=QuizSubmission.model_validate(submission))


@router.delete("/{quiz_id}", response_model=APIResponse[None])
def delete_own_submission(
    quiz_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    submission_service.delete_own_submission(db, quiz_id=quiz_id, current_user=current_user)
    return APIResponse(message="Submission deleted successfully")
