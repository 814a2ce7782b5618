from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.progress import CourseFeedback, CourseProgress, CourseProgressUpsert, ToggleContentComplete
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.course_progress import course_progress_service
from app.utils import deps

router = APIRouter()


@router.get("/course/{course_id}", response_model=APIResponse[List[CourseFeedback]])
def get_course_feedback(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    feedback = course_progress_service.get_feedback(db, course_id=course_id)
    return APIResponse(message="Course feedback retrieved successfully", data=[CourseFeedback.model_validate(f) for f in feedback])


@router.post("/toggle-content-complete", response_model=APIResponse[CourseProgress])
def toggle_content_complete(
    *,
    toggle_in: ToggleContentComplete,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    progress = course_progress_service.toggle_content_complete(db, toggle_in=toggle_in, current_user=current_user)
    return APIResponse(message="Content completion toggled", data=CourseProgress.model_validate(progress))


@router.get("/{user_id}/{course_id}", response_model=APIResponse[CourseProgress])
def get_course_progress(
    user_id: int,
    course_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    progress = course_progress_service.get_progress(db, user_id=user_id, course_id=course_id, current_user=current_user)
    return APIResponse(message="Course progress retrieved successfully", data=CourseProgress.model_validate(progress))


@router.post("", response_model=APIResponse[CourseProgress])
def upsert_course_progress(
    *,
    progress_in: CourseProgressUpsert,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    progress = course_progress_service.upsert_progress(db, progress_in=progress_in, current_user=current_user)
    return APIResponse(message="Course progress saved", data=CourseProgress.model_validate(progress))
