from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.progress import FileProgress, ToggleFileComplete
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.file_progress import file_progress_service
from app.utils import deps

router = APIRouter()


@router.post("/toggle", response_model=APIResponse[FileProgress])
def toggle_file_complete(
    *,
    toggle_in: ToggleFileComplete,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    record = file_progress_service.toggle(db, toggle_in=toggle_in, current_user=current_user)
    return APIResponse(message="File completion toggled", data=FileProgress.model_validate(record))


@router.get("/{course_id}", response_model=APIResponse[List[FileProgress]])
def get_file_progress(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    records = file_progress_service.get_for_course(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="File progress retrieved successfully", data=[FileProgress.model_validate(r) for r in records])
