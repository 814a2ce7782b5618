from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.analytics import InstructorAnalytics
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.analytics import analytics_service
from app.utils import deps

router = APIRouter()


@router.get("/instructor", response_model=APIResponse[InstructorAnalytics])
def get_instructor_analytics(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    stats = analytics_service.get_instructor_analytics(db, current_user=current_user)
    return APIResponse(message="Instructor analytics retrieved successfully", data=stats)
