from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.schemas.course import Course, EnrolledCourse
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.services.enrollment import enrollment_service
from app.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[List[Course]])
def get_catalogue(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    courses = course_service.get_catalogue(db, skip=skip, limit=limit)
    return APIResponse(message="Courses retrieved successfully", data=courses)


@router.post("/enroll/{course_id}", response_model=APIResponse[Course])
def enroll_in_course(
    course_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_student)
):
    course = enrollment_service.enroll(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="Enrolled successfully", data=course)


@router.get("/enrolled", response_model=APIResponse[List[EnrolledCourse]])
def get_enrolled_courses(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.require_student)
):
    courses = enrollment_service.get_enrolled_courses(db, current_user=current_user)
    return APIResponse(message="Enrolled courses retrieved successfully", data=courses)
