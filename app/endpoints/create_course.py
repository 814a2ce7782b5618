from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.constants import IMAGE_EXTENSIONS
from app.schemas.course import Course, CourseCreate, CourseUpdate
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.services.storage import StorageService
from app.utils import deps
from app.utils.uploads import read_optional_upload

router = APIRouter()


@router.post("", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
async def create_course(
    title: str = Form(..., min_length=1),
    price: float = Form(0, ge=0),
    duration_weeks: int = Form(1, ge=1),
    description: str = Form(""),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    course_in = CourseCreate(title=title, price=price, duration_weeks=duration_weeks, description=description)
    upload = await read_optional_upload(image, allowed_extensions=IMAGE_EXTENSIONS, max_bytes=storage.max_image_bytes)
    new_course = course_service.create_course(
        db, storage=storage, course_in=course_in, image=upload, current_user=current_user
    )
    return APIResponse(message="Course created successfully", data=Course.model_validate(new_course))


@router.get("", response_model=APIResponse[List[Course]])
def get_all_courses(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    courses = course_service.get_all_courses(db, skip=skip, limit=limit)
    return APIResponse(message="Courses retrieved successfully", data=[Course.model_validate(c) for c in courses])


@router.get("/{course_id}", response_model=APIResponse[Course])
def read_course(
    course_id: int,
    db: Session = Depends(deps.get_db)
):
    course = course_service.get_course(db, course_id=course_id)
    return APIResponse(message="Course retrieved successfully", data=Course.model_validate(course))


@router.put("/{course_id}", response_model=APIResponse[Course])
async def update_course(
    course_id: int,
    title: Optional[str] = Form(None, min_length=1),
    price: Optional[float] = Form(None, ge=0),
    duration_weeks: Optional[int] = Form(None, ge=1),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    course_in = CourseUpdate(title=title, price=price, duration_weeks=duration_weeks, description=description)
    upload = await read_optional_upload(image, allowed_extensions=IMAGE_EXTENSIONS, max_bytes=storage.max_image_bytes)
    updated_course = course_service.update_course(
        db, storage=storage, course_id=course_id, course_in=course_in, image=upload, current_user=current_user
    )
    return APIResponse(message="Course updated successfully", data=Course.model_validate(updated_course))


@router.delete("/{course_id}", response_model=APIResponse[Course])
def delete_course(
    course_id: int,
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    deleted_course = course_service.delete_course(db, storage=storage, course_id=course_id, current_user=current_user)
    return APIResponse(message="Course deleted successfully", data=deleted_course)
