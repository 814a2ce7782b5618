from typing import List
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.constants import CONTENT_EXTENSIONS, ContentTypeEnum
from app.schemas.course_file import CourseFile
from app.schemas.response import APIResponse, DownloadLink
from app.schemas.user import CurrentUser
from app.services.content import content_service
from app.services.storage import StorageService
from app.utils import deps
from app.utils.uploads import read_upload

router = APIRouter()


@router.post("/{course_id}", response_model=APIResponse[CourseFile], status_code=status.HTTP_201_CREATED)
async def upload_course_content(
    course_id: int,
    file: UploadFile = File(...),
    content_type: ContentTypeEnum = Form(ContentTypeEnum.FILE),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    upload = await read_upload(file, allowed_extensions=CONTENT_EXTENSIONS, max_bytes=storage.max_content_bytes)
    course_file = content_service.upload_content(
        db, storage=storage, course_id=course_id, upload=upload, content_type=content_type, current_user=current_user
    )
    return APIResponse(message="File uploaded successfully", data=CourseFile.model_validate(course_file))


@router.get("/{course_id}", response_model=APIResponse[List[CourseFile]])
def list_course_content(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    files = content_service.list_content(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="Course content retrieved successfully", data=[CourseFile.model_validate(f) for f in files])


@router.get("/{course_id}/download/{file_id}", response_model=APIResponse[DownloadLink])
def download_course_content(
    course_id: int,
    file_id: int,
    db: Session = Depends(deps.get_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    link = content_service.get_download_link(
        db, storage=storage, course_id=course_id, file_id=file_id, current_user=current_user
    )
    return APIResponse(message="Download link generated", data=link)


@router.delete("/{course_id}/{content_id}", response_model=APIResponse[CourseFile])
def delete_course_content(
    course_id: int,
    content_id: int,
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    deleted = content_service.delete_content(
        db, storage=storage, course_id=course_id, content_id=content_id, current_user=current_user
    )
    return APIResponse(message="Content deleted successfully", data=deleted)
