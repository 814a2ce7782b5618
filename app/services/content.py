import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import ContentTypeEnum, StorageFolderEnum
from app.crud.course_file import course_file as crud_course_file
from app.models.course_file import CourseFile
from app.schemas.course_file import CourseFile as CourseFileSchema
from app.schemas.response import DownloadLink
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.services.storage import StorageService
from app.utils.permission import PermissionHelper as permission_helper
from app.utils.uploads import IncomingFile

logger = logging.getLogger(__name__)


class ContentService:

    def upload_content(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_id: int,
        upload: IncomingFile,
        content_type: ContentTypeEnum,
        current_user: CurrentUser
    ) -> CourseFile:
        course = course_service.get_owned_course(db, course_id=course_id, current_user=current_user)

        stored = storage.upload(upload.content, folder=StorageFolderEnum.COURSE_FILES.value)
        course_file = crud_course_file.create(db, obj_in={
            "course_id": course.id,
            "file_name": upload.filename,
            "file_url": stored.url,
            "public_id": stored.public_id,
            "resource_type": stored.resource_type,
            "content_type": content_type,
            "uploaded_by": current_user.id,
        })
        logger.info(f"Instructor {current_user.id} uploaded '{upload.filename}' to course {course.id}")
        return course_file

    def list_content(self, db: Session, *, course_id: int, current_user: CurrentUser) -> List[CourseFile]:
        course = course_service.get_course(db, course_id=course_id)
        permission_helper.require_course_access(current_user, course)
        return crud_course_file.get_by_course(db, course_id=course.id)

    def get_content(self, db: Session, *, course_id: int, content_id: int) -> CourseFile:
        course_file = crud_course_file.get_in_course(db, id=content_id, course_id=course_id)
        if not course_file:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found")
        return course_file

    def delete_content(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_id: int,
        content_id: int,
        current_user: CurrentUser
    ) -> CourseFileSchema:
        course_service.get_owned_course(db, course_id=course_id, current_user=current_user)
        course_file = self.get_content(db, course_id=course_id, content_id=content_id)
        deleted = CourseFileSchema.model_validate(course_file)

        public_id, resource_type = course_file.public_id, course_file.resource_type
        crud_course_file.delete(db, id=course_file.id)
        if public_id:
            storage.destroy(public_id, resource_type=resource_type)
        return deleted

    def get_download_link(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_id: int,
        file_id: int,
        current_user: CurrentUser
    ) -> DownloadLink:
        course = course_service.get_course(db, course_id=course_id)
        permission_helper.require_course_access(current_user, course)
        course_file = self.get_content(db, course_id=course.id, content_id=file_id)

        if not course_file.public_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found in storage")

        url = storage.signed_download_url(
            course_file.public_id, course_file.file_format, resource_type=course_file.resource_type
        )
        return DownloadLink(url=url, file_name=course_file.file_name, expires_in=storage.signed_url_ttl)


content_service = ContentService()
