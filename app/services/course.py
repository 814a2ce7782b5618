import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import StorageFolderEnum
from app.crud.course import course as crud_course
from app.crud.user import user as crud_user
from app.models.course import Course as CourseModel
from app.schemas.course import CourseCreate, CourseUpdate, Course as CourseSchema
from app.schemas.user import CurrentUser
from app.services.storage import StorageService
from app.utils.permission import PermissionHelper as permission_helper
from app.utils.uploads import IncomingFile

logger = logging.getLogger(__name__)


class CourseService:

    def get_course(self, db: Session, *, course_id: int) -> CourseModel:
        course = crud_course.get(db, id=course_id)
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return course

    def get_owned_course(self, db: Session, *, course_id: int, current_user: CurrentUser) -> CourseModel:
        course = self.get_course(db, course_id=course_id)
        permission_helper.require_course_owner(current_user, course)
        return course

    def get_all_courses(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[CourseModel]:
        return crud_course.get_multi(db, skip=skip, limit=limit)

    def get_catalogue(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[CourseSchema]:
        """Courses with the instructor's current display name, not the one captured at creation."""
        catalogue = []
        for course in crud_course.get_multi(db, skip=skip, limit=limit):
            item = CourseSchema.model_validate(course)
            instructor = crud_user.get(db, id=course.instructor_id)
            if instructor:
                item.instructor_name = instructor.name
                item.instructor_email = instructor.email
            catalogue.append(item)
        return catalogue

    def create_course(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_in: CourseCreate,
        image: Optional[IncomingFile],
        current_user: CurrentUser
    ) -> CourseModel:
        course_data = course_in.model_dump()
        course_data.update(
            instructor_id=current_user.id,
            instructor_name=current_user.name,
            instructor_email=current_user.email,
        )
        if image:
            stored = storage.upload_image(image.content, folder=StorageFolderEnum.COURSE_IMAGES.value)
            course_data.update(image_url=stored.url, image_public_id=stored.public_id)

        new_course = crud_course.create(db, obj_in=course_data)
        logger.info(f"Instructor {current_user.id} created course {new_course.id}")
        return new_course

    def update_course(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_id: int,
        course_in: CourseUpdate,
        image: Optional[IncomingFile],
        current_user: CurrentUser
    ) -> CourseModel:
        course = self.get_owned_course(db, course_id=course_id, current_user=current_user)

        update_data = course_in.model_dump(exclude_unset=True, exclude_none=True)
        previous_image = None
        if image:
            stored = storage.upload_image(image.content, folder=StorageFolderEnum.COURSE_IMAGES.value)
            previous_image = course.image_public_id
            update_data.update(image_url=stored.url, image_public_id=stored.public_id)

        updated = crud_course.update(db, db_obj=course, obj_in=update_data)
        # Old image goes only once the row points at the new one
        if previous_image:
            storage.destroy(previous_image)
        return updated

    def delete_course(
        self, db: Session, *, storage: StorageService, course_id: int, current_user: CurrentUser
    ) -> CourseModel:
        course = self.get_owned_course(db, course_id=course_id, current_user=current_user)
        deleted = CourseSchema.model_validate(course)

        image_public_id = course.image_public_id
        crud_course.delete(db, id=course.id)
        if image_public_id:
            storage.destroy(image_public_id)
        logger.info(f"Instructor {current_user.id} deleted course {course_id}")
        return deleted


course_service = CourseService()
