import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.course import course as crud_course
from app.crud.course_enrollment import course_enrollment as crud_enrollment
from app.crud.course_progress import course_progress as crud_progress
from app.schemas.course import Course as CourseSchema, EnrolledCourse
from app.schemas.course_enrollment import CourseEnrollmentCreate
from app.schemas.user import CurrentUser
from app.services.course import course_service

logger = logging.getLogger(__name__)


class EnrollmentService:

    def enroll(self, db: Session, *, course_id: int, current_user: CurrentUser) -> CourseSchema:
        course = course_service.get_course(db, course_id=course_id)

        if crud_enrollment.get_by_user_and_course(db, user_id=current_user.id, course_id=course.id):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course")

        try:
            crud_enrollment.create(
                db, obj_in=CourseEnrollmentCreate(user_id=current_user.id, course_id=course.id)
            )
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Already enrolled in this course")

        logger.info(f"Student {current_user.id} enrolled in course {course.id}")
        db.refresh(course)
        return CourseSchema.model_validate(course)

    def get_enrolled_courses(self, db: Session, *, current_user: CurrentUser) -> List[EnrolledCourse]:
        course_ids = crud_enrollment.get_course_ids_for_user(db, user_id=current_user.id)
        courses = crud_course.get_by_ids(db, ids=course_ids)
        progress_by_course = {
            p.course_id: p for p in crud_progress.get_by_user_and_courses(db, user_id=current_user.id, course_ids=course_ids)
        }

        enrolled = []
        for course in courses:
            record = progress_by_course.get(course.id)
            enrolled.append(EnrolledCourse(
                **CourseSchema.model_validate(course).model_dump(),
                progress=record.progress if record else 0,
                completed_contents=record.completed_content_ids if record else [],
            ))
        return enrolled


enrollment_service = EnrollmentService()
