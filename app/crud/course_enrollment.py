from typing import List, Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.course_enrollment import CourseEnrollment
from app.schemas.course_enrollment import CourseEnrollmentCreate


class CRUDCourseEnrollment(CRUDBase[CourseEnrollment, CourseEnrollmentCreate, CourseEnrollmentCreate]):

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[CourseEnrollment]:
        return db.query(CourseEnrollment).filter(
            CourseEnrollment.user_id == user_id,
            CourseEnrollment.course_id == course_id
        ).first()

    def get_course_ids_for_user(self, db: Session, *, user_id: int) -> List[int]:
        rows = db.query(CourseEnrollment.course_id).filter(CourseEnrollment.user_id == user_id).all()
        return [row[0] for row in rows]


course_enrollment = CRUDCourseEnrollment(CourseEnrollment)
