from typing import Dict, List
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from app.crud.base import CRUDBase
from app.models.course import Course
from app.models.course_enrollment import CourseEnrollment
from app.models.user import User
from app.core.constants import RoleEnum
from app.schemas.course import CourseCreate, CourseUpdate


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def _query_with_relationships(self, db: Session):
        return db.query(Course).options(selectinload(Course.enrollments))

    def get(self, db: Session, id: int):
        return self._query_with_relationships(db).filter(Course.id == id).first()

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Course]:
        return (
            self._query_with_relationships(db)
            .order_by(Course.created_at.desc(), Course.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_ids(self, db: Session, *, ids: List[int]) -> List[Course]:
        if not ids:
            return []
        return self._query_with_relationships(db).filter(Course.id.in_(ids)).all()

    def get_by_instructor(self, db: Session, *, instructor_id: int) -> List[Course]:
        return (
            self._query_with_relationships(db)
            .filter(Course.instructor_id == instructor_id)
            .order_by(Course.id)
            .all()
        )

    def get_student_enrollment_counts(self, db: Session, *, course_ids: List[int]) -> Dict[int, int]:
        """Number of enrolled users with the student role, per course."""
        if not course_ids:
            return {}
        rows = (
            db.query(CourseEnrollment.course_id, func.count(CourseEnrollment.user_id))
            .join(User, User.id == CourseEnrollment.user_id)
            .filter(CourseEnrollment.course_id.in_(course_ids), User.role == RoleEnum.STUDENT)
            .group_by(CourseEnrollment.course_id)
            .all()
        )
        return {course_id: count for course_id, count in rows}

    def count_distinct_students(self, db: Session, *, course_ids: List[int]) -> int:
        if not course_ids:
            return 0
        return (
            db.query(func.count(func.distinct(CourseEnrollment.user_id)))
            .join(User, User.id == CourseEnrollment.user_id)
            .filter(CourseEnrollment.course_id.in_(course_ids), User.role == RoleEnum.STUDENT)
            .scalar()
        ) or 0


course = CRUDCourse(Course)
