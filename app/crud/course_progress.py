from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from app.crud.base import CRUDBase
from app.models.course_progress import CourseProgress
from app.schemas.progress import CourseProgressUpsert


class CRUDCourseProgress(CRUDBase[CourseProgress, CourseProgressUpsert, CourseProgressUpsert]):

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> Optional[CourseProgress]:
        return (
            db.query(CourseProgress)
            .options(selectinload(CourseProgress.completed_contents))
            .filter(CourseProgress.user_id == user_id, CourseProgress.course_id == course_id)
            .first()
        )

    def get_by_user_and_courses(self, db: Session, *, user_id: int, course_ids: List[int]) -> List[CourseProgress]:
        if not course_ids:
            return []
        return (
            db.query(CourseProgress)
            .options(selectinload(CourseProgress.completed_contents))
            .filter(CourseProgress.user_id == user_id, CourseProgress.course_id.in_(course_ids))
            .all()
        )

    def get_feedback_for_course(self, db: Session, *, course_id: int) -> List[CourseProgress]:
        return (
            db.query(CourseProgress)
            .filter(
                CourseProgress.course_id == course_id,
                or_(CourseProgress.user_rating > 0, CourseProgress.feedback != "")
            )
            .order_by(CourseProgress.updated_at.desc())
            .all()
        )

    def get_positive_ratings(self, db: Session, *, course_ids: List[int]) -> List[float]:
        if not course_ids:
            return []
        rows = (
            db.query(CourseProgress.user_rating)
            .filter(CourseProgress.course_id.in_(course_ids), CourseProgress.user_rating > 0)
            .all()
        )
        return [row[0] for row in rows]


course_progress = CRUDCourseProgress(CourseProgress)
