import logging
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.course_file import course_file as crud_course_file
from app.crud.course_progress import course_progress as crud_progress
from app.models.course_progress import CourseProgress
from app.schemas.progress import CourseProgressUpsert, ToggleContentComplete
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.utils.permission import PermissionHelper as permission_helper

logger = logging.getLogger(__name__)


def calculate_progress(completed_count: int, total_count: int) -> float:
    """Percentage of a course's content items marked complete; 0 for a course with no content."""
    if total_count <= 0:
        return 0.0
    return completed_count / total_count * 100


class CourseProgressService:

    def _get_or_create(self, db: Session, *, user_id: int, course_id: int) -> CourseProgress:
        record = crud_progress.get_by_user_and_course(db, user_id=user_id, course_id=course_id)
        if record:
            return record
        try:
            return crud_progress.create(db, obj_in={
                "user_id": user_id,
                "course_id": course_id,
                "progress": 0,
                "user_rating": 0,
                "feedback": "",
            })
        except IntegrityError:
            # Created by a concurrent request between the read and the insert
            db.rollback()
            return crud_progress.get_by_user_and_course(db, user_id=user_id, course_id=course_id)

    def get_progress(self, db: Session, *, user_id: int, course_id: int, current_user: CurrentUser) -> CourseProgress:
        permission_helper.require_self(current_user, user_id)
        course_service.get_course(db, course_id=course_id)
        return self._get_or_create(db, user_id=user_id, course_id=course_id)

    def get_feedback(self, db: Session, *, course_id: int) -> List[CourseProgress]:
        course_service.get_course(db, course_id=course_id)
        return crud_progress.get_feedback_for_course(db, course_id=course_id)

    def upsert_progress(self, db: Session, *, progress_in: CourseProgressUpsert, current_user: CurrentUser) -> CourseProgress:
        permission_helper.require_self(current_user, progress_in.user_id)
        course = course_service.get_course(db, course_id=progress_in.course_id)

        if progress_in.progress is not None and not 0 <= progress_in.progress <= 100:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Progress must be between 0 and 100")
        if progress_in.user_rating is not None and not 0 <= progress_in.user_rating <= 5:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Rating must be between 0 and 5")
        if progress_in.user_rating is not None or progress_in.feedback is not None:
            # Only enrolled students may review a course
            permission_helper.require_enrollment(current_user, course.id)

        completed = None
        if progress_in.completed_contents is not None:
            content_ids = set(progress_in.completed_contents)
            invalid = sorted(i for i in content_ids if i <= 0)
            if invalid:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid content id: {invalid[0]}")
            completed = crud_course_file.get_ids_in_course(db, course_id=course.id, ids=list(content_ids))
            unknown = sorted(content_ids - {f.id for f in completed})
            if unknown:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid content id: {unknown[0]}")

        record = self._get_or_create(db, user_id=current_user.id, course_id=course.id)
        if progress_in.progress is not None:
            record.progress = progress_in.progress
        if progress_in.user_rating is not None:
            record.user_rating = progress_in.user_rating
        if progress_in.feedback is not None:
            record.feedback = progress_in.feedback
        if completed is not None:
            record.completed_contents = completed

        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    def toggle_content_complete(
        self, db: Session, *, toggle_in: ToggleContentComplete, current_user: CurrentUser
    ) -> CourseProgress:
        permission_helper.require_self(current_user, toggle_in.user_id)
        course = course_service.get_course(db, course_id=toggle_in.course_id)

        content = crud_course_file.get_in_course(db, id=toggle_in.content_id, course_id=course.id)
        if not content:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content not found in this course")

        record = self._get_or_create(db, user_id=current_user.id, course_id=course.id)
        if content in record.completed_contents:
            record.completed_contents.remove(content)
        else:
            record.completed_contents.append(content)

        total = crud_course_file.count_by_course(db, course_id=course.id)
        record.progress = calculate_progress(len(record.completed_contents), total)

        db.add(record)
        db.commit()
        db.refresh(record)
        logger.info(f"User {current_user.id} progress in course {course.id}: {record.progress:.1f}%")
        return record


course_progress_service = CourseProgressService()
