from datetime import datetime, timezone
from typing import List
from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.crud.course_file import course_file as crud_course_file
from app.crud.file_progress import file_progress as crud_file_progress
from app.models.file_progress import FileProgress
from app.schemas.progress import ToggleFileComplete
from app.schemas.user import CurrentUser
from app.utils.permission import PermissionHelper as permission_helper


class FileProgressService:
    """Per-file completion flags. Independent of the course percentage."""

    def toggle(self, db: Session, *, toggle_in: ToggleFileComplete, current_user: CurrentUser) -> FileProgress:
        course_file = crud_course_file.get_in_course(db, id=toggle_in.file_id, course_id=toggle_in.course_id)
        if not course_file:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
        permission_helper.require_enrollment(current_user, toggle_in.course_id)

        record = crud_file_progress.get_for_user(
            db, user_id=current_user.id, file_id=course_file.id, course_id=toggle_in.course_id
        )
        if not record:
            try:
                record = crud_file_progress.create(db, obj_in={
                    "user_id": current_user.id,
                    "file_id": course_file.id,
                    "course_id": toggle_in.course_id,
                    "is_completed": False,
                }, commit=False)
            except IntegrityError:
                db.rollback()
                record = crud_file_progress.get_for_user(
                    db, user_id=current_user.id, file_id=course_file.id, course_id=toggle_in.course_id
                )

        record.is_completed = not record.is_completed
        record.completed_at = datetime.now(timezone.utc) if record.is_completed else None
        db.add(record)
        db.commit()
        db.refresh(record)
        return record

    def get_for_course(self, db: Session, *, course_id: int, current_user: CurrentUser) -> List[FileProgress]:
        permission_helper.require_enrollment(current_user, course_id)
        return crud_file_progress.get_by_user_and_course(db, user_id=current_user.id, course_id=course_id)


file_progress_service = FileProgressService()
