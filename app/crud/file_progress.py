from typing import List, Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.file_progress import FileProgress
from app.schemas.progress import ToggleFileComplete


class CRUDFileProgress(CRUDBase[FileProgress, ToggleFileComplete, ToggleFileComplete]):

    def get_for_user(self, db: Session, *, user_id: int, file_id: int, course_id: int) -> Optional[FileProgress]:
        return db.query(FileProgress).filter(
            FileProgress.user_id == user_id,
            FileProgress.file_id == file_id,
            FileProgress.course_id == course_id
        ).first()

    def get_by_user_and_course(self, db: Session, *, user_id: int, course_id: int) -> List[FileProgress]:
        return (
            db.query(FileProgress)
            .filter(FileProgress.user_id == user_id, FileProgress.course_id == course_id)
            .order_by(FileProgress.file_id)
            .all()
        )


file_progress = CRUDFileProgress(FileProgress)
