from typing import List, Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.course_file import CourseFile
from app.schemas.course_file import CourseFile as CourseFileSchema


class CRUDCourseFile(CRUDBase[CourseFile, CourseFileSchema, CourseFileSchema]):

    def get_by_course(self, db: Session, *, course_id: int) -> List[CourseFile]:
        return db.query(CourseFile).filter(CourseFile.course_id == course_id).order_by(CourseFile.id).all()

    def get_in_course(self, db: Session, *, id: int, course_id: int) -> Optional[CourseFile]:
        return db.query(CourseFile).filter(CourseFile.id == id, CourseFile.course_id == course_id).first()

    def count_by_course(self, db: Session, *, course_id: int) -> int:
        return db.query(CourseFile).filter(CourseFile.course_id == course_id).count()

    def get_ids_in_course(self, db: Session, *, course_id: int, ids: List[int]) -> List[CourseFile]:
        if not ids:
            return []
        return db.query(CourseFile).filter(CourseFile.course_id == course_id, CourseFile.id.in_(ids)).all()


course_file = CRUDCourseFile(CourseFile)
