from typing import List, Optional
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.assignment import Assignment, AssignmentSubmission
from app.schemas.assignment import AssignmentCreate, AssignmentUpdate


class CRUDAssignment(CRUDBase[Assignment, AssignmentCreate, AssignmentUpdate]):

    def get_by_course(self, db: Session, *, course_id: int) -> List[Assignment]:
        return db.query(Assignment).filter(Assignment.course_id == course_id).order_by(Assignment.due_date, Assignment.id).all()


class CRUDAssignmentSubmission(CRUDBase[AssignmentSubmission, AssignmentCreate, AssignmentUpdate]):

    def get_by_assignment(self, db: Session, *, assignment_id: int) -> List[AssignmentSubmission]:
        return (
            db.query(AssignmentSubmission)
            .filter(AssignmentSubmission.assignment_id == assignment_id)
            .order_by(AssignmentSubmission.submitted_on.desc())
            .all()
        )

    def get_latest_for_student(self, db: Session, *, assignment_id: int, student_id: int) -> Optional[AssignmentSubmission]:
        return (
            db.query(AssignmentSubmission)
            .filter(
                AssignmentSubmission.assignment_id == assignment_id,
                AssignmentSubmission.student_id == student_id
            )
            .order_by(AssignmentSubmission.submitted_on.desc(), AssignmentSubmission.id.desc())
            .first()
        )


assignment = CRUDAssignment(Assignment)
assignment_submission = CRUDAssignmentSubmission(AssignmentSubmission)
