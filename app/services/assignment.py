import logging
from datetime import datetime, timezone
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.core.constants import StorageFolderEnum
from app.crud.assignment import assignment as crud_assignment, assignment_submission as crud_assignment_submission
from app.models.assignment import Assignment, AssignmentSubmission
from app.schemas.assignment import (
    AssignmentCreate,
    AssignmentUpdate,
    Assignment as AssignmentSchema,
    AssignmentSubmission as AssignmentSubmissionSchema,
    StudentAssignment,
)
from app.schemas.response import DownloadLink
from app.schemas.user import CurrentUser
from app.services.course import course_service
from app.services.storage import StorageService
from app.utils.permission import PermissionHelper as permission_helper
from app.utils.uploads import IncomingFile

logger = logging.getLogger(__name__)


class AssignmentService:

    def get_assignment(self, db: Session, *, assignment_id: int) -> Assignment:
        assignment = crud_assignment.get(db, id=assignment_id)
        if not assignment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Assignment not found")
        return assignment

    def _get_owned_assignment(self, db: Session, *, assignment_id: int, current_user: CurrentUser) -> Assignment:
        assignment = self.get_assignment(db, assignment_id=assignment_id)
        course_service.get_owned_course(db, course_id=assignment.course_id, current_user=current_user)
        return assignment

    def _get_submission(self, db: Session, *, submission_id: int) -> AssignmentSubmission:
        submission = crud_assignment_submission.get(db, id=submission_id)
        if not submission:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
        return submission

    def list_for_course(self, db: Session, *, course_id: int, current_user: CurrentUser) -> List[Assignment]:
        course = course_service.get_course(db, course_id=course_id)
        permission_helper.require_course_access(current_user, course)
        return crud_assignment.get_by_course(db, course_id=course.id)

    def list_for_student(self, db: Session, *, course_id: int, current_user: CurrentUser) -> List[StudentAssignment]:
        course = course_service.get_course(db, course_id=course_id)
        permission_helper.require_enrollment(current_user, course.id)

        result = []
        for assignment in crud_assignment.get_by_course(db, course_id=course.id):
            submission = crud_assignment_submission.get_latest_for_student(
                db, assignment_id=assignment.id, student_id=current_user.id
            )
            result.append(StudentAssignment(
                **AssignmentSchema.model_validate(assignment).model_dump(),
                submission=AssignmentSubmissionSchema.model_validate(submission) if submission else None,
            ))
        return result

    def create_assignment(
        self,
        db: Session,
        *,
        storage: StorageService,
        course_id: int,
        assignment_in: AssignmentCreate,
        attachment: Optional[IncomingFile],
        current_user: CurrentUser
    ) -> Assignment:
        course = course_service.get_owned_course(db, course_id=course_id, current_user=current_user)

        assignment_data = assignment_in.model_dump()
        assignment_data["course_id"] = course.id
        if attachment:
            stored = storage.upload(attachment.content, folder=StorageFolderEnum.ASSIGNMENTS.value)
            assignment_data.update(
                file_url=stored.url,
                file_public_id=stored.public_id,
                file_resource_type=stored.resource_type,
                file_format=attachment.extension,
            )

        new_assignment = crud_assignment.create(db, obj_in=assignment_data)
        logger.info(f"Instructor {current_user.id} created assignment {new_assignment.id} in course {course.id}")
        return new_assignment

    def get_for_user(self, db: Session, *, assignment_id: int, current_user: CurrentUser) -> Assignment:
        assignment = self.get_assignment(db, assignment_id=assignment_id)
        course = course_service.get_course(db, course_id=assignment.course_id)
        permission_helper.require_course_access(current_user, course)
        return assignment

    def get_download_link(
        self, db: Session, *, storage: StorageService, assignment_id: int, current_user: CurrentUser
    ) -> DownloadLink:
        assignment = self.get_for_user(db, assignment_id=assignment_id, current_user=current_user)
        if not assignment.file_public_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No assignment file available")

        url = storage.signed_download_url(
            assignment.file_public_id, assignment.file_format, resource_type=assignment.file_resource_type or "raw"
        )
        return DownloadLink(url=url, expires_in=storage.signed_url_ttl)

    def update_assignment(
        self,
        db: Session,
        *,
        storage: StorageService,
        assignment_id: int,
        assignment_in: AssignmentUpdate,
        attachment: Optional[IncomingFile],
        current_user: CurrentUser
    ) -> Assignment:
        assignment = self._get_owned_assignment(db, assignment_id=assignment_id, current_user=current_user)

        update_data = assignment_in.model_dump(exclude_unset=True, exclude_none=True)
        previous_file = None
        if attachment:
            stored = storage.upload(attachment.content, folder=StorageFolderEnum.ASSIGNMENTS.value)
            if assignment.file_public_id:
                previous_file = (assignment.file_public_id, assignment.file_resource_type or "raw")
            update_data.update(
                file_url=stored.url,
                file_public_id=stored.public_id,
                file_resource_type=stored.resource_type,
                file_format=attachment.extension,
            )

        updated = crud_assignment.update(db, db_obj=assignment, obj_in=update_data)
        if previous_file:
            storage.destroy(previous_file[0], resource_type=previous_file[1])
        return updated

    def delete_assignment(self, db: Session, *, assignment_id: int, current_user: CurrentUser) -> AssignmentSchema:
        assignment = self._get_owned_assignment(db, assignment_id=assignment_id, current_user=current_user)
        deleted = AssignmentSchema.model_validate(assignment)
        crud_assignment.delete(db, id=assignment.id)
        logger.info(f"Instructor {current_user.id} deleted assignment {assignment_id} with its submissions")
        return deleted

    def list_submissions(
        self, db: Session, *, assignment_id: int, current_user: CurrentUser
    ) -> List[AssignmentSubmission]:
        assignment = self._get_owned_assignment(db, assignment_id=assignment_id, current_user=current_user)
        return crud_assignment_submission.get_by_assignment(db, assignment_id=assignment.id)

    def submit(
        self,
        db: Session,
        *,
        storage: StorageService,
        assignment_id: int,
        upload: IncomingFile,
        current_user: CurrentUser
    ) -> AssignmentSubmission:
        assignment = self.get_assignment(db, assignment_id=assignment_id)
        permission_helper.require_enrollment(current_user, assignment.course_id)

        stored = storage.upload(upload.content, folder=StorageFolderEnum.SUBMISSIONS.value, resource_type="raw")
        submission = crud_assignment_submission.create(db, obj_in={
            "assignment_id": assignment.id,
            "course_id": assignment.course_id,
            "student_id": current_user.id,
            "student_name": current_user.name,
            "student_email": current_user.email,
            "submitted_on": datetime.now(timezone.utc),
            "file_url": stored.url,
            "public_id": stored.public_id,
            "resource_type": stored.resource_type,
            "file_format": upload.extension,
        }, commit=False)
        assignment.submissions_count = (assignment.submissions_count or 0) + 1
        db.add(assignment)
        db.commit()
        db.refresh(submission)

        logger.info(f"Student {current_user.id} submitted assignment {assignment.id}")
        return submission

    def grade(self, db: Session, *, submission_id: int, marks: int, current_user: CurrentUser) -> AssignmentSubmission:
        submission = self._get_submission(db, submission_id=submission_id)
        assignment = self._get_owned_assignment(db, assignment_id=submission.assignment_id, current_user=current_user)

        if marks > assignment.total_marks:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Marks cannot exceed {assignment.total_marks}"
            )

        graded = crud_assignment_submission.update(db, db_obj=submission, obj_in={"marks": marks})
        logger.info(f"Instructor {current_user.id} graded submission {submission.id}: {marks}/{assignment.total_marks}")
        return graded

    def get_submission_download_link(
        self, db: Session, *, storage: StorageService, submission_id: int, current_user: CurrentUser
    ) -> DownloadLink:
        submission = self._get_submission(db, submission_id=submission_id)
        if submission.student_id != current_user.id:
            course = course_service.get_course(db, course_id=submission.course_id)
            permission_helper.require_course_owner(current_user, course)

        if not submission.public_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File missing storage ID")

        url = storage.signed_download_url(
            submission.public_id, submission.file_format, resource_type=submission.resource_type
        )
        return DownloadLink(url=url, expires_in=storage.signed_url_ttl)


assignment_service = AssignmentService()
