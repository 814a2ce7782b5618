from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.constants import CONTENT_EXTENSIONS
from app.schemas.assignment import (
    Assignment,
    AssignmentCreate,
    AssignmentSubmission,
    AssignmentUpdate,
    GradeIn,
    StudentAssignment,
)
from app.schemas.response import APIResponse, DownloadLink
from app.schemas.user import CurrentUser
from app.services.assignment import assignment_service
from app.services.storage import StorageService
from app.utils import deps
from app.utils.uploads import read_optional_upload, read_upload

router = APIRouter()


@router.get("/courses/{course_id}/assignments", response_model=APIResponse[List[Assignment]])
def list_course_assignments(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    assignments = assignment_service.list_for_course(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="Assignments retrieved successfully", data=[Assignment.model_validate(a) for a in assignments])


@router.get("/courses/{course_id}/assignments/student", response_model=APIResponse[List[StudentAssignment]])
def list_student_assignments(
    course_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.require_student)
):
    assignments = assignment_service.list_for_student(db, course_id=course_id, current_user=current_user)
    return APIResponse(message="Assignments retrieved successfully", data=assignments)


@router.post("/courses/{course_id}/assignments", response_model=APIResponse[Assignment], status_code=status.HTTP_201_CREATED)
async def create_assignment(
    course_id: int,
    title: str = Form(..., min_length=1),
    total_marks: int = Form(..., gt=0),
    due_date: datetime = Form(...),
    description: str = Form(""),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    assignment_in = AssignmentCreate(title=title, description=description, total_marks=total_marks, due_date=due_date)
    attachment = await read_optional_upload(file, allowed_extensions=CONTENT_EXTENSIONS, max_bytes=storage.max_content_bytes)
    assignment = assignment_service.create_assignment(
        db, storage=storage, course_id=course_id, assignment_in=assignment_in, attachment=attachment,
        current_user=current_user
    )
    return APIResponse(message="Assignment created successfully", data=Assignment.model_validate(assignment))


@router.get("/assignments/{assignment_id}", response_model=APIResponse[Assignment])
def read_assignment(
    assignment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    assignment = assignment_service.get_for_user(db, assignment_id=assignment_id, current_user=current_user)
    return APIResponse(message="Assignment retrieved successfully", data=Assignment.model_validate(assignment))


@router.get("/assignments/{assignment_id}/download", response_model=APIResponse[DownloadLink])
def download_assignment(
    assignment_id: int,
    db: Session = Depends(deps.get_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    link = assignment_service.get_download_link(db, storage=storage, assignment_id=assignment_id, current_user=current_user)
    return APIResponse(message="Download link generated", data=link)


@router.put("/assignments/{assignment_id}", response_model=APIResponse[Assignment])
async def update_assignment(
    assignment_id: int,
    title: Optional[str] = Form(None, min_length=1),
    total_marks: Optional[int] = Form(None, gt=0),
    due_date: Optional[datetime] = Form(None),
    description: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    assignment_in = AssignmentUpdate(title=title, description=description, total_marks=total_marks, due_date=due_date)
    attachment = await read_optional_upload(file, allowed_extensions=CONTENT_EXTENSIONS, max_bytes=storage.max_content_bytes)
    assignment = assignment_service.update_assignment(
        db, storage=storage, assignment_id=assignment_id, assignment_in=assignment_in, attachment=attachment,
        current_user=current_user
    )
    return APIResponse(message="Assignment updated successfully", data=Assignment.model_validate(assignment))


@router.delete("/assignments/{assignment_id}", response_model=APIResponse[Assignment])
def delete_assignment(
    assignment_id: int,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    deleted = assignment_service.delete_assignment(db, assignment_id=assignment_id, current_user=current_user)
    return APIResponse(message="Assignment deleted successfully", data=deleted)


@router.get("/assignments/{assignment_id}/submissions", response_model=APIResponse[List[AssignmentSubmission]])
def list_assignment_submissions(
    assignment_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    submissions = assignment_service.list_submissions(db, assignment_id=assignment_id, current_user=current_user)
    return APIResponse(
        message="Submissions retrieved successfully",
        data=[AssignmentSubmission.model_validate(s) for s in submissions]
    )


@router.post(
    "/assignments/{assignment_id}/submissions",
    response_model=APIResponse[AssignmentSubmission],
    status_code=status.HTTP_201_CREATED
)
async def submit_assignment(
    assignment_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.require_student)
):
    upload = await read_upload(file, allowed_extensions=CONTENT_EXTENSIONS, max_bytes=storage.max_content_bytes)
    submission = assignment_service.submit(
        db, storage=storage, assignment_id=assignment_id, upload=upload, current_user=current_user
    )
    return APIResponse(message="Submission created successfully", data=AssignmentSubmission.model_validate(submission))


@router.put("/assignment-submissions/{submission_id}/grade", response_model=APIResponse[AssignmentSubmission])
def grade_submission(
    *,
    submission_id: int,
    grade_in: GradeIn,
    db: Session = Depends(deps.get_transactional_db),
    current_user: CurrentUser = Depends(deps.require_instructor)
):
    submission = assignment_service.grade(db, submission_id=submission_id, marks=grade_in.marks, current_user=current_user)
    return APIResponse(message="Submission graded successfully", data=AssignmentSubmission.model_validate(submission))


@router.get("/assignment-submissions/{submission_id}/download", response_model=APIResponse[DownloadLink])
def download_submission(
    submission_id: int,
    db: Session = Depends(deps.get_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    link = assignment_service.get_submission_download_link(
        db, storage=storage, submission_id=submission_id, current_user=current_user
    )
    return APIResponse(message="Download link generated", data=link)
