from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class AssignmentBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = ""
    total_marks: int = Field(..., gt=0)
    due_date: datetime

class AssignmentCreate(AssignmentBase):
    pass

class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    total_marks: Optional[int] = Field(None, gt=0)
    due_date: Optional[datetime] = None

class Assignment(AssignmentBase):
    id: int
    course_id: int
    submissions_count: int = 0
    file_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class AssignmentSubmission(BaseModel):
    id: int
    assignment_id: int
    course_id: int
    student_id: int
    student_name: str
    student_email: str
    submitted_on: datetime
    marks: Optional[int] = None
    file_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

class StudentAssignment(Assignment):
    """An assignment with the calling student's own submission, if any."""
    submission: Optional[AssignmentSubmission] = None

class GradeIn(BaseModel):
    marks: int = Field(..., ge=0)
