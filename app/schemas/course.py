from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class CourseBase(BaseModel):
    title: str = Field(..., min_length=1)
    price: float = Field(0, ge=0)
    duration_weeks: int = Field(1, ge=1)
    description: str = ""

class CourseCreate(CourseBase):
    pass

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    duration_weeks: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None

class Course(CourseBase):
    id: int
    image_url: str = ""
    instructor_id: int
    instructor_name: str
    instructor_email: str
    enrollment_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class EnrolledCourse(Course):
    """A course as seen by an enrolled student, with their progress."""
    progress: float = 0
    completed_contents: list[int] = []
