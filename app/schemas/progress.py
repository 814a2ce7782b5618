from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class CourseProgress(BaseModel):
    id: int
    user_id: int
    course_id: int
    progress: float
    user_rating: float
    feedback: str
    completed_contents: List[int] = Field(default_factory=list, validation_alias="completed_content_ids")
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class CourseProgressUpsert(BaseModel):
    """Direct overwrite of a progress record. Range checks happen in the service."""
    user_id: int
    course_id: int
    progress: Optional[float] = None
    user_rating: Optional[float] = None
    feedback: Optional[str] = None
    completed_contents: Optional[List[int]] = None

class ToggleContentComplete(BaseModel):
    user_id: int
    course_id: int
    content_id: int

class CourseFeedback(BaseModel):
    user_rating: float
    feedback: str
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class ToggleFileComplete(BaseModel):
    file_id: int
    course_id: int

class FileProgress(BaseModel):
    id: int
    user_id: int
    file_id: int
    course_id: int
    is_completed: bool
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
