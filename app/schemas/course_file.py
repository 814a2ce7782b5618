from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from app.core.constants import ContentTypeEnum

class CourseFile(BaseModel):
    id: int
    course_id: int
    file_name: str
    file_url: str
    content_type: ContentTypeEnum
    uploaded_by: int
    uploaded_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
