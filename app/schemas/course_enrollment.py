from pydantic import BaseModel

class CourseEnrollmentCreate(BaseModel):
    user_id: int
    course_id: int
