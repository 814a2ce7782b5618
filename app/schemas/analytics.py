from pydantic import BaseModel, ConfigDict, Field
from typing import List

class CourseRevenue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    course_id: int = Field(..., alias="courseId")
    title: str
    price: float
    enrollment_count: int = Field(..., alias="enrollmentCount")
    revenue: float

class InstructorAnalytics(BaseModel):
    total_students: int = Field(0, alias="totalStudents")
    average_rating: float = Field(0, alias="averageRating")
    total_revenue: float = Field(0, alias="totalRevenue")
    course_count: int = Field(0, alias="courseCount")
    courses: List[CourseRevenue] = []

    model_config = ConfigDict(populate_by_name=True)
