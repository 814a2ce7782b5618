from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime

class QuizOption(BaseModel):
    text: str = ""
    correct: bool = False

class QuizQuestion(BaseModel):
    q_content: str = ""
    options: List[QuizOption] = []

class QuizCreate(BaseModel):
    title: str = Field(..., min_length=1)
    duration: str = Field(..., pattern=r"^\d{1,2}:[0-5]\d:[0-5]\d$")
    questions: List[QuizQuestion] = []

class QuizUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    duration: Optional[str] = Field(None, pattern=r"^\d{1,2}:[0-5]\d:[0-5]\d$")
    questions: Optional[List[QuizQuestion]] = None

class Quiz(BaseModel):
    id: int
    course_id: int
    instructor_id: int
    title: str
    duration: str
    questions: List[QuizQuestion]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
