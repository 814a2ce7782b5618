from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional
from datetime import datetime

class SubmissionAnswer(BaseModel):
    question_id: int = Field(..., ge=0)
    selected_option_id: str

class QuizSubmissionCreate(BaseModel):
    course_id: int
    user_id: Optional[int] = None
    answers: List[SubmissionAnswer] = Field(..., min_length=1)
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    submitted_on: Optional[datetime] = None

    @model_validator(mode="after")
    def score_within_total(self):
        if self.score > self.total_questions:
            raise ValueError("Score cannot exceed total questions")
        return self

class QuizSubmission(BaseModel):
    id: int
    quiz_id: int
    course_id: int
    user_id: int
    answers: List[SubmissionAnswer]
    score: int
    total_questions: int
    submitted_on: datetime

    model_config = ConfigDict(from_attributes=True)
