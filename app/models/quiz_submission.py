from sqlalchemy import Column, Integer, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base

class QuizSubmission(Base):
    __tablename__ = "quiz_submissions"

    id = Column(Integer, primary_key=True, index=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    answers = Column(JSON, nullable=False, default=list)  # [{question_id, selected_option_id}]
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    submitted_on = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint('quiz_id', 'user_id', name='unique_quiz_user_submission'),
    )

    quiz = relationship("Quiz", back_populates="submissions")
