from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from app.core.database import Base

class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    total_marks = Column(Integer, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    submissions_count = Column(Integer, nullable=False, default=0)
    file_url = Column(String, nullable=True)
    file_public_id = Column(String, nullable=True)
    file_resource_type = Column(String, nullable=True)
    file_format = Column(String, nullable=True)

    course = relationship("Course", back_populates="assignments")
    submissions = relationship("AssignmentSubmission", back_populates="assignment", cascade="all, delete-orphan")

class AssignmentSubmission(Base):
    __tablename__ = "assignment_submissions"

    id = Column(Integer, primary_key=True, index=True)
    assignment_id = Column(Integer, ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    student_name = Column(String, nullable=False)
    student_email = Column(String, nullable=False)
    submitted_on = Column(DateTime(timezone=True), nullable=False)
    marks = Column(Integer, nullable=True)
    file_url = Column(String, nullable=True)
    public_id = Column(String, nullable=True)
    resource_type = Column(String, nullable=False, default="raw")
    file_format = Column(String, nullable=True)

    assignment = relationship("Assignment", back_populates="submissions")
