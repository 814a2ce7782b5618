from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    price = Column(Float, nullable=False, default=0)
    duration_weeks = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    image_public_id = Column(String, nullable=True)

    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    instructor_name = Column(String, nullable=False)
    instructor_email = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    instructor = relationship("User", back_populates="taught_courses")
    enrollments = relationship("CourseEnrollment", back_populates="course", cascade="all, delete-orphan")
    files = relationship("CourseFile", back_populates="course", cascade="all, delete-orphan")
    quizzes = relationship("Quiz", back_populates="course", cascade="all, delete-orphan")
    assignments = relationship("Assignment", back_populates="course", cascade="all, delete-orphan")

    @property
    def enrollment_count(self):
        return len(self.enrollments)
