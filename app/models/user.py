from sqlalchemy import Column, String, Integer, DateTime, Enum, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import RoleEnum

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(RoleEnum), nullable=False)
    phone = Column(String, nullable=True)
    bio = Column(Text, nullable=False, default="")
    profile_pic = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    enrollments = relationship("CourseEnrollment", back_populates="user", cascade="all, delete-orphan")
    taught_courses = relationship("Course", back_populates="instructor")

    @property
    def enrolled_courses(self):
        return [enrollment.course_id for enrollment in self.enrollments]
