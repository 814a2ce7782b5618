from sqlalchemy import Column, Integer, Float, Text, DateTime, ForeignKey, Table, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base

course_progress_completed_contents = Table(
    "course_progress_completed_contents",
    Base.metadata,
    Column("course_progress_id", Integer, ForeignKey("course_progress.id", ondelete="CASCADE"), primary_key=True),
    Column("file_id", Integer, ForeignKey("course_files.id", ondelete="CASCADE"), primary_key=True),
)

class CourseProgress(Base):
    __tablename__ = "course_progress"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    progress = Column(Float, nullable=False, default=0)
    user_rating = Column(Float, nullable=False, default=0)
    feedback = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', 'course_id', name='unique_user_course_progress'),
    )

    completed_contents = relationship("CourseFile", secondary=course_progress_completed_contents)

    @property
    def completed_content_ids(self):
        return sorted(content.id for content in self.completed_contents)
