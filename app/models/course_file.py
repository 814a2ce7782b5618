from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum, func
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.core.constants import ContentTypeEnum

class CourseFile(Base):
    __tablename__ = "course_files"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    file_name = Column(String, nullable=False)
    file_url = Column(String, nullable=False)
    public_id = Column(String, nullable=True)
    resource_type = Column(String, nullable=False, default="raw")
    content_type = Column(Enum(ContentTypeEnum), nullable=False, default=ContentTypeEnum.FILE)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    course = relationship("Course", back_populates="files")
    uploader = relationship("User")

    @property
    def file_format(self):
        return self.file_name.rsplit(".", 1)[-1].lower() if "." in self.file_name else None
