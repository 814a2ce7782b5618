from enum import Enum


class RoleEnum(str, Enum):
    STUDENT = "student"
    INSTRUCTOR = "instructor"

class ContentTypeEnum(str, Enum):
    FILE = "file"
    PDF = "pdf"
    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    DOCUMENT = "document"
    EBOOK = "ebook"

class StorageFolderEnum(str, Enum):
    PROFILE_PICS = "profile_pics"
    COURSE_IMAGES = "course-images"
    COURSE_FILES = "course_files"
    ASSIGNMENTS = "assignments"
    SUBMISSIONS = "submissions"


IMAGE_EXTENSIONS = {"jpeg", "jpg", "png", "gif", "webp"}
CONTENT_EXTENSIONS = {
    "jpeg", "jpg", "png", "gif", "pdf", "mp4", "mp3",
    "ppt", "pptx", "xls", "xlsx", "doc", "docx", "txt",
}
