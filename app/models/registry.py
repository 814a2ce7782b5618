# Import every model so Base.metadata is complete for create_all and Alembic autogenerate.
from app.models.user import User  # noqa: F401
from app.models.course import Course  # noqa: F401
from app.models.course_enrollment import CourseEnrollment  # noqa: F401
from app.models.course_file import CourseFile  # noqa: F401
from app.models.quiz import Quiz  # noqa: F401
from app.models.quiz_submission import QuizSubmission  # noqa: F401
from app.models.assignment import Assignment, AssignmentSubmission  # noqa: F401
from app.models.course_progress import CourseProgress, course_progress_completed_contents  # noqa: F401
from app.models.file_progress import FileProgress  # noqa: F401
