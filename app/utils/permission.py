from fastapi import HTTPException, status

from app.models.course import Course
from app.schemas.user import CurrentUser
from app.core.constants import RoleEnum


class PermissionHelper:
    @staticmethod
    def is_enrolled(user: CurrentUser, course_id: int) -> bool:
        return course_id in user.enrolled_courses

    @staticmethod
    def is_course_owner(user: CurrentUser, course: Course) -> bool:
        return course.instructor_id == user.id

    @staticmethod
    def can_view_course_content(user: CurrentUser, course: Course) -> bool:
        match user.role:
            case RoleEnum.INSTRUCTOR:
                # Instructors may browse any course's material
                return True
            case RoleEnum.STUDENT:
                return PermissionHelper.is_enrolled(user, course.id)

    @staticmethod
    def require_course_access(user: CurrentUser, course: Course):
        if not PermissionHelper.can_view_course_content(user, course):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enrolled in this course"
            )

    @staticmethod
    def require_enrollment(user: CurrentUser, course_id: int):
        if not PermissionHelper.is_enrolled(user, course_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enrolled in this course"
            )

    @staticmethod
    def require_course_owner(user: CurrentUser, course: Course):
        if not PermissionHelper.is_course_owner(user, course):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Unauthorized: You are not the instructor of this course"
            )

    @staticmethod
    def require_self(user: CurrentUser, user_id: int):
        if user.id != user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You can only access your own records"
            )

