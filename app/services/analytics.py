import logging
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Session

from app.crud.course import course as crud_course
from app.crud.course_progress import course_progress as crud_progress
from app.schemas.analytics import CourseRevenue, InstructorAnalytics
from app.schemas.user import CurrentUser

logger = logging.getLogger(__name__)


class AnalyticsService:

    def get_instructor_analytics(self, db: Session, *, current_user: CurrentUser) -> InstructorAnalytics:
        courses = crud_course.get_by_instructor(db, instructor_id=current_user.id)
        if not courses:
            return InstructorAnalytics()

        course_ids = [c.id for c in courses]
        enrollment_counts = crud_course.get_student_enrollment_counts(db, course_ids=course_ids)

        breakdown = []
        for course in courses:
            count = enrollment_counts.get(course.id, 0)
            breakdown.append(CourseRevenue(
                course_id=course.id,
                title=course.title,
                price=course.price or 0,
                enrollment_count=count,
                revenue=(course.price or 0) * count,
            ))

        ratings = crud_progress.get_positive_ratings(db, course_ids=course_ids)
        average_rating = _round_half_up(sum(ratings) / len(ratings)) if ratings else 0

        return InstructorAnalytics(
            total_students=crud_course.count_distinct_students(db, course_ids=course_ids),
            average_rating=average_rating,
            total_revenue=sum(item.revenue for item in breakdown),
            course_count=len(courses),
            courses=breakdown,
        )


def _round_half_up(value: float) -> float:
    # 2.25 -> 2.3, where round() would give 2.2
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


analytics_service = AnalyticsService()
