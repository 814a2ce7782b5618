import pytest

from app.services.course_progress import calculate_progress


@pytest.mark.parametrize("completed,total,expected", [
    (0, 4, 0),
    (1, 4, 25),
    (3, 4, 75),
    (4, 4, 100),
    (1, 3, 100 / 3),
])
def test_percentage(completed, total, expected):
    assert calculate_progress(completed, total) == pytest.approx(expected)


def test_course_without_content_is_zero():
    assert calculate_progress(0, 0) == 0
