from typing import List
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.quiz import Quiz
from app.schemas.quiz import QuizCreate, QuizUpdate


class CRUDQuiz(CRUDBase[Quiz, QuizCreate, QuizUpdate]):

    def get_by_course(self, db: Session, *, course_id: int) -> List[Quiz]:
        return db.query(Quiz).filter(Quiz.course_id == course_id).order_by(Quiz.id).all()


quiz = CRUDQuiz(Quiz)
