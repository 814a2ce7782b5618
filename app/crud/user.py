from typing import Optional
from sqlalchemy.orm import Session, selectinload

from app.crud.base import CRUDBase
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):

    def get(self, db: Session, id: int) -> Optional[User]:
        return db.query(User).options(selectinload(User.enrollments)).filter(User.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()


user = CRUDUser(User)
