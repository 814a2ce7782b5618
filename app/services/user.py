import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core.constants import StorageFolderEnum
from app.crud.user import user as crud_user
from app.models.user import User
from app.schemas.user import CurrentUser, UserUpdate
from app.services.storage import StorageService
from app.utils.uploads import IncomingFile

logger = logging.getLogger(__name__)


class UserService:

    def get_user(self, db: Session, *, user_id: int) -> User:
        user = crud_user.get(db, id=user_id)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def update_profile(self, db: Session, *, user_in: UserUpdate, current_user: CurrentUser) -> User:
        user = self.get_user(db, user_id=current_user.id)

        if user_in.email and user_in.email != user.email:
            existing = crud_user.get_by_email(db, email=user_in.email)
            if existing and existing.id != user.id:
                raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already taken")

        try:
            return crud_user.update(db, db_obj=user, obj_in=user_in)
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already taken")

    def update_profile_picture(
        self, db: Session, *, storage: StorageService, picture: IncomingFile, current_user: CurrentUser
    ) -> User:
        user = self.get_user(db, user_id=current_user.id)
        stored = storage.upload_image(picture.content, folder=StorageFolderEnum.PROFILE_PICS.value)
        logger.info(f"User {user.id} changed profile picture")
        return crud_user.update(db, db_obj=user, obj_in={"profile_pic": stored.url})


user_service = UserService()
