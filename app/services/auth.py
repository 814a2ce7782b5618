import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.crud.user import user as crud_user
from app.core.security import TokenService, get_password_hash, verify_password
from app.models.user import User
from app.schemas.auth import LoginResponse
from app.schemas.user import UserCreate, User as UserSchema

logger = logging.getLogger(__name__)


class AuthService:
    def signup(self, db: Session, *, user_in: UserCreate) -> User:
        if user_in.password != user_in.confirm_password:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")

        if crud_user.get_by_email(db, email=user_in.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already taken")

        user_data = user_in.model_dump(exclude={"password", "confirm_password"})
        user_data["bio"] = user_data.get("bio") or ""
        user_data["hashed_password"] = get_password_hash(user_in.password)
        try:
            new_user = crud_user.create(db, obj_in=user_data)
        except IntegrityError:
            db.rollback()
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already taken")

        logger.info(f"New {new_user.role.value} registered: user_id={new_user.id}")
        return new_user

    def signin(self, db: Session, *, token_service: TokenService, email: str, password: str) -> LoginResponse:
        user = crud_user.get_by_email(db, email=email)
        if not user or not verify_password(password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        token = token_service.issue({
            "id": user.id,
            "role": user.role.value,
            "name": user.name,
            "email": user.email,
        })
        return LoginResponse(token=token, user=UserSchema.model_validate(user))


auth_service = AuthService()
