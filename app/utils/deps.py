from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.constants import RoleEnum
from app.core.context import AppContext
from app.core.security import TokenService
from app.crud.user import user as user_crud
from app.schemas.token import TokenPayload
from app.schemas.user import CurrentUser
from app.services.storage import StorageService

# Missing credentials are reported as 401 by get_current_user, not 403 by HTTPBearer
http_bearer = HTTPBearer(auto_error=False)


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_token_service(context: AppContext = Depends(get_app_context)) -> TokenService:
    return context.token_service


def get_storage(context: AppContext = Depends(get_app_context)) -> StorageService:
    return context.storage


def get_db(context: AppContext = Depends(get_app_context)):
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_transactional_db(context: AppContext = Depends(get_app_context)):
    db = context.session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
    token_service: TokenService = Depends(get_token_service),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")

    try:
        payload = token_service.verify(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

    try:
        token_data = TokenPayload(**payload)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")

    user = user_crud.get(db, id=token_data.id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return CurrentUser.model_validate(user)


def require_role(role: RoleEnum):
    """Dependency factory that lets through only callers holding ``role``."""
    detail = "Instructor access only" if role == RoleEnum.INSTRUCTOR else "Student access only"

    def _verify_role(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role != role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
        return current_user
    return _verify_role


require_instructor = require_role(RoleEnum.INSTRUCTOR)
require_student = require_role(RoleEnum.STUDENT)
