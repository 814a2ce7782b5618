from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from app.core.constants import IMAGE_EXTENSIONS
from app.core.security import TokenService
from app.schemas.auth import LoginResponse, UserLogin
from app.schemas.response import APIResponse
from app.schemas.user import CurrentUser, User, UserCreate, UserUpdate
from app.services.auth import auth_service
from app.services.storage import StorageService
from app.services.user import user_service
from app.utils import deps
from app.utils.uploads import read_upload

router = APIRouter()


@router.post("/signup", response_model=APIResponse[User], status_code=status.HTTP_201_CREATED)
def signup(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate
):
    new_user = auth_service.signup(db, user_in=user_in)
    return APIResponse(message="Registration successful!", data=User.model_validate(new_user))


@router.post("/signin", response_model=APIResponse[LoginResponse])
def signin(
    *,
    db: Session = Depends(deps.get_db),
    token_service: TokenService = Depends(deps.get_token_service),
    credentials: UserLogin
):
    login = auth_service.signin(
        db, token_service=token_service, email=credentials.email, password=credentials.password
    )
    return APIResponse(message="Signed in successfully", data=login)


@router.get("/user/{user_id}", response_model=APIResponse[User])
def read_user(
    user_id: int,
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    user = user_service.get_user(db, user_id=user_id)
    return APIResponse(message="User retrieved successfully", data=User.model_validate(user))


@router.get("/profile", response_model=APIResponse[User])
def read_profile(
    db: Session = Depends(deps.get_db),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    user = user_service.get_user(db, user_id=current_user.id)
    return APIResponse(message="Profile retrieved successfully", data=User.model_validate(user))


@router.put("/profile", response_model=APIResponse[User])
def update_profile(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserUpdate,
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    user = user_service.update_profile(db, user_in=user_in, current_user=current_user)
    return APIResponse(message="Profile updated successfully", data=User.model_validate(user))


@router.put("/profile/picture", response_model=APIResponse[User])
async def update_profile_picture(
    profile_pic: UploadFile = File(...),
    db: Session = Depends(deps.get_transactional_db),
    storage: StorageService = Depends(deps.get_storage),
    current_user: CurrentUser = Depends(deps.get_current_user)
):
    picture = await read_upload(profile_pic, allowed_extensions=IMAGE_EXTENSIONS, max_bytes=storage.max_image_bytes)
    user = user_service.update_profile_picture(db, storage=storage, picture=picture, current_user=current_user)
    return APIResponse(message="Profile picture updated successfully", data=User.model_validate(user))
