from pydantic import BaseModel, EmailStr

from app.schemas.user import User

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: User
