from pydantic import BaseModel, EmailStr, field_validator, ConfigDict, model_validator
from typing import Optional, Any, List
from datetime import datetime

from app.core.constants import RoleEnum

class UserBase(BaseModel):
    """Base user schema with common fields."""
    name: str
    email: EmailStr
    phone: Optional[str] = None
    bio: Optional[str] = ""

class UserCreate(UserBase):
    """Signup payload; ``confirm_password`` must repeat ``password``."""
    password: str
    confirm_password: str
    role: RoleEnum

    @field_validator("name")
    def name_not_empty(cls, v):
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        return v

class UserUpdate(BaseModel):
    """Schema for updating a user's profile."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    bio: Optional[str] = None

    @field_validator("name")
    def not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name cannot be empty")
        return v

    @model_validator(mode='before')
    @classmethod
    def at_least_one_value(cls, data: Any):
        if isinstance(data, dict) and not any(v is not None for v in data.values()):
            raise ValueError("At least one field must be provided for update")
        return data

class User(BaseModel):
    """Public profile of a user."""
    id: int
    name: str
    email: EmailStr
    role: RoleEnum
    phone: Optional[str] = None
    bio: Optional[str] = ""
    profile_pic: Optional[str] = None
    enrolled_courses: List[int] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CurrentUser(BaseModel):
    """The authenticated caller, resolved from the bearer token."""
    id: int
    role: RoleEnum
    name: str
    email: str
    enrolled_courses: List[int] = []

    model_config = ConfigDict(from_attributes=True)
