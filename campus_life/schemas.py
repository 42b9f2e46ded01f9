from pydantic import BaseModel, Field, field_validator
from datetime import datetime, date
from typing import List, Optional


# Auth schemas
class RegisterRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=255)
    username: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = Field(None, max_length=128)


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, max_length=128)


class AuthResponse(BaseModel):
    token: str
    user_id: int = Field(..., serialization_alias="userId")
    message: str


# Request body shared by check-in and mission toggle
class UserActionRequest(BaseModel):
    user_id: Optional[int] = Field(None, alias="userId")

    class Config:
        populate_by_name = True

    @field_validator("user_id", mode="before")
    @classmethod
    def ignore_boolean_user_id(cls, value):
        # true/false is not a user id; treated as missing so the owner check fails
        if isinstance(value, bool):
            return None
        return value


# Check-in schemas
class CheckinResponse(BaseModel):
    success: bool = True
    streak: int
    total_xp: int
    last_active_date: datetime
    xp_earned: int


# Mission schemas
class DailyMissionResponse(BaseModel):
    id: int
    name: str
    completed: bool
    xp: int


class MissionToggleResult(BaseModel):
    """Outcome of a toggle decided by the streak engine"""
    completed: bool
    completed_date: Optional[date] = None
    xp_delta: int = 0
    stale_reset: bool = False  # Completion from an earlier day was cleared instead of toggled


class MissionToggleResponse(BaseModel):
    success: bool = True
    completed: bool
    total_xp: int
    xp_earned: int


# User schemas
class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    streak: int
    total_xp: int
    last_active_date: Optional[datetime] = None
    notifications_enabled: bool
    daily_missions: List[DailyMissionResponse] = []


class NotificationsUpdate(BaseModel):
    enabled: bool


class NotificationsResponse(BaseModel):
    success: bool = True
    notifications_enabled: bool
