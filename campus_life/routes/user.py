"""
User profile routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_life.auth import get_current_user_id
from campus_life.database import get_db
from campus_life.exceptions import (
    DatabaseException,
    UnauthorizedAccessException,
    UserNotFoundException,
)
from campus_life.schemas import NotificationsResponse, NotificationsUpdate, UserResponse
from campus_life.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    caller_id: int = Depends(get_current_user_id)
):
    """Get user data and today's missions"""
    try:
        return UserService(db).get_profile(user_id, caller_id)
    except UnauthorizedAccessException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except UserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.patch("/{user_id}/notifications", response_model=NotificationsResponse)
def update_notifications(
    user_id: int,
    data: NotificationsUpdate,
    db: Session = Depends(get_db),
    caller_id: int = Depends(get_current_user_id)
):
    """Turn reminders on or off"""
    try:
        enabled = UserService(db).update_notifications(user_id, caller_id, data.enabled)
    except UnauthorizedAccessException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except UserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return NotificationsResponse(notifications_enabled=enabled)
