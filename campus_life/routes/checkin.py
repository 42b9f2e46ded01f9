"""
Daily check-in route.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from campus_life.auth import get_current_user_id
from campus_life.database import get_db
from campus_life.exceptions import (
    DatabaseException,
    DuplicateCheckinException,
    UnauthorizedAccessException,
    UserNotFoundException,
)
from campus_life.schemas import CheckinResponse, UserActionRequest
from campus_life.services.checkin_service import CheckinService

router = APIRouter(prefix="/api/checkin", tags=["checkin"])


@router.post("", response_model=CheckinResponse)
def check_in(
    data: UserActionRequest,
    db: Session = Depends(get_db),
    caller_id: int = Depends(get_current_user_id)
):
    """Check in for today: +10 XP and streak update"""
    try:
        return CheckinService(db).check_in(data.user_id, caller_id)
    except UnauthorizedAccessException as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except UserNotFoundException as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except DuplicateCheckinException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DatabaseException as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
